"""Logging configuration for senso.

Library modules log through the package logger:

    import logging
    log = logging.getLogger(__name__)

User-facing output never goes through logging — commands print with rich
(see senso.cli.output). Logging is for diagnostics only and stays silent
unless SENSO_LOG_LEVEL is lowered:
    - DEBUG: request tracing, swallowed update-check failures
    - INFO: operational messages
    - WARNING: unexpected but handled situations (default)
"""

import logging
import os
import sys

_PACKAGE_LOGGER = "senso"


def configure_logging() -> None:
    """Attach a stderr handler to the senso package logger.

    Call once at application startup. Subsequent calls are no-ops.
    """
    root_logger = logging.getLogger(_PACKAGE_LOGGER)
    if root_logger.handlers:
        return

    level_name = os.environ.get("SENSO_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt="[%(levelname)s] %(name)s: %(message)s"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    root_logger.propagate = False
