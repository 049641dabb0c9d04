"""senso update — upgrade the CLI to the latest release."""

from __future__ import annotations

import subprocess
import sys

import httpx
import typer
from rich.markup import escape

from senso.cli import output
from senso.update_check import fetch_latest_release, is_newer
from senso.version import DIST_NAME, get_version

_NOTES_PREVIEW = 500


def update_cmd() -> None:
    """Update the CLI to the latest version."""
    current = get_version()
    output.info(f"Current version: [bold]{current}[/]")
    output.info("Checking for updates...")

    try:
        release = fetch_latest_release()
    except (httpx.HTTPError, ValueError) as exc:
        output.error("Could not check for updates. Try again later.")
        raise typer.Exit(1) from exc

    latest = release["version"]
    if not is_newer(latest, current):
        output.success(f"Already on the latest version ({current}).")
        return

    output.info(f"New version available: [bold]{escape(latest)}[/]")
    output.info("Updating...")
    try:
        subprocess.run(
            [sys.executable, "-m", "pip", "install", "--upgrade", DIST_NAME],
            check=True,
            shell=False,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        output.error("Update failed. Please reinstall manually:")
        output.console.print(f"  [cyan]pip install --upgrade {DIST_NAME}[/]")
        raise typer.Exit(1) from exc

    output.success(f"Updated to v{escape(latest)}.")
    if release["notes"]:
        output.console.print()
        output.dim("Release notes:")
        output.dim(escape(release["notes"][:_NOTES_PREVIEW]))
