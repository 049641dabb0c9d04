"""senso search — natural-language queries over the knowledge base.

  senso search query QUERY     — AI answer synthesised from matching chunks
  senso search context QUERY   — matching chunks only (no answer, faster)
  senso search content QUERY   — deduplicated content IDs and titles
"""

from __future__ import annotations

from typing import Annotated, Any

import typer
from rich.markup import escape

from senso.cli import output
from senso.cli.output import OutputFormat
from senso.cli.state import get_state, reported_errors

search_app = typer.Typer(
    name="search",
    help="Search the knowledge base with natural language queries.",
    add_completion=False,
)

_MaxResults = Annotated[int, typer.Option("--max-results", help="Maximum number of results.")]

_SNIPPET_TABLE = 80
_SNIPPET_PLAIN = 120


def _search(ctx: typer.Context, path: str, query: str, max_results: int) -> Any:
    state = get_state(ctx)
    with reported_errors(), state.client() as api:
        return api.post(path, {"query": query, "max_results": max_results})


@search_app.command("query")
def search_query_cmd(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search query.")],
    max_results: _MaxResults = 5,
) -> None:
    """Answer a question from the knowledge base, with the supporting results."""
    state = get_state(ctx)
    data = _search(ctx, "/org/search", query, max_results)
    res = data if isinstance(data, dict) else {}
    results: list[dict[str, Any]] = [r for r in res.get("results") or [] if isinstance(r, dict)]

    if state.output == OutputFormat.json or not isinstance(data, dict):
        output.print_json(data)
        return

    if state.output == OutputFormat.table:
        output.print_table(
            [
                {
                    "id": r.get("content_id"),
                    "title": r.get("title"),
                    "text": str(r.get("chunk_text") or "")[:_SNIPPET_TABLE],
                }
                for r in results
            ],
            ["id", "title", "text"],
        )
        return

    output.console.print()
    if res.get("answer"):
        output.console.print(f"  [bold]Answer:[/] {escape(str(res['answer']))}\n")
    for i, r in enumerate(results, start=1):
        title = escape(str(r.get("title") or "Untitled"))
        snippet = escape(str(r.get("chunk_text") or "")[:_SNIPPET_PLAIN])
        output.console.print(f"  [dim]{i}.[/] [bold]{title}[/]")
        output.console.print(f"     {snippet}")
        output.console.print(f"     [dim]ID: {escape(str(r.get('content_id')))}[/]")
    output.console.print()


@search_app.command("context")
def search_context_cmd(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search query.")],
    max_results: _MaxResults = 5,
) -> None:
    """Return matching content chunks only, without answer generation."""
    output.print_json(_search(ctx, "/org/search/context", query, max_results))


@search_app.command("content")
def search_content_cmd(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search query.")],
    max_results: _MaxResults = 5,
) -> None:
    """Return deduplicated content IDs and titles only."""
    output.print_json(_search(ctx, "/org/search/content", query, max_results))
