"""Page Analyzer CLI: entry-point for one-off analyses and the API server.

Usage:
    python cli/main.py --help

Commands:
    analyze   → fetch one page and print its analysis
    serve     → run the HTTP API under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from pageanalyzer.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from pageanalyzer.config import settings
from pageanalyzer.errors import AnalysisError
from pageanalyzer.logger import configure_logging
from pageanalyzer.service import analyze_page

app = typer.Typer(
    name="pageanalyzer",
    help="Web page structure and link analyzer.",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Web page structure and link analyzer."""
    # stdout carries command output; keep log lines off it.
    configure_logging(stream=sys.stderr)


@app.command("analyze")
def analyze(
    url: str = typer.Argument(..., help="URL of the page to analyse."),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Overall deadline in seconds (default: ANALYSIS_TIMEOUT)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Analyse a single page and print the result."""
    if not as_json:
        typer.echo(f"[analyze] Fetching {url!r} …")
    try:
        result = analyze_page(url, timeout=timeout)
    except AnalysisError as exc:
        typer.echo(f"[analyze] Analysis failed: {exc}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    typer.echo(f"[analyze] HTML version : {result.html_version or '(unknown)'}")
    typer.echo(f"[analyze] Title        : {result.title or '(none)'}")
    if result.headings:
        counts = "  ".join(f"{tag}={n}" for tag, n in sorted(result.headings.items()))
        typer.echo(f"[analyze] Headings     : {counts}")
    else:
        typer.echo("[analyze] Headings     : (none)")
    typer.echo(f"[analyze] Login form   : {'yes' if result.has_login_form else 'no'}")
    typer.echo(
        f"[analyze] Internal     : {result.internal_links_count} "
        f"({result.inaccessible_internal_links_count} inaccessible)"
    )
    typer.echo(
        f"[analyze] External     : {result.external_links_count} "
        f"({result.inaccessible_external_links_count} inaccessible)"
    )


@app.command("serve")
def serve(
    host: str = typer.Option(settings.host, help="Interface to bind."),
    port: int = typer.Option(settings.port, help="Port to listen on."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    typer.echo(f"[serve] Listening on http://{host}:{port}")
    uvicorn.run("pageanalyzer.api.app:app", host=host, port=port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
