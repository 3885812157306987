"""linkgrab CLI — fetch one page and print a markdown or JSON summary.

Usage:
    python cli/main.py --url https://example.com
    python cli/main.py --url https://example.com --format json
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from linkgrab.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from cli.rendering import OutputFormat, Style, render_page
from linkgrab.config import settings
from linkgrab.log import configure_logging
from linkgrab.scraper import ScraperError, grab_url

app = typer.Typer(
    name="linkgrab",
    help="Fetch a web page and summarise its title, URL, description and language.",
    no_args_is_help=True,
)


@app.command("grab")
def grab(
    url: str = typer.Option(..., "--url", "-u", help="URL to fetch."),
    style: Style = typer.Option(Style.full, "--style", "-s", help="Markdown style: full | link."),
    fmt: OutputFormat = typer.Option(
        OutputFormat.markdown, "--format", "-f", help="Output format: markdown | json."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Request timeout in seconds."
    ),
    user_agent: Optional[str] = typer.Option(
        None, "--user-agent", help="User-Agent header to send."
    ),
    cleanup_tracking: Optional[bool] = typer.Option(
        None,
        "--cleanup-tracking/--no-cleanup-tracking",
        help="Remove tracking query parameters (utm_source, etc.).",
    ),
) -> None:
    """Fetch URL and print its summary to stdout."""
    configure_logging(settings.environment, settings.log_level)

    try:
        page = grab_url(
            url,
            timeout if timeout is not None else settings.request_timeout,
            user_agent or settings.user_agent,
            settings.cleanup_tracking if cleanup_tracking is None else cleanup_tracking,
            tracking_params=settings.tracking_params,
        )
    except ScraperError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(render_page(page, style, fmt))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
def main() -> None:
    app()


if __name__ == "__main__":
    main()
