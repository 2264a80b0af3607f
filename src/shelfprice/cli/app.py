"""CLI entry point for shelfprice.

Config precedence: settings.default.toml -> settings.local.toml -> env vars (SHELFPRICE_* with double underscores) -> CLI flags.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

try:
    from importlib.metadata import version

    VERSION = version("shelfprice")
except Exception:
    VERSION = "unknown"

APP_HELP = (
    "shelfprice — open a product page, switch the storefront region, "
    "save a screenshot and the price/rating/review fields to a text file."
)

USAGE = "Usage: shelfprice <product_url> <region>"

app = typer.Typer(add_completion=False, help=APP_HELP)
console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"shelfprice {VERSION}")
        raise typer.Exit()


@app.command()
def scrape(
    url: Optional[str] = typer.Argument(None, help="Product page URL."),
    region: Optional[str] = typer.Argument(None, help="Part of the region name to select, e.g. 'Москва'."),
    screenshot: Optional[Path] = typer.Option(None, "--screenshot", "-s", help="Screenshot file path."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Product data file path."),
    headful: bool = typer.Option(False, "--headful", help="Show the browser window."),
    timeout: Optional[int] = typer.Option(None, "--timeout", min=1, help="Per-step timeout in milliseconds."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Scrape one product page for one region."""
    if not url or not region:
        err_console.print(USAGE, markup=False, highlight=False)
        raise typer.Exit(code=1)

    from shelfprice.scraper import ProductScraper
    from shelfprice.settings import get_settings

    try:
        settings = get_settings().model_copy(deep=True)
    except Exception as e:
        err_console.print(f"[red]✗[/red] Invalid settings: {e}")
        raise typer.Exit(code=1)

    if screenshot:
        settings.output.screenshot_path = str(screenshot)
    if output:
        settings.output.product_path = str(output)
    if headful:
        settings.browser.headless = False
    if timeout:
        settings.browser.timeout_ms = timeout

    _configure_logging(log_level or settings.log_level, settings.env)

    result = ProductScraper(url, region, settings=settings).run()

    if not result.success:
        # Failures are logged and reported; only missing arguments change the exit status.
        err_console.print(f"[red]✗[/red] Scrape failed: {result.error}")
        return

    if not result.region_selected:
        console.print(f"[yellow]⚠[/yellow] Region matching '{region}' not found; page kept its current region.")

    table = Table(title="Product", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in result.snapshot.to_dict().items():
        table.add_row(key, value)
    console.print(table)
    console.print(f"[green]✓[/green] Screenshot: {result.screenshot_path}")
    console.print(f"[green]✓[/green] Product data: {result.product_path}")


def _configure_logging(log_level: str, env: str) -> None:
    """Set up root logging on stderr.

    Outside the local environment, emits one JSON object per record::

        {"severity": "INFO", "message": "...", "logger": "...", "time": "..."}

    Locally, uses a human-readable plain-text format.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    if env != "local":

        class _JsonFormatter(logging.Formatter):
            """JSON formatter emitting one entry per line."""

            def format(self, record: logging.LogRecord) -> str:
                entry = {
                    "severity": record.levelname,
                    "message": record.getMessage(),
                    "logger": record.name,
                    "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
                }
                if record.exc_info and record.exc_info[1]:
                    entry["exception"] = self.formatException(record.exc_info)
                return json.dumps(entry, default=str, ensure_ascii=False)

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_JsonFormatter())
        logging.root.handlers.clear()
        logging.root.addHandler(handler)
        logging.root.setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            stream=sys.stderr,
        )


def run() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    run()
