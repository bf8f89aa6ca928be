# cardtrend/cli/runner.py

"""Headless re-pricing run: load, enrich, rank, save."""

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cardtrend.config.settings import Settings
from cardtrend.errors import CatalogueError
from cardtrend.models.product import Product
from cardtrend.services.currency_converter import CurrencyConverter
from cardtrend.services.pricing_pipeline import (
    PipelineReport,
    PricingPipeline,
)
from cardtrend.services.product_enricher import ProductEnricher
from cardtrend.storage.catalogue_store import (
    load_catalogue,
    save_catalogue,
)

logger = logging.getLogger("cardtrend.cli")

# Status messages go to stderr; stdout carries only the table
_err = Console(stderr=True)


def _print_tables(catalogue: dict[str, list[Product]]) -> None:
    """Render one Rich table per category to stdout."""
    console = Console()
    for category, products in catalogue.items():
        table = Table(
            title=category,
            show_lines=True,
            title_style="bold cyan",
        )
        table.add_column("#", style="dim", width=4)
        table.add_column("Name", max_width=60)
        table.add_column("From", justify="right")
        table.add_column("Trend", justify="right", style="green")
        table.add_column("Change", justify="right")

        for idx, p in enumerate(products, 1):
            trend = (
                f"£{p.price_trend_val:,.2f}"
                if p.price_trend_val
                else "N/A"
            )
            style = "green" if p.change_percent >= 0 else "red"
            table.add_row(
                str(idx),
                escape((p.name or p.url)[:60]),
                escape(p.from_price) or "—",
                trend,
                f"[{style}]{p.change_percent:+.1f}%[/{style}]",
            )

        console.print(table)


def _summarise(report: PipelineReport) -> None:
    """Print per-status counts and the failed URLs to stderr."""
    parts = [
        f"{count} {status.value}"
        for status, count in report.counts.items()
    ]
    _err.print(
        f"[dim]{report.complete}/{len(report.results)} fully enriched: "
        f"{', '.join(parts) or 'no products'}[/dim]"
    )
    for result in report.failures:
        _err.print(
            f"[yellow]{result.status.value}: {result.url}[/yellow]"
        )


async def run_repricing(
    input_path: Path,
    output_path: Path,
    rate: float | None = None,
    concurrency: int = 1,
    timeout: float = Settings.FETCH_TIMEOUT,
    settle_delay: float = Settings.SETTLE_DELAY,
    show_table: bool = False,
) -> int:
    """Re-price the catalogue and return an exit code (0=ok, 1=fatal)."""
    try:
        catalogue = load_catalogue(input_path)
    except CatalogueError as exc:
        logger.critical("Cannot load catalogue: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1

    converter = (
        CurrencyConverter(rate)
        if rate is not None
        else CurrencyConverter.from_service()
    )
    _err.print(
        f"[bold]Re-pricing[/bold] {input_path}  "
        f"[dim]rate={converter.rate:.4f}, concurrency={concurrency}[/dim]"
    )

    enricher = ProductEnricher(
        converter, timeout=timeout, settle_delay=settle_delay
    )
    pipeline = PricingPipeline(enricher, concurrency=concurrency)
    report = await pipeline.run(catalogue)

    try:
        save_catalogue(catalogue, output_path)
    except CatalogueError as exc:
        logger.critical("Cannot save catalogue: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1

    _summarise(report)
    if show_table:
        _print_tables(catalogue)

    _err.print(
        f"[green]Scraping complete, data saved to {output_path}[/green]"
    )
    return 0
