# cardtrend/services/product_enricher.py

"""Per-product enrichment: fetch, extract, convert, compare."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum

from cardtrend.config.settings import Settings
from cardtrend.errors import PageFetchError, PageParseError
from cardtrend.models.product import Product
from cardtrend.parsing.price_parser import parse_price
from cardtrend.scrapers.page_extractor import extract_page
from cardtrend.scrapers.page_fetcher import fetch_rendered_html
from cardtrend.services.currency_converter import CurrencyConverter

logger = logging.getLogger("cardtrend.enricher")

PageFetcher = Callable[[str, float, float], Awaitable[str]]


class EnrichmentStatus(Enum):
    """Outcome of enriching a single product."""

    SUCCESS = "success"
    PARTIAL = "partial"
    BLOCKED = "blocked"
    FAILED = "failed"


@dataclass
class EnrichmentResult:
    """What happened to one product during a run."""

    url: str
    status: EnrichmentStatus
    reasons: list[str] = field(
        default_factory=lambda: list[str]()
    )

    @property
    def ok(self) -> bool:
        """True when every field was derived."""
        return self.status is EnrichmentStatus.SUCCESS


def compute_change_percent(current: float, baseline: float) -> float:
    """Percent change of *current* relative to *baseline*.

    Returns ``0.0`` ("no signal") when the baseline is not positive.
    """
    if baseline <= 0:
        return 0.0
    return ((current - baseline) / baseline) * 100


class ProductEnricher:
    """Fills a product's derived fields from its live Cardmarket page."""

    def __init__(
        self,
        converter: CurrencyConverter,
        fetcher: PageFetcher = fetch_rendered_html,
        timeout: float = Settings.FETCH_TIMEOUT,
        settle_delay: float = Settings.SETTLE_DELAY,
    ) -> None:
        self.converter = converter
        self.fetcher = fetcher
        self.timeout = timeout
        self.settle_delay = settle_delay
        self.settings = Settings()

    async def enrich(self, product: Product) -> EnrichmentResult:
        """Enrich *product* in place.

        Per-product failures are logged and reported in the returned
        result; fields derived before the failure point are kept.
        The trend value and change always start from zero so a product
        without a usable trend this run reads as "no signal".
        """
        url = product.url
        product.price_trend_val = 0.0
        product.change_percent = 0.0
        try:
            html = await self.fetcher(
                url, self.timeout, self.settle_delay
            )
        except PageFetchError as exc:
            logger.warning("Page fetch failed for %s: %s", url, exc)
            return EnrichmentResult(
                url, EnrichmentStatus.FAILED, [f"fetch: {exc}"]
            )

        try:
            page = extract_page(html)
        except PageParseError as exc:
            logger.warning("Failed to parse HTML from %s: %s", url, exc)
            return EnrichmentResult(
                url, EnrichmentStatus.FAILED, [f"parse: {exc}"]
            )

        if page.blocked:
            logger.warning(
                "Page blocked or not loaded correctly for URL: %s", url
            )
            product.name = self.settings.BLOCKED_NAME
            return EnrichmentResult(
                url, EnrichmentStatus.BLOCKED, ["blocked page"]
            )

        product.name = page.title
        reasons: list[str] = []

        if page.trend_price_text:
            product.price_trend = page.trend_price_text
            trend_value = parse_price(page.trend_price_text)
            if trend_value <= 0:
                reasons.append("unparseable price trend")
            else:
                product.price_trend_val = self.converter.convert(
                    trend_value
                )
                product.change_percent = compute_change_percent(
                    product.price_trend_val, product.from_price_val
                )
                if product.from_price_val <= 0:
                    reasons.append("no baseline price")
        else:
            logger.info("No price trend found for %s", url)
            reasons.append("no price trend")

        if page.image_url:
            product.image_url = page.image_url
        else:
            logger.debug("No product image found for %s", url)
            reasons.append("no image")

        status = (
            EnrichmentStatus.PARTIAL if reasons
            else EnrichmentStatus.SUCCESS
        )
        return EnrichmentResult(url, status, reasons)
