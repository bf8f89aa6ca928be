# cardtrend/services/pricing_pipeline.py

"""Drives enrichment and ranking across the whole catalogue."""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field

from cardtrend.models.product import Product
from cardtrend.parsing.price_parser import parse_price
from cardtrend.services.category_aggregator import rank_catalogue
from cardtrend.services.product_enricher import (
    EnrichmentResult,
    EnrichmentStatus,
    ProductEnricher,
)

logger = logging.getLogger("cardtrend.pipeline")


@dataclass
class PipelineReport:
    """Per-product outcomes of one pipeline run."""

    results: list[EnrichmentResult] = field(
        default_factory=lambda: list[EnrichmentResult]()
    )

    @property
    def counts(self) -> dict[EnrichmentStatus, int]:
        """Number of products per enrichment status."""
        return dict(Counter(r.status for r in self.results))

    @property
    def complete(self) -> int:
        """Number of products whose every field was derived."""
        return sum(1 for r in self.results if r.ok)

    @property
    def failures(self) -> list[EnrichmentResult]:
        """Results that produced no usable page data."""
        return [
            r
            for r in self.results
            if r.status
            in (EnrichmentStatus.FAILED, EnrichmentStatus.BLOCKED)
        ]


class PricingPipeline:
    """Re-prices every product, category by category."""

    def __init__(
        self,
        enricher: ProductEnricher,
        concurrency: int = 1,
    ) -> None:
        if concurrency < 1:
            msg = f"concurrency must be >= 1, got {concurrency}"
            raise ValueError(msg)
        self.enricher = enricher
        self.concurrency = concurrency

    async def _enrich_group(
        self, products: list[Product],
    ) -> list[EnrichmentResult]:
        """Enrich one category, at most ``concurrency`` at a time."""
        if self.concurrency == 1:
            return [
                await self.enricher.enrich(p) for p in products
            ]

        semaphore = asyncio.Semaphore(self.concurrency)

        async def run_one(product: Product) -> EnrichmentResult:
            async with semaphore:
                return await self.enricher.enrich(product)

        results: list[EnrichmentResult] = list(
            await asyncio.gather(*(run_one(p) for p in products))
        )
        return results

    async def run(
        self, catalogue: dict[str, list[Product]],
    ) -> PipelineReport:
        """Enrich and rank *catalogue* in place.

        Product order inside each category follows the input until the
        final ranking step overwrites it.
        """
        report = PipelineReport()
        for category, products in catalogue.items():
            logger.info(
                "Re-pricing category '%s' (%d products)",
                category,
                len(products),
            )
            for product in products:
                product.from_price_val = parse_price(product.from_price)

            report.results.extend(await self._enrich_group(products))

        rank_catalogue(catalogue)
        logger.info(
            "Pipeline finished: %d/%d fully enriched (%s)",
            report.complete,
            len(report.results),
            ", ".join(
                f"{status.value}={count}"
                for status, count in report.counts.items()
            )
            or "no products",
        )
        return report
