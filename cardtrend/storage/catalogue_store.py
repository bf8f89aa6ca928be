# cardtrend/storage/catalogue_store.py

"""Loads and saves the category -> products catalogue as JSON."""

import json
import logging
from pathlib import Path
from typing import Any

from cardtrend.errors import CatalogueError
from cardtrend.models.product import Product

logger = logging.getLogger("cardtrend.storage")

_KNOWN_KEYS = frozenset(
    {
        "url",
        "fromPrice",
        "name",
        "imageURL",
        "priceTrend",
        "priceTrendVal",
        "changePercent",
    }
)


def product_from_record(record: dict[str, Any]) -> Product:
    """Build a Product from an on-disk record.

    Text fields from a previous run's output (``name``, ``imageURL``,
    ``priceTrend``) are loaded as-is. ``priceTrendVal`` and ``changePercent``
    are per-run values: they are dropped here and only exist again once
    this run derives a trend.
    """
    url = record.get("url")
    if not isinstance(url, str) or not url:
        raise CatalogueError(f"Product record without a url: {record!r}")
    return Product(
        url=url,
        from_price=str(record.get("fromPrice", "") or ""),
        name=str(record.get("name", "") or ""),
        image_url=str(record.get("imageURL", "") or ""),
        price_trend=str(record.get("priceTrend", "") or ""),
        extra={
            k: v for k, v in record.items() if k not in _KNOWN_KEYS
        },
    )


def product_to_record(product: Product) -> dict[str, Any]:
    """Serialise a Product, omitting empty derived fields."""
    record: dict[str, Any] = {
        "url": product.url,
        "fromPrice": product.from_price,
    }
    if product.name:
        record["name"] = product.name
    if product.image_url:
        record["imageURL"] = product.image_url
    if product.price_trend:
        record["priceTrend"] = product.price_trend
    if product.price_trend_val:
        record["priceTrendVal"] = product.price_trend_val
    if product.change_percent:
        record["changePercent"] = product.change_percent
    record.update(product.extra)
    return record


def load_catalogue(path: Path) -> dict[str, list[Product]]:
    """Read the input catalogue.

    Raises:
        CatalogueError: if the file is missing, not JSON, or not a
            mapping of category name to a list of product records.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw: Any = json.load(f)
    except FileNotFoundError as exc:
        raise CatalogueError(f"Catalogue not found: {path}") from exc
    except (OSError, ValueError) as exc:
        raise CatalogueError(
            f"Failed to read catalogue {path}: {exc}"
        ) from exc

    if not isinstance(raw, dict):
        raise CatalogueError(
            f"Catalogue {path} must be a JSON object of categories"
        )

    catalogue: dict[str, list[Product]] = {}
    for category, records in raw.items():
        if not isinstance(records, list):
            raise CatalogueError(
                f"Category '{category}' must hold a list of products"
            )
        products: list[Product] = []
        for record in records:
            if not isinstance(record, dict):
                raise CatalogueError(
                    f"Malformed product in '{category}': {record!r}"
                )
            products.append(product_from_record(record))
        catalogue[category] = products

    logger.info(
        "Loaded %d products in %d categories from %s",
        sum(len(p) for p in catalogue.values()),
        len(catalogue),
        path,
    )
    return catalogue


def save_catalogue(
    catalogue: dict[str, list[Product]], path: Path,
) -> Path:
    """Write the enriched catalogue as indented JSON.

    Raises:
        CatalogueError: if the file cannot be created or written.
    """
    data = {
        category: [product_to_record(p) for p in products]
        for category, products in catalogue.items()
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")
    except OSError as exc:
        raise CatalogueError(
            f"Failed to write catalogue {path}: {exc}"
        ) from exc

    logger.info("Saved catalogue to %s", path)
    return path
