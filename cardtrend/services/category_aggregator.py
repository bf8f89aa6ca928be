# cardtrend/services/category_aggregator.py

"""Per-category ranking of enriched products."""

from cardtrend.models.product import Product


def rank_by_change(products: list[Product]) -> list[Product]:
    """Return *products* ordered by ``change_percent``, highest first.

    The sort is stable, so ties keep their input order. Products with
    no computed change (0.0) rank as zero, between gains and losses.
    """
    return sorted(
        products, key=lambda p: p.change_percent, reverse=True
    )


def rank_catalogue(
    catalogue: dict[str, list[Product]],
) -> dict[str, list[Product]]:
    """Rank every category group in place and return the catalogue."""
    for category, products in catalogue.items():
        catalogue[category] = rank_by_change(products)
    return catalogue
