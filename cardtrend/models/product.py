# cardtrend/models/product.py

"""Product data model for a single catalogue entry."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Product:
    """A Cardmarket product tracked against its recorded baseline price.

    ``from_price`` is the baseline exactly as recorded; the remaining
    fields are derived during a run and stay at their defaults when
    enrichment fails part-way.
    """

    url: str
    from_price: str = ""
    from_price_val: float = 0.0
    name: str = ""
    image_url: str = ""
    price_trend: str = ""
    price_trend_val: float = 0.0
    change_percent: float = 0.0
    extra: dict[str, Any] = field(
        default_factory=lambda: dict[str, Any]()
    )
