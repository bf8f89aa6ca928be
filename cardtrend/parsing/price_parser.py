# cardtrend/parsing/price_parser.py

"""Locale-agnostic parsing of marketplace price strings.

Cardmarket renders prices as ``1.046,50 €`` while recorded baselines
may be ``£1,046.50`` or a hand-typed ``1.046.50``. No locale metadata
is available, so the decimal separator is inferred from the relative
position of the last comma and the last dot.

A single dot with no comma (``"1.046"``) is always read as a decimal
point. That input is genuinely ambiguous and is left that way.
"""

import logging
import math

from cardtrend.config.settings import Settings

logger = logging.getLogger("cardtrend.parser")


def normalize_price_text(raw: str) -> str:
    """Rewrite *raw* into a plain dot-decimal string (no parsing)."""
    price = raw
    for symbol in Settings.CURRENCY_SYMBOLS:
        price = price.replace(symbol, "")
    price = price.strip()

    has_comma = "," in price
    has_dot = "." in price

    if has_comma and has_dot:
        if price.rfind(",") > price.rfind("."):
            # European: "1.046,50" -> "1046.50"
            price = price.replace(".", "").replace(",", ".")
        else:
            # US: "1,046.50" -> "1046.50"
            price = price.replace(",", "")
    elif has_comma:
        # Decimal comma: "445,62" -> "445.62"
        price = price.replace(",", ".")
    elif price.count(".") > 1:
        # Broken thousands: "1.046.50" -> "1046.50"
        head, _, tail = price.rpartition(".")
        price = head.replace(".", "") + "." + tail

    return price


def parse_price(raw: str | None) -> float:
    """Parse a free-form price string into a float.

    Never raises. Anything that does not resolve to a finite number
    yields ``0.0`` and a warning naming the offending input.
    """
    if not raw:
        return 0.0

    cleaned = normalize_price_text(raw)
    try:
        value = float(cleaned)
    except ValueError as exc:
        logger.warning(
            "Failed to parse price %r (normalised %r): %s",
            raw,
            cleaned,
            exc,
        )
        return 0.0

    if not math.isfinite(value):
        logger.warning("Non-finite price %r ignored", raw)
        return 0.0
    return value
