# cardtrend/services/currency_converter.py

"""EUR to GBP conversion with a once-per-run exchange rate."""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any

from curl_cffi import requests as curl_requests

from cardtrend.config.settings import Settings

logger = logging.getLogger("cardtrend.currency")


def fetch_exchange_rate(
    session: curl_requests.Session | None = None,
) -> float:
    """Look up the current EUR to GBP rate.

    Every failure mode falls back to ``Settings.FALLBACK_RATE``; each
    one is logged separately so a stale rate can be traced to its cause.
    """
    settings = Settings()
    fallback = settings.FALLBACK_RATE
    session = session or curl_requests.Session(
        impersonate=settings.IMPERSONATE_BROWSER
    )

    try:
        resp = session.get(
            settings.EXCHANGE_RATE_URL,
            timeout=settings.RATE_REQUEST_TIMEOUT,
        )
    except Exception as exc:
        logger.warning(
            "Failed to fetch exchange rate from %s: %s",
            settings.EXCHANGE_RATE_URL,
            exc,
            exc_info=True,
        )
        return fallback

    if resp.status_code != 200:
        logger.warning(
            "Exchange rate service returned HTTP %d, using fallback %.4f",
            resp.status_code,
            fallback,
        )
        return fallback

    try:
        data: dict[str, Any] = json.loads(resp.text)
        rates: dict[str, Any] = data["rates"]
    except (ValueError, KeyError, TypeError) as exc:
        logger.warning(
            "Failed to decode exchange rate response: %s", exc
        )
        return fallback

    if not isinstance(data, dict) or not isinstance(rates, dict):
        logger.warning(
            "Unexpected exchange rate response shape: %r, using fallback %.4f",
            data,
            fallback,
        )
        return fallback

    rate = rates.get(settings.TARGET_CURRENCY)
    if rate is None:
        logger.warning(
            "%s rate not found in response, using fallback %.4f",
            settings.TARGET_CURRENCY,
            fallback,
        )
        return fallback

    try:
        value = float(rate)
    except (TypeError, ValueError):
        logger.warning(
            "Non-numeric %s rate %r, using fallback %.4f",
            settings.TARGET_CURRENCY,
            rate,
            fallback,
        )
        return fallback

    if not math.isfinite(value) or value <= 0:
        logger.warning(
            "Implausible %s rate %r, using fallback %.4f",
            settings.TARGET_CURRENCY,
            rate,
            fallback,
        )
        return fallback

    logger.info(
        "Exchange rate %s->%s: %.4f",
        settings.SOURCE_CURRENCY,
        settings.TARGET_CURRENCY,
        value,
    )
    return value


@dataclass(frozen=True)
class CurrencyConverter:
    """Converts source-currency amounts with a fixed rate."""

    rate: float

    @classmethod
    def from_service(
        cls,
        session: curl_requests.Session | None = None,
    ) -> "CurrencyConverter":
        """Build a converter from the live rate (or the fallback)."""
        return cls(rate=fetch_exchange_rate(session))

    def convert(self, value: float) -> float:
        """Return *value* expressed in the target currency."""
        return value * self.rate
