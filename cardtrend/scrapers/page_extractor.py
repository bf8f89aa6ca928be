# cardtrend/scrapers/page_extractor.py

"""Pure extraction of product data from a rendered Cardmarket page."""

import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from cardtrend.config.settings import Settings
from cardtrend.errors import PageParseError

logger = logging.getLogger("cardtrend.extractor")


@dataclass
class PageData:
    """Fields extracted from one product page."""

    title: str = ""
    blocked: bool = False
    trend_price_text: str = ""
    image_url: str = ""


def _parse_document(html: str) -> BeautifulSoup:
    """Parse *html* with lxml, wrapping parser failures."""
    try:
        return BeautifulSoup(html, "lxml")
    except Exception as exc:
        raise PageParseError(f"Failed to parse HTML: {exc}") from exc


def _find_trend_price(soup: BeautifulSoup) -> str:
    """Return the value text next to the ``Price Trend`` label.

    The value lives in the ``<dd>`` following the ``<dt>`` label,
    wrapped in a ``<span>``. When the label repeats the last one wins.
    """
    trend = ""
    for label in soup.find_all("dt"):
        if label.get_text().strip() != Settings.PRICE_TREND_LABEL:
            continue
        value = label.find_next_sibling()
        if not isinstance(value, Tag):
            continue
        trend = "".join(
            span.get_text() for span in value.find_all("span")
        ).strip()
    return trend


def _find_image_url(soup: BeautifulSoup) -> str:
    """Return the ``src`` of the first product packaging image."""
    for img in soup.find_all("img"):
        alt = str(img.get("alt") or "")
        if Settings.IMAGE_ALT_KEYWORD in alt:
            return str(img.get("src") or "")
    return ""


def extract_page(html: str) -> PageData:
    """Extract title, trend price text and image URL from *html*.

    Raises:
        PageParseError: if the HTML cannot be parsed at all.
    """
    soup = _parse_document(html)

    title_tag = soup.find("title")
    title = title_tag.get_text() if title_tag else ""

    if Settings.BLOCKED_MARKER in title.lower():
        return PageData(title=title, blocked=True)

    title = title.removesuffix(Settings.TITLE_SUFFIX)
    data = PageData(
        title=title,
        trend_price_text=_find_trend_price(soup),
        image_url=_find_image_url(soup),
    )
    logger.debug(
        "Extracted %r: trend=%r image=%s",
        data.title,
        data.trend_price_text,
        bool(data.image_url),
    )
    return data
