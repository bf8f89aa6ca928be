# cardtrend/scrapers/page_fetcher.py

"""Headless Chromium rendering of product pages via Playwright."""

import asyncio
import logging

from playwright.async_api import async_playwright

from cardtrend.config.settings import Settings
from cardtrend.errors import PageFetchError

logger = logging.getLogger("cardtrend.fetcher")


async def _render(url: str, settle_delay: float) -> str:
    """Open *url* in a fresh browser and return the settled HTML."""
    settings = Settings()
    async with async_playwright() as pw:
        browser = await pw.chromium.launch(
            headless=True,
            args=settings.BROWSER_ARGS,
        )
        try:
            context = await browser.new_context(
                user_agent=settings.USER_AGENT,
            )
            page = await context.new_page()
            await page.goto(url, wait_until="load")
            # Cardmarket fills the price table client-side
            await asyncio.sleep(settle_delay)
            html: str = await page.content()
            return html
        finally:
            await browser.close()


async def fetch_rendered_html(
    url: str,
    timeout: float = Settings.FETCH_TIMEOUT,
    settle_delay: float = Settings.SETTLE_DELAY,
) -> str:
    """Render *url* in an isolated headless browser and return its HTML.

    Each call launches and tears down its own browser, so no cookies or
    session state leak between products. The whole sequence, settle
    delay included, is bounded by *timeout* seconds.

    Raises:
        PageFetchError: on launch, navigation or timeout failure.
    """
    logger.debug("Rendering %s (timeout=%.0fs)", url, timeout)
    try:
        return await asyncio.wait_for(
            _render(url, settle_delay), timeout=timeout
        )
    except asyncio.TimeoutError as exc:
        raise PageFetchError(
            f"Timed out after {timeout:.0f}s rendering {url}"
        ) from exc
    except Exception as exc:
        raise PageFetchError(f"Failed to render {url}: {exc}") from exc
