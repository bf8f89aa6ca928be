# cardtrend/config/settings.py

"""Central configuration for the cardtrend re-pricer."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the cardtrend re-pricer."""

    # --- Page fetching ---
    FETCH_TIMEOUT: float = 30.0         # Seconds per rendered page fetch
    SETTLE_DELAY: float = 5.0           # Seconds to let client JS render
    MAX_CONCURRENCY: int = 4            # Upper bound for parallel fetches
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/91.0.4472.124 Safari/537.36"
    )
    BROWSER_ARGS: list[str] = [
        "--disable-gpu",
        "--no-sandbox",
        "--disable-software-rasterizer",
    ]

    # --- Page structure (Cardmarket) ---
    TITLE_SUFFIX: str = " | Cardmarket"
    BLOCKED_MARKER: str = "just a moment"
    BLOCKED_NAME: str = "Blocked or loading issue"
    PRICE_TREND_LABEL: str = "Price Trend"
    IMAGE_ALT_KEYWORD: str = "Elite Trainer Box"

    # --- Prices & currency ---
    CURRENCY_SYMBOLS: list[str] = ["€", "£"]
    SOURCE_CURRENCY: str = "EUR"
    TARGET_CURRENCY: str = "GBP"
    FALLBACK_RATE: float = 0.85
    RATE_REQUEST_TIMEOUT: int = 10
    EXCHANGE_RATE_URL: str = os.getenv(
        "CARDTREND_EXCHANGE_RATE_URL",
        "https://api.frankfurter.dev/v1/latest?symbols=GBP",
    )

    # --- Browser Impersonation (rate lookup) ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    CATALOGUE_PATH: Path = Path(
        os.getenv(
            "CARDTREND_CATALOGUE_PATH",
            str(BASE_DIR / "data" / "products.json"),
        )
    )
    OUTPUT_PATH: Path = Path(
        os.getenv(
            "CARDTREND_OUTPUT_PATH",
            str(BASE_DIR / "docs" / "output.json"),
        )
    )
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Logging ---
    LOG_CONSOLE_LEVEL: str = os.getenv("CARDTREND_LOG_LEVEL", "WARNING").upper()
    LOG_KEEP_RUNS: int = 20             # Older run_*.log files are pruned
