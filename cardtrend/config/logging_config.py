# cardtrend/config/logging_config.py

"""Run-scoped logging for the re-pricer.

Every run writes one ``logs/run_YYYYMMDD_HHMMSS.log`` file holding the
full DEBUG trail of the ``cardtrend.*`` loggers (skipped products,
unparseable prices, rate fallbacks). The console only shows what an
operator has to act on, WARNING by default or ``CARDTREND_LOG_LEVEL``.
Only the newest ``Settings.LOG_KEEP_RUNS`` run logs are kept.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from cardtrend.config.settings import Settings

LOGGER_NAME = "cardtrend"

_FILE_FORMAT = (
    "%(asctime)s.%(msecs)03d %(levelname)-8s [%(name)s] "
    "%(funcName)s:%(lineno)d %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: str | int) -> int | None:
    """Map a level name (or number) to its numeric value, None if unknown."""
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.strip().upper())


def _new_log_path(logs_dir: Path, started: datetime | None = None) -> Path:
    """Timestamped path for this run; a numeric suffix avoids clashes."""
    stem = f"run_{started or datetime.now():%Y%m%d_%H%M%S}"
    path = logs_dir / f"{stem}.log"
    n = 1
    while path.exists():
        n += 1
        path = logs_dir / f"{stem}_{n}.log"
    return path


def _prune_run_logs(logs_dir: Path, keep: int) -> list[Path]:
    """Delete the oldest run logs so at most *keep* remain.

    Returns the paths that could not be removed.
    """
    runs = sorted(logs_dir.glob("run_*.log"))
    stale = runs[: max(len(runs) - keep, 0)]
    failed: list[Path] = []
    for path in stale:
        try:
            path.unlink()
        except OSError:
            failed.append(path)
    return failed


def _file_handler(path: Path) -> logging.FileHandler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, _DATE_FORMAT))
    return handler


def _console_handler(level: int) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    return handler


def current_log_file() -> Path | None:
    """Path of the run log attached to the ``cardtrend`` logger, if any."""
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging(
    logs_dir: Path | None = None,
    console_level: str | int | None = None,
) -> Path:
    """Attach the run log file and console handler to ``cardtrend``.

    Args:
        logs_dir: Directory for run logs. Defaults to ``Settings.LOGS_DIR``.
        console_level: Console threshold. Defaults to
            ``Settings.LOG_CONSOLE_LEVEL``; unknown names fall back to
            WARNING with a warning.

    Returns:
        Path of this run's log file. A second call returns the file
        already in use instead of opening another.
    """
    existing = current_log_file()
    if existing is not None:
        return existing

    logs_dir = logs_dir or Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    undeletable = _prune_run_logs(logs_dir, Settings.LOG_KEEP_RUNS - 1)
    log_file = _new_log_path(logs_dir)

    requested = (
        Settings.LOG_CONSOLE_LEVEL if console_level is None else console_level
    )
    level = _resolve_level(requested)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.addHandler(_file_handler(log_file))
    logger.addHandler(_console_handler(level or logging.WARNING))

    if level is None:
        logger.warning(
            "Unknown console log level %r, using WARNING", requested
        )
    for path in undeletable:
        logger.warning("Could not remove old run log %s", path)
    logger.debug("Run log opened: %s", log_file)
    return log_file
