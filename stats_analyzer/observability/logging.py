"""Standard Python logging configuration."""
from __future__ import annotations

import logging
import os
import sys

# Root log level, e.g. STATS_ANALYZER_LOG_LEVEL=DEBUG to see rejected samples
LEVEL = os.environ.get("STATS_ANALYZER_LOG_LEVEL", "INFO").upper()

def setup_logging(level: str | int | None = None) -> None:
    """Configure standard Python logging.

    Call **exactly once** at app startup. The statistics library itself never
    configures logging; it only emits DEBUG records under its module name.
    """
    if getattr(setup_logging, "_configured", False):  # type: ignore[attr-defined]
        return

    level = level if level is not None else LEVEL

    formatter = logging.Formatter(
        fmt='[%(asctime)s] [%(process)d] [%(levelname)s] %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S %z'
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # uvicorn installs its own handlers; route everything through root instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(level)

    setup_logging._configured = True  # type: ignore[attr-defined]
