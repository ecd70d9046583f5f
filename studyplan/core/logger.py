"""Logger configuration for the study schedule service.

Schedule events and rejected operations are logged with structured kwargs
(week_number, day_number, caller, ...). The console shows them inline; the
optional file sink writes one JSON record per line so they stay queryable.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level> <dim>{extra}</dim>"
)


def setup_logger(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure loguru for the service.

    Args:
        level: Logging level (already validated by Settings)
        log_file: Optional path for a JSON-lines audit log, rotated at 10 MB
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level=level,
            serialize=True,
            rotation="10 MB",
            retention="7 days",
            encoding="utf-8",
        )

    logger.info(f"Logger initialized with level={level}", log_file=log_file)
