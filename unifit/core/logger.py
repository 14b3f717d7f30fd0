"""Logger configuration for UniFit Health.

Sinks are driven by Settings: LOG_LEVEL for both sinks, LOG_FILE to add a
rotating file sink, LOG_JSON to write that file as one JSON record per line.
The console sink always renders the structured context passed as logger
kwargs.
"""

import sys
from pathlib import Path

from loguru import logger

from unifit.config.settings import Settings, settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> <dim>{extra}</dim>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message} {extra}"


def setup_logger(
    config: Settings = settings,
    level: str | None = None,
    log_file: str | None = None,
) -> None:
    """Replace loguru's sinks with the ones described by config.

    Args:
        config: Settings to read sink options from
        level: Overrides config.log_level
        log_file: Overrides config.log_file
    """
    level = level or config.log_level
    log_file = log_file or config.log_file

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=config.log_rotation,
            retention=config.log_retention,
            serialize=config.log_json,
        )

    logger.info(
        "logger: Configured",
        level=level,
        log_file=log_file,
        json=config.log_json if log_file else False,
    )
