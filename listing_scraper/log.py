"""
Logging setup for the command line.

The library modules only call logging.getLogger(__name__); nothing is configured until a caller
(normally __main__) runs init_logger. Console output follows --log-level, and --log-file adds a
DEBUG-level file that records every strategy the extractors tried.
"""

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# requests' transport chatter drowns out the extractor trace at DEBUG
NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def _level(name: str, default: int) -> int:
    value = getattr(logging, str(name).upper(), None)
    return value if isinstance(value, int) else default


def init_logger(
    name: str = "listing_scraper",
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    log_file: str | None = None
) -> logging.Logger:
    """
    Console handler plus an optional file handler on the package logger.

    Calling it again adjusts the console level and adds the file handler if one for that path is not
    attached yet, rather than stacking duplicate handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    fmt = logging.Formatter(LOG_FORMAT)
    console_level_num = _level(console_level, logging.INFO)

    console = [h for h in logger.handlers if type(h) is logging.StreamHandler]
    if console:
        for h in console:
            h.setLevel(console_level_num)
    else:
        ch = logging.StreamHandler()
        ch.setLevel(console_level_num)
        ch.setFormatter(fmt)
        logger.addHandler(ch)

    if log_file:
        path = Path(log_file).resolve()
        attached = any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename) == path for h in logger.handlers
        )
        if not attached:
            path.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(path, encoding="utf-8")
            fh.setLevel(_level(file_level, logging.DEBUG))
            fh.setFormatter(fmt)
            logger.addHandler(fh)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
    return logger
