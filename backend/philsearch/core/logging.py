"""
Logging Configuration

One stdout handler on the root logger, shared by the API, the
retrieval pipeline and every source adapter. Modules log through
get_logger(__name__).
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that log every outbound request
QUIET_LOGGERS = ("httpx", "httpcore", "openai", "langchain_openai")


def setup_logging(level: str = "INFO") -> None:
    """
    (Re)configure the root logger.

    Existing handlers are replaced, so calling this again after import
    (main.py does, with the configured level) changes the level without
    duplicating output.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names fall back to INFO
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass __name__."""
    return logging.getLogger(name)


setup_logging()
