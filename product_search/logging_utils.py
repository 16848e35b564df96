import logging
import sys
import time
from functools import wraps

from product_search.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Global logging format, written to stdout."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"product-search.{name}")


logger = get_logger("calls")


def log_calls(name: str):
    """Log function entry and duration at DEBUG."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            start = time.time()
            logger.debug(f"{name} → called")
            out = fn(*args, **kwargs)
            logger.debug(f"{name} → completed in {time.time()-start:.3f}s")
            return out
        return wrapper
    return decorator
