# gradebook/core/logger.py
import logging
import sys

from gradebook.core.config import CONFIG


def resolve_level(name: str) -> int:
    """Map a GRADEBOOK_LOG_LEVEL value to a logging level; unknown names mean INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


_logger = logging.getLogger("gradebook")
if not _logger.handlers:
    _logger.setLevel(resolve_level(CONFIG.LOG_LEVEL))
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def get_logger(name: str | None = None) -> logging.Logger:
    if name:
        return _logger.getChild(name)
    return _logger
