from __future__ import annotations

from .config import LoggingConfig
from .core import _CONFIGURED_FLAG_ATTR, configure_logging, get_logger
from .handlers import _HANDLER_TAG_ATTR

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "get_logger",
    "_CONFIGURED_FLAG_ATTR",
    "_HANDLER_TAG_ATTR",
]
