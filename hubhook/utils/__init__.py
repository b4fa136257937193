"""Utility modules for hubhook."""

from hubhook.utils.config_loader import ConfigLoaderError, load_options
from hubhook.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "ConfigLoaderError",
    "JsonFormatter",
    "configure_logging",
    "get_logger",
    "load_options",
]
