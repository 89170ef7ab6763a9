"""Event logging."""

from .logger import get_logger, configure_logging
