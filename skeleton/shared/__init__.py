"""
Shared configuration and logging for Skeleton.
"""

from .config import Settings, get_settings, reload_settings
from .logging_config import setup_logging

__all__ = ["Settings", "get_settings", "reload_settings", "setup_logging"]
