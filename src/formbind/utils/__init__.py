"""
Utilities submodule for FormBind.

Provides helper functions and configuration management.
"""

from .config import ConfigError, ConfigStore, get_config_store
from .helpers import get_app_data_path, setup_logging, show_design_notice, suspended_updates

__all__ = [
    "ConfigError",
    "ConfigStore",
    "get_app_data_path",
    "get_config_store",
    "setup_logging",
    "show_design_notice",
    "suspended_updates",
]
