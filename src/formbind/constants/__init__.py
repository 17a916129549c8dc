"""
Provides centralized, immutable constants for FormBind.

This package exposes singleton instances of constant groups, ensuring they
are validated on import and easily accessible from a single namespace.

Usage:
    from formbind import constants

    # Access application metadata
    print(constants.app.VERSION)

    # Resolve a localized string
    found, text = constants.i18n.get_language_table().resolve("settings_title")

    # Access a default configuration value
    core_defaults = constants.config.defaults.DEFAULT_SECTIONS["Core"]
"""

from . import i18n
from .app import app
from .binding import binding
from .config import config, OutputFormat
from .i18n import LanguageTable
from .logs import logs

__all__ = [
    "app",
    "binding",
    "config",
    "i18n",
    "LanguageTable",
    "logs",
    "OutputFormat",
]
