"""
Constants for application configuration defaults and constraints.
"""
from enum import Enum
from typing import Final, Dict, Any


class OutputFormat(Enum):
    """Image formats offered by the output settings."""
    PNG = "png"
    JPG = "jpg"
    BMP = "bmp"
    GIF = "gif"


class ConfigMessages:
    """Log message templates for configuration validation."""
    INVALID_VALUE: Final[str] = "Invalid value '{value}' for {section}.{key}, resetting to default '{default}'"
    UNKNOWN_SECTION: Final[str] = "Ignoring unknown config section '{section}'"
    UNKNOWN_KEYS: Final[str] = "Ignoring unknown config fields in section '{section}': {keys}"
    FIXED_VALUE: Final[str] = "Value {section}.{key} is fixed to '{value}'"

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for attr_name in dir(self):
            if not attr_name.startswith('_') and attr_name.isupper():
                value = getattr(self, attr_name)
                if not isinstance(value, str) or not value:
                    raise ValueError(f"ConfigMessages.{attr_name} must be a non-empty string.")


class ConfigConstants:
    """Defines default values for all configuration sections."""
    DEFAULT_LANGUAGE: Final[str] = "en_US"
    DEFAULT_SHOW_TRAY: Final[bool] = True
    DEFAULT_OUTPUT_FORMAT: Final[OutputFormat] = OutputFormat.PNG
    DEFAULT_CAPTURE_HOTKEY: Final[str] = "Ctrl+Shift+P"
    DEFAULT_FILENAME_PATTERN: Final[str] = "capture_{date}"
    DEFAULT_JPEG_QUALITY: Final[int] = 80
    DEFAULT_PLAY_SOUND: Final[bool] = False

    CONFIG_FILENAME: Final[str] = "FormBind_Config.json"
    FIXED_CONFIG_FILENAME: Final[str] = "FormBind_Fixed.json"
    CORE_SECTION: Final[str] = "Core"

    # The default's type is the declared type of each value.
    DEFAULT_SECTIONS: Final[Dict[str, Dict[str, Any]]] = {
        CORE_SECTION: {
            "Language": DEFAULT_LANGUAGE,
            "ShowTray": DEFAULT_SHOW_TRAY,
            "PlaySound": DEFAULT_PLAY_SOUND,
            "OutputFormat": DEFAULT_OUTPUT_FORMAT,
            "CaptureHotkey": DEFAULT_CAPTURE_HOTKEY,
            "FilenamePattern": DEFAULT_FILENAME_PATTERN,
            "JpegQuality": DEFAULT_JPEG_QUALITY,
        },
    }

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not self.CONFIG_FILENAME:
            raise ValueError("CONFIG_FILENAME must not be empty")
        if self.CONFIG_FILENAME == self.FIXED_CONFIG_FILENAME:
            raise ValueError("FIXED_CONFIG_FILENAME must differ from CONFIG_FILENAME")
        if not (0 <= self.DEFAULT_JPEG_QUALITY <= 100):
            raise ValueError("DEFAULT_JPEG_QUALITY must be between 0 and 100")
        for section, values in self.DEFAULT_SECTIONS.items():
            if not section or not values:
                raise ValueError(f"DEFAULT_SECTIONS entry '{section}' must be a non-empty section")
            for key, default in values.items():
                if default is None:
                    raise ValueError(f"Default for {section}.{key} must not be None; its type is the value type")


class ConfigurationConstants:
    """Container for configuration-related constant groups."""
    def __init__(self) -> None:
        self.defaults = ConfigConstants()
        self.messages = ConfigMessages()

# Singleton instance for easy access
config = ConfigurationConstants()
