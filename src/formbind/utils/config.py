"""
Configuration management for FormBind.

This module provides a sectioned ConfigStore that loads, validates and saves typed
values to a JSON file. Every value carries its declared type, its default and a set
of attributes; values listed in the optional fixed file are forced and flagged
`fixed_value`, so bound widgets render them read-only. Saving is atomic and skipped
when nothing changed.
"""

import json
import logging
import shutil
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from formbind import constants
from .helpers import get_app_data_path


logger = logging.getLogger("FormBind.Config")
store: Optional["ConfigStore"] = None


def get_config_store() -> "ConfigStore":
    """
    Initializes (if needed), loads and returns the global configuration store.
    """
    global store
    if store is None:
        logger.debug("First call; initializing configuration store singleton.")
        store = ConfigStore()
        store.load()
    return store


class ConfigError(Exception):
    """Custom exception for configuration-related errors, such as I/O or permission issues."""


@dataclass
class ValueAttributes:
    """Metadata attached to a configuration value."""
    description: str = ""
    fixed_value: bool = False


class ConfigValue:
    """
    A typed configuration value.

    The declared type is taken from the default unless given explicitly. Enum values
    are serialized by member name.
    """

    def __init__(self, name: str, default: Any, value_type: Optional[type] = None,
                 attributes: Optional[ValueAttributes] = None) -> None:
        self.name = name
        self.default = default
        self.value_type: type = value_type or type(default)
        self.attributes = attributes or ValueAttributes()
        self.value: Any = default

    def __repr__(self) -> str:
        return f"ConfigValue({self.name!r}, value={self.value!r}, fixed={self.attributes.fixed_value})"

    def __str__(self) -> str:
        if isinstance(self.value, Enum):
            return self.value.name
        if self.value is None:
            return ""
        return str(self.value)

    @property
    def is_enum(self) -> bool:
        return isinstance(self.value_type, type) and issubclass(self.value_type, Enum)

    def reset(self) -> None:
        self.value = self.default

    def convert(self, raw: Any) -> Any:
        """
        Converts a raw (text or JSON) value to the declared type.

        Raises ValueError if the value cannot be represented.
        """
        if self.is_enum:
            if isinstance(raw, self.value_type):
                return raw
            if isinstance(raw, str):
                try:
                    return self.value_type[raw.strip()]
                except KeyError:
                    pass
                for member in self.value_type:
                    if str(member.value).lower() == raw.strip().lower():
                        return member
            raise ValueError(f"'{raw}' is not a member of {self.value_type.__name__}")
        if self.value_type is bool:
            if isinstance(raw, bool):
                return raw
            if isinstance(raw, str):
                lowered = raw.strip().lower()
                if lowered in ("true", "yes", "1", "on"):
                    return True
                if lowered in ("false", "no", "0", "off"):
                    return False
            raise ValueError(f"'{raw}' is not a boolean")
        if self.value_type is int:
            if isinstance(raw, bool):
                raise ValueError(f"'{raw}' is not an integer")
            return int(str(raw).strip()) if isinstance(raw, str) else int(raw)
        if self.value_type is float:
            return float(raw)
        if self.value_type is str:
            if not isinstance(raw, str):
                raise ValueError(f"'{raw}' is not text")
            return raw
        if isinstance(raw, self.value_type):
            return raw
        return self.value_type(raw)

    def use_value_or_default(self, raw: Any) -> None:
        """Sets the converted value, or the default if the value is not valid for the declared type."""
        try:
            self.value = self.convert(raw)
        except (TypeError, ValueError):
            logger.warning("Value '%s' not valid for %s, using default '%s'", raw, self.name, self.default)
            self.value = self.default

    def to_serializable(self) -> Any:
        if isinstance(self.value, Enum):
            return self.value.name
        return self.value


class ConfigSection:
    """A named group of configuration values, in declaration order."""

    def __init__(self, name: str, values: Optional[Dict[str, ConfigValue]] = None) -> None:
        self.name = name
        self.values: Dict[str, ConfigValue] = dict(values or {})

    def __repr__(self) -> str:
        return f"ConfigSection({self.name!r}, {list(self.values)})"

    def __getitem__(self, key: str) -> ConfigValue:
        return self.values[key]

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[ConfigValue]:
        return iter(self.values.values())

    def add_value(self, value: ConfigValue) -> ConfigValue:
        self.values[value.name] = value
        return value

    def to_dict(self, include_fixed: bool = True) -> Dict[str, Any]:
        return {
            name: value.to_serializable()
            for name, value in self.values.items()
            if include_fixed or not value.attributes.fixed_value
        }


class ConfigStore:
    """
    Manages loading, saving, and validation of FormBind's sectioned configuration.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None,
                 fixed_path: Optional[Union[str, Path]] = None,
                 sections: Optional[Dict[str, Dict[str, Any]]] = None) -> None:
        """
        Initializes the store and registers the given sections (property -> default).
        """
        self.logger = logger
        self.config_path = Path(config_path or get_app_data_path() / constants.config.defaults.CONFIG_FILENAME)
        # The fixed overlay sits next to the user file unless given explicitly.
        self.fixed_path = Path(fixed_path or self.config_path.with_name(constants.config.defaults.FIXED_CONFIG_FILENAME))
        self._sections: Dict[str, ConfigSection] = {}
        self._last_saved: Optional[Dict[str, Dict[str, Any]]] = None

        defaults = constants.config.defaults.DEFAULT_SECTIONS if sections is None else sections
        for name, values in defaults.items():
            self.register_section(name, values)

    def register_section(self, name: str, defaults: Dict[str, Any],
                         attributes: Optional[Dict[str, ValueAttributes]] = None) -> ConfigSection:
        """Registers (or extends) a section; existing values keep their state."""
        section = self._sections.setdefault(name, ConfigSection(name))
        for key, default in defaults.items():
            if key in section:
                continue
            value_attributes = (attributes or {}).get(key)
            section.add_value(ConfigValue(key, default, attributes=value_attributes))
        return section

    def get_section(self, name: str) -> Optional[ConfigSection]:
        return self._sections.get(name)

    def sections(self) -> Dict[str, ConfigSection]:
        return dict(self._sections)

    def to_dict(self, include_fixed: bool = True) -> Dict[str, Dict[str, Any]]:
        return {name: section.to_dict(include_fixed) for name, section in self._sections.items()}

    def _read_json(self, path: Path) -> Optional[Dict[str, Any]]:
        """Reads a JSON object from `path`; a corrupt file is backed up and treated as missing."""
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            self.logger.error("Configuration file %s is corrupt. Backing it up and using defaults.", path)
            try:
                shutil.move(path, path.with_name(f"{path.name}.corrupt"))
            except OSError:
                self.logger.exception("Failed to back up corrupt config file.")
            return None
        except OSError as e:
            msg = f"OS error reading config file {path}: {e}"
            self.logger.critical(msg)
            raise ConfigError(msg) from e
        if not isinstance(data, dict):
            self.logger.error("Configuration file %s does not contain an object, ignoring it.", path)
            return None
        return data

    def _apply(self, data: Dict[str, Any], fixed: bool) -> None:
        messages = constants.config.messages
        for section_name, values in data.items():
            section = self._sections.get(section_name)
            if section is None or not isinstance(values, dict):
                self.logger.warning(messages.UNKNOWN_SECTION.format(section=section_name))
                continue

            unknown_keys = set(values.keys()) - set(section.values.keys())
            if unknown_keys:
                self.logger.warning(messages.UNKNOWN_KEYS.format(section=section_name, keys=", ".join(sorted(unknown_keys))))

            for key, raw in values.items():
                config_value = section.values.get(key)
                if config_value is None:
                    continue
                try:
                    config_value.value = config_value.convert(raw)
                except (TypeError, ValueError):
                    self.logger.warning(messages.INVALID_VALUE.format(
                        section=section_name, key=key, value=raw, default=config_value.default))
                    config_value.reset()
                    continue
                if fixed:
                    config_value.attributes.fixed_value = True
                    self.logger.info(messages.FIXED_VALUE.format(section=section_name, key=key, value=raw))

    def load(self) -> None:
        """Loads the user configuration over the defaults, then applies the fixed overlay."""
        for section in self._sections.values():
            for value in section:
                value.reset()
                value.attributes.fixed_value = False

        user_data = self._read_json(self.config_path)
        if user_data is None:
            self.logger.info("Configuration file not found or unusable. Using default settings.")
        else:
            self._apply(user_data, fixed=False)

        fixed_data = self._read_json(self.fixed_path)
        if fixed_data is not None:
            self._apply(fixed_data, fixed=True)

        self._last_saved = self.to_dict(include_fixed=False) if user_data is not None else None

    def save(self) -> None:
        """Atomically saves all non-fixed values to the configuration file."""
        config_to_save = self.to_dict(include_fixed=False)

        if self._last_saved == config_to_save:
            self.logger.debug("Skipping save, configuration is unchanged.")
            return

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", delete=False, dir=self.config_path.parent, encoding="utf-8"
            ) as temp_f:
                json.dump(config_to_save, temp_f, indent=4)
                temp_path = temp_f.name
            shutil.move(temp_path, self.config_path)
            self._last_saved = config_to_save
            self.logger.debug("Configuration saved successfully to %s", self.config_path)
        except OSError as e:
            msg = f"Failed to save configuration to {self.config_path}: {e}"
            self.logger.error(msg)
            raise ConfigError(msg) from e

    def reset_to_defaults(self) -> None:
        """Resets every non-fixed value to its default and saves."""
        self.logger.info("Resetting configuration to default values.")
        for section in self._sections.values():
            for value in section:
                if not value.attributes.fixed_value:
                    value.reset()
        self.save()
