"""
Config Binder Module for FormBind.

Moves values between ConfigBound widgets and the configuration store: `fill()` copies
stored values into the widgets when a form loads, `store()` writes the widgets' values
back when the form is confirmed and asks the store to persist if anything was written.
Dispatch is by the widget's `binding_kind`; kinds without a handler are skipped.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from PyQt6.QtWidgets import QWidget

from formbind import constants
from formbind.core import field_cache
from formbind.core.roles import BindingKind, binding_kind_of, config_binding
from formbind.utils.config import ConfigStore, ConfigValue


class ConfigBinder:
    """
    Fills widgets from, and stores widgets to, a ConfigStore.

    A value flagged `fixed_value` disables its widget on fill.
    """

    def __init__(self, config_store: ConfigStore, translate_enum: Optional[Callable[[Any], str]] = None) -> None:
        self.config_store = config_store
        self.translate_enum = translate_enum
        self.logger = logging.getLogger("FormBind.ConfigBinder")

        self._fillers: Dict[BindingKind, Callable[[Any, ConfigValue], None]] = {
            BindingKind.FLAG: self._fill_flag,
            BindingKind.TEXT: self._fill_text,
            BindingKind.HOTKEY: self._fill_hotkey,
            BindingKind.ENUM: self._fill_enum,
        }
        self._storers: Dict[BindingKind, Callable[[Any, ConfigValue], None]] = {
            BindingKind.FLAG: self._store_flag,
            BindingKind.TEXT: self._store_text,
            BindingKind.HOTKEY: self._store_hotkey,
            BindingKind.ENUM: self._store_enum,
        }

    def _resolve(self, field_name: str, widget: Any) -> Optional[ConfigValue]:
        """Finds the ConfigValue a widget is bound to; None if unbound or unresolvable."""
        binding: Optional[Tuple[str, str]] = config_binding(widget)
        if binding is None:
            return None
        section_name, property_name = binding
        messages = constants.binding.messages
        section = self.config_store.get_section(section_name)
        if section is None:
            self.logger.warning(messages.UNKNOWN_SECTION.format(section=section_name, field=field_name))
            return None
        config_value = section.values.get(property_name)
        if config_value is None:
            self.logger.warning(messages.WRONG_PROPERTY.format(property=property_name, field=field_name))
            return None
        return config_value

    # --- Fill ---

    def fill(self, form: Any) -> None:
        """Copies configuration values into every ConfigBound field of `form`."""
        for field in field_cache.fields(type(form), form):
            widget = field.read(form)
            if not isinstance(widget, QWidget):
                continue
            config_value = self._resolve(field.name, widget)
            if config_value is None:
                continue
            filler = self._fillers.get(binding_kind_of(widget))
            if filler is None:
                continue
            try:
                filler(widget, config_value)
            except Exception as e:
                self.logger.error(f"Failed to fill '{field.name}' from {config_value.name}: {e}", exc_info=True)

    def _fill_flag(self, widget: Any, config_value: ConfigValue) -> None:
        widget.setChecked(bool(config_value.value))
        widget.setEnabled(not config_value.attributes.fixed_value)

    def _fill_text(self, widget: Any, config_value: ConfigValue) -> None:
        widget.setText(str(config_value))
        widget.setEnabled(not config_value.attributes.fixed_value)

    def _fill_hotkey(self, widget: Any, config_value: ConfigValue) -> None:
        # An empty stored combination leaves the editor, enabled state included, untouched.
        hotkey = str(config_value)
        if hotkey:
            widget.set_hotkey(hotkey)
            widget.setEnabled(not config_value.attributes.fixed_value)

    def _fill_enum(self, widget: Any, config_value: ConfigValue) -> None:
        widget.populate(config_value.value_type, self.translate_enum)
        widget.set_value(config_value.value)
        widget.setEnabled(not config_value.attributes.fixed_value)

    # --- Store ---

    def store(self, form: Any) -> bool:
        """
        Writes every ConfigBound field of `form` back to its ConfigValue.

        Persists the store once if at least one value was written; returns whether it did.
        """
        dirty = False
        for field in field_cache.fields(type(form), form):
            widget = field.read(form)
            if not isinstance(widget, QWidget):
                continue
            config_value = self._resolve(field.name, widget)
            if config_value is None:
                continue
            storer = self._storers.get(binding_kind_of(widget))
            if storer is None:
                continue
            try:
                storer(widget, config_value)
            except Exception as e:
                self.logger.error(f"Failed to store '{field.name}' to {config_value.name}: {e}", exc_info=True)
                continue
            dirty = True

        if dirty:
            self.logger.debug("Persisting configuration for %s", type(form).__name__)
            self.config_store.save()
        return dirty

    def _store_flag(self, widget: Any, config_value: ConfigValue) -> None:
        config_value.value = widget.isChecked()

    def _store_text(self, widget: Any, config_value: ConfigValue) -> None:
        config_value.use_value_or_default(widget.text())

    def _store_hotkey(self, widget: Any, config_value: ConfigValue) -> None:
        config_value.value = str(widget)

    def _store_enum(self, widget: Any, config_value: ConfigValue) -> None:
        selected = widget.get_selected_enum()
        if selected is None:
            raise ValueError("no member selected")
        config_value.value = selected
