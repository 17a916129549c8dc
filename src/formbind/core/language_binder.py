"""
Language Binder Module for FormBind.

Applies localized text from a language table to single widgets, to menu and toolbar
containers (recursively), and to every bindable field of a form. A widget's explicit
`language_key` wins; without one, its objectName is tried as the key. Missing keys are
reported but never raised, and no failure on one field stops the pass.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Tuple, TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QGroupBox, QMenu, QMenuBar, QToolBar, QWidget

from formbind import constants
from formbind.core import field_cache
from formbind.core.roles import BindingKind, Localizable, binding_kind_of, config_binding
from formbind.utils.helpers import show_design_notice, suspended_updates

if TYPE_CHECKING:
    from formbind.core.design_tracker import DesignTimeRegistry
    from formbind.utils.config import ConfigStore


# Widgets whose items are localized instead of the widget itself.
CONTAINER_TYPES: Tuple[type, ...] = (QMenuBar, QMenu, QToolBar)


class LanguageSource(Protocol):
    def resolve(self, key: Optional[str]) -> Tuple[bool, str]: ...

    def translate_enum(self, member: Any) -> str: ...


def set_display_text(target: Any, text: str) -> None:
    """Sets the user-visible text of a widget, action or window."""
    setter = getattr(target, "set_display_text", None)
    if callable(setter):
        setter(text)
    elif isinstance(target, (QGroupBox, QMenu)):
        target.setTitle(text)
    elif hasattr(target, "setText"):
        target.setText(text)
    elif isinstance(target, QWidget):
        target.setWindowTitle(text)
    else:
        raise TypeError(f"Cannot set display text on {type(target).__name__}")


class LanguageBinder:
    """
    Localizes widgets from a language table.

    `design_mode` switches unresolved keys from log entries to blocking notices shown
    on `notice_parent`; the owning form keeps it in sync with its design surface.
    """

    def __init__(self, language_table: LanguageSource, config_store: Optional["ConfigStore"] = None,
                 notice_parent: Optional[QWidget] = None) -> None:
        self.language_table = language_table
        self.config_store = config_store
        self.notice_parent = notice_parent
        self.design_mode = False
        self.logger = logging.getLogger("FormBind.LanguageBinder")

    def apply_to(self, target: Any, language_key: Optional[str]) -> bool:
        """
        Applies the text for `language_key`, or for the target's objectName if the key is empty.

        Returns True if the display text was set.
        """
        messages = constants.binding.messages
        name = target.objectName()
        if language_key:
            found, text = self.language_table.resolve(language_key)
            if not found:
                message = messages.WRONG_LANGUAGE_KEY.format(key=language_key, name=name)
                self.logger.warning(message)
                if self.design_mode:
                    show_design_notice(self.notice_parent, message)
                return False
            set_display_text(target, text)
            return True

        found, text = self.language_table.resolve(name)
        if found:
            set_display_text(target, text)
            return True

        message = messages.MISSING_LANGUAGE_KEY.format(name=name)
        if self.design_mode:
            show_design_notice(self.notice_parent, message)
        else:
            self.logger.debug(message)
        return False

    def apply_bindable(self, target: Any) -> None:
        """
        Localizes one widget or action according to its roles.

        Containers are descended into; enum selectors bound to the configuration are
        re-populated in the new language with their selection preserved.
        """
        if not isinstance(target, Localizable):
            if isinstance(target, CONTAINER_TYPES):
                self._apply_container(target)
            return

        self.apply_to(target, target.language_key)

        if isinstance(target, CONTAINER_TYPES):
            self._apply_container(target)
        if binding_kind_of(target) is BindingKind.ENUM:
            self._repopulate_enum(target)

    def _apply_container(self, container: QWidget) -> None:
        for action in container.actions():
            if isinstance(action, Localizable):
                self.apply_to(action, action.language_key)
        for submenu in container.findChildren(QMenu, "", Qt.FindChildOption.FindDirectChildrenOnly):
            self.apply_bindable(submenu)

    def _repopulate_enum(self, selector: Any) -> None:
        binding = config_binding(selector)
        if binding is None or self.config_store is None:
            return
        section_name, property_name = binding
        section = self.config_store.get_section(section_name)
        if section is None:
            return
        config_value = section.values.get(property_name)
        if config_value is None or not config_value.is_enum:
            self.logger.warning(constants.binding.messages.WRONG_PROPERTY.format(
                property=property_name, field=selector.objectName()))
            return
        current_value = selector.get_selected_enum()
        selector.populate(config_value.value_type, self.language_table.translate_enum)
        selector.set_value(current_value)

    def _apply_guarded(self, field_name: str, target: Any) -> None:
        try:
            self.apply_bindable(target)
        except Exception as e:
            self.logger.error(f"Failed to apply language to '{field_name}': {e}", exc_info=True)

    def apply_form(self, form: QWidget, registry: Optional["DesignTimeRegistry"] = None) -> None:
        """
        Localizes the form title and every bindable field of `form`.

        In design mode the widgets and actions in `registry` are localized as well.
        Repaints are suspended for the whole pass.
        """
        with suspended_updates(form):
            title_key = getattr(form, "language_key", None)
            if title_key:
                found, text = self.language_table.resolve(title_key)
                if found:
                    form.setWindowTitle(text)

            for field in field_cache.fields(type(form), form):
                target = field.read(form)
                if target is None:
                    self.logger.debug("No value: %s", field.name)
                    continue
                if not isinstance(target, (QWidget, QAction)):
                    self.logger.debug("No widget or action: %s", field.name)
                    continue
                if not target.objectName():
                    target.setObjectName(field.name)
                self._apply_guarded(field.name, target)

            if self.design_mode and registry is not None:
                for name, widget in list(registry.widgets.items()):
                    self._apply_guarded(name, widget)
                for name, action in list(registry.actions.items()):
                    self._apply_guarded(name, action)
