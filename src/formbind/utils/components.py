# src/formbind/utils/components.py

"""
Bindable Qt Widget Components for FormBind.

This module provides the widgets that take part in the binding passes: labels, buttons,
group boxes, menus and actions that receive localized text, and check boxes, line edits,
a hotkey editor and an enum selector that exchange their value with the configuration
store. Each component declares its roles through the mixins in `formbind.core.roles`.
"""

import logging
from enum import Enum
from typing import Callable, Optional, Type

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeyEvent, QKeySequence
from PyQt6.QtWidgets import (
    QCheckBox, QComboBox, QGroupBox, QLabel, QLineEdit, QMenu, QPushButton, QWidget
)

from formbind.core.roles import BindingKind, ConfigBindable, LanguageBindable


logger = logging.getLogger("FormBind.Components")


class BindableLabel(QLabel, LanguageBindable):
    def __init__(self, text: str = "", parent: Optional[QWidget] = None,
                 language_key: Optional[str] = None) -> None:
        super().__init__(text, parent)
        self.language_key = language_key


class BindableButton(QPushButton, LanguageBindable):
    def __init__(self, text: str = "", parent: Optional[QWidget] = None,
                 language_key: Optional[str] = None) -> None:
        super().__init__(text, parent)
        self.language_key = language_key


class BindableGroupBox(QGroupBox, LanguageBindable):
    def __init__(self, title: str = "", parent: Optional[QWidget] = None,
                 language_key: Optional[str] = None) -> None:
        super().__init__(title, parent)
        self.language_key = language_key

    def set_display_text(self, text: str) -> None:
        self.setTitle(text)


class BindableMenu(QMenu, LanguageBindable):
    """A menu whose title is localized; its actions are visited by the menu recursion."""
    def __init__(self, title: str = "", parent: Optional[QWidget] = None,
                 language_key: Optional[str] = None) -> None:
        super().__init__(title, parent)
        self.language_key = language_key

    def set_display_text(self, text: str) -> None:
        self.setTitle(text)


class BindableAction(QAction, LanguageBindable):
    """A menu or toolbar item with a localized text."""
    def __init__(self, text: str = "", parent=None, language_key: Optional[str] = None) -> None:
        super().__init__(text, parent)
        self.language_key = language_key


class BindableCheckBox(QCheckBox, LanguageBindable, ConfigBindable):
    """A boolean flag bound to a configuration value."""
    binding_kind = BindingKind.FLAG

    def __init__(self, text: str = "", parent: Optional[QWidget] = None,
                 language_key: Optional[str] = None,
                 section_name: Optional[str] = None, property_name: Optional[str] = None) -> None:
        super().__init__(text, parent)
        self.language_key = language_key
        self.bind_config(section_name, property_name)


class BindableLineEdit(QLineEdit, ConfigBindable):
    """A text field bound to a configuration value of any text-convertible type."""
    binding_kind = BindingKind.TEXT

    def __init__(self, parent: Optional[QWidget] = None,
                 section_name: Optional[str] = None, property_name: Optional[str] = None) -> None:
        super().__init__(parent)
        self.bind_config(section_name, property_name)


class HotkeyEdit(BindableLineEdit):
    """
    Captures a single key combination.

    The combination is stored in portable form (e.g. "Ctrl+Shift+P") and displayed in the
    platform's native form. Backspace or Delete without modifiers clears it. A combination
    set with `set_hotkey()` is reported back exactly as given until a key is captured, so a
    stored value this editor cannot parse is never rewritten.
    """
    binding_kind = BindingKind.HOTKEY

    _MODIFIER_KEYS = tuple(k.value for k in (
        Qt.Key.Key_Shift, Qt.Key.Key_Control, Qt.Key.Key_Alt, Qt.Key.Key_Meta, Qt.Key.Key_AltGr))
    _CLEAR_KEYS = (Qt.Key.Key_Backspace.value, Qt.Key.Key_Delete.value)

    def __init__(self, parent: Optional[QWidget] = None,
                 section_name: Optional[str] = None, property_name: Optional[str] = None) -> None:
        super().__init__(parent, section_name, property_name)
        self._sequence = QKeySequence()
        self._stored_text: Optional[str] = None
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.NoContextMenu)

    def __str__(self) -> str:
        if self._stored_text is not None:
            return self._stored_text
        return self._sequence.toString(QKeySequence.SequenceFormat.PortableText)

    def hotkey(self) -> QKeySequence:
        return QKeySequence(self._sequence)

    def set_hotkey(self, hotkey: str) -> None:
        self._stored_text = hotkey
        self._sequence = QKeySequence.fromString(hotkey, QKeySequence.SequenceFormat.PortableText)
        if hotkey and self._sequence.isEmpty():
            logger.warning("Could not parse hotkey '%s'", hotkey)
        self._refresh_text()

    def _refresh_text(self) -> None:
        if self._sequence.isEmpty() and self._stored_text:
            self.setText(self._stored_text)
        else:
            self.setText(self._sequence.toString(QKeySequence.SequenceFormat.NativeText))

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = int(event.key())
        if key in self._MODIFIER_KEYS:
            return
        self._stored_text = None
        if key in self._CLEAR_KEYS and event.modifiers() == Qt.KeyboardModifier.NoModifier:
            self._sequence = QKeySequence()
        else:
            self._sequence = QKeySequence(event.keyCombination())
        self._refresh_text()


class EnumComboBox(QComboBox, LanguageBindable, ConfigBindable):
    """
    Selects one member of an Enum.

    Candidates are filled by `populate()`; each item keeps its member as item data, so the
    selection survives a re-population with different display texts.
    """
    binding_kind = BindingKind.ENUM

    def __init__(self, parent: Optional[QWidget] = None, language_key: Optional[str] = None,
                 section_name: Optional[str] = None, property_name: Optional[str] = None) -> None:
        super().__init__(parent)
        self.language_key = language_key
        self.bind_config(section_name, property_name)
        self._enum_type: Optional[Type[Enum]] = None

    @property
    def enum_type(self) -> Optional[Type[Enum]]:
        return self._enum_type

    def set_display_text(self, text: str) -> None:
        self.setToolTip(text)

    def populate(self, enum_type: Type[Enum], translate: Optional[Callable[[Enum], str]] = None) -> None:
        """Replaces the candidates with the members of `enum_type`."""
        self._enum_type = enum_type
        was_blocked = self.blockSignals(True)
        try:
            self.clear()
            for member in enum_type:
                self.addItem(translate(member) if translate else member.name, member)
        finally:
            self.blockSignals(was_blocked)

    def set_value(self, member: Optional[Enum]) -> None:
        for index in range(self.count()):
            if self.itemData(index) == member:
                self.setCurrentIndex(index)
                return
        logger.debug("Value %r is not a candidate of %s", member, self.objectName())

    def get_selected_enum(self) -> Optional[Enum]:
        return self.currentData()
