"""
Settings Dialog Module for FormBind.

Provides `SettingsDialog`, a concrete `BindableForm` over the `Core` configuration
section. It carries one widget of each bindable kind, a menu bar and a toolbar whose
items are localized through the container recursion, and a language selector that
switches the language table live.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtWidgets import (
    QComboBox, QDialog, QFormLayout, QHBoxLayout, QMenuBar, QToolBar, QVBoxLayout, QWidget
)

from formbind import constants
from formbind.constants.i18n import LanguageTable
from formbind.core.field_cache import bindable_fields
from formbind.utils.components import (
    BindableAction, BindableButton, BindableCheckBox, BindableGroupBox, BindableLabel,
    BindableLineEdit, BindableMenu, EnumComboBox, HotkeyEdit
)
from formbind.utils.config import ConfigStore
from formbind.views.form import BindableForm


CORE = constants.config.defaults.CORE_SECTION


@bindable_fields(
    "menu_bar", "tool_bar",
    "general_group", "language_label", "show_tray_checkbox", "play_sound_checkbox",
    "output_group", "output_format_label", "output_format_combo",
    "hotkey_label", "hotkey_edit", "filename_label", "filename_edit",
    "quality_label", "quality_edit",
    "ok_button", "cancel_button",
)
class SettingsDialog(BindableForm):
    """Dialog window for the capture settings."""
    language_key = "settings_title"

    def __init__(self, parent: Optional[QWidget] = None,
                 language_table: Optional[LanguageTable] = None,
                 config_store: Optional[ConfigStore] = None) -> None:
        super().__init__(parent, language_table, config_store)
        self.logger.debug("Initializing SettingsDialog...")
        self.initial_language = self.language_table.language
        self._setup_ui()
        self._select_language(self.initial_language)
        self._connect_signals()

    def _setup_ui(self) -> None:
        main_layout = QVBoxLayout(self)

        # Menus are localized through their container, not as fields.
        self.menu_bar = QMenuBar(self)
        self.file_menu = BindableMenu("", self.menu_bar, language_key="menu_file")
        self.save_action = BindableAction("", self.file_menu, language_key="action_save")
        self.close_action = BindableAction("", self.file_menu, language_key="action_close")
        self.file_menu.addAction(self.save_action)
        self.file_menu.addSeparator()
        self.file_menu.addAction(self.close_action)
        self.menu_bar.addMenu(self.file_menu)
        main_layout.setMenuBar(self.menu_bar)

        self.tool_bar = QToolBar(self)
        self.reset_action = BindableAction("", self.tool_bar, language_key="action_reset")
        self.tool_bar.addAction(self.reset_action)
        main_layout.addWidget(self.tool_bar)

        self.general_group = BindableGroupBox(parent=self, language_key="group_general")
        general_layout = QFormLayout(self.general_group)
        self.language_label = BindableLabel(parent=self.general_group, language_key="label_language")
        self.language_combo = QComboBox(self.general_group)
        for code, name in self.language_table.available_languages().items():
            self.language_combo.addItem(name, code)
        general_layout.addRow(self.language_label, self.language_combo)
        self.show_tray_checkbox = BindableCheckBox(
            parent=self.general_group, language_key="checkbox_show_tray",
            section_name=CORE, property_name="ShowTray")
        general_layout.addRow(self.show_tray_checkbox)
        self.play_sound_checkbox = BindableCheckBox(
            parent=self.general_group, language_key="checkbox_play_sound",
            section_name=CORE, property_name="PlaySound")
        general_layout.addRow(self.play_sound_checkbox)
        main_layout.addWidget(self.general_group)

        self.output_group = BindableGroupBox(parent=self, language_key="group_output")
        output_layout = QFormLayout(self.output_group)
        self.output_format_label = BindableLabel(parent=self.output_group, language_key="label_output_format")
        self.output_format_combo = EnumComboBox(
            self.output_group, language_key="combo_output_format",
            section_name=CORE, property_name="OutputFormat")
        output_layout.addRow(self.output_format_label, self.output_format_combo)
        self.hotkey_label = BindableLabel(parent=self.output_group, language_key="label_hotkey")
        self.hotkey_edit = HotkeyEdit(self.output_group, CORE, "CaptureHotkey")
        output_layout.addRow(self.hotkey_label, self.hotkey_edit)
        self.filename_label = BindableLabel(parent=self.output_group, language_key="label_filename")
        self.filename_edit = BindableLineEdit(self.output_group, CORE, "FilenamePattern")
        output_layout.addRow(self.filename_label, self.filename_edit)
        self.quality_label = BindableLabel(parent=self.output_group, language_key="label_quality")
        self.quality_edit = BindableLineEdit(self.output_group, CORE, "JpegQuality")
        output_layout.addRow(self.quality_label, self.quality_edit)
        main_layout.addWidget(self.output_group)

        button_layout = QHBoxLayout()
        button_layout.addStretch()
        # No language key: the text is looked up by objectName.
        self.ok_button = BindableButton(parent=self)
        self.ok_button.setObjectName("button_ok")
        self.ok_button.setDefault(True)
        self.cancel_button = BindableButton(parent=self, language_key="button_cancel")
        button_layout.addWidget(self.ok_button)
        button_layout.addWidget(self.cancel_button)
        main_layout.addLayout(button_layout)

    def _connect_signals(self) -> None:
        self.ok_button.clicked.connect(self.accept)
        self.cancel_button.clicked.connect(self.reject)
        self.save_action.triggered.connect(self.accept)
        self.close_action.triggered.connect(self.reject)
        self.reset_action.triggered.connect(self.reset_to_defaults)
        self.language_combo.currentIndexChanged.connect(self._on_language_selected)

    def _on_language_selected(self, index: int) -> None:
        code = self.language_combo.itemData(index)
        if code:
            self.language_table.set_language(code)

    def _select_language(self, code: str) -> None:
        index = self.language_combo.findData(code)
        if index >= 0:
            was_blocked = self.language_combo.blockSignals(True)
            self.language_combo.setCurrentIndex(index)
            self.language_combo.blockSignals(was_blocked)

    def _language_value(self):
        return self.config_store.get_section(CORE)["Language"]

    def fill_fields(self) -> None:
        super().fill_fields()
        self._select_language(self.language_table.language)
        self.language_combo.setEnabled(not self._language_value().attributes.fixed_value)

    def store_fields(self) -> bool:
        language = self.language_combo.currentData()
        language_value = self._language_value()
        if language and not language_value.attributes.fixed_value:
            language_value.value = language
        return super().store_fields()

    def reset_to_defaults(self) -> None:
        """Resets the configuration to its defaults and reloads the fields."""
        self.logger.info("Resetting settings to defaults.")
        self.config_store.reset_to_defaults()
        self.fill_fields()

    def done(self, result) -> None:
        # A cancelled dialog does not keep a live language switch.
        if result not in (QDialog.DialogCode.Accepted, QDialog.DialogCode.Accepted.value):
            if self.language_table.language != self.initial_language:
                self.language_table.set_language(self.initial_language)
                self._select_language(self.initial_language)
        super().done(result)
