"""
Base Form Module for FormBind.

Provides `BindableForm`, the dialog base class that ties the binding passes to the Qt
lifecycle: localization and configuration fill on first show, configuration store on an
accepted close, and design-time tracking while the form is sited on a `DesignSurface`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent, QPaintEvent, QShowEvent
from PyQt6.QtWidgets import QDialog, QWidget

from formbind.constants.i18n import LanguageTable, get_language_table
from formbind.core.config_binder import ConfigBinder
from formbind.core.design_tracker import DesignSurface, DesignTimeTracker
from formbind.core.language_binder import LanguageBinder
from formbind.utils.config import ConfigError, ConfigStore, get_config_store


class BindableForm(QDialog):
    """
    A dialog whose bindable fields are localized and bound to the configuration.

    Subclasses set `language_key` for the window title, and may set
    `manual_language_apply` or `manual_store_fields` to take over either pass.
    """
    language_key: Optional[str] = None
    manual_language_apply: bool = False
    manual_store_fields: bool = False

    def __init__(self, parent: Optional[QWidget] = None,
                 language_table: Optional[LanguageTable] = None,
                 config_store: Optional[ConfigStore] = None) -> None:
        super().__init__(parent)
        self.logger = logging.getLogger(f"FormBind.{self.__class__.__name__}")

        self.language_table = language_table if language_table is not None else get_language_table()
        self.config_store = config_store if config_store is not None else get_config_store()

        self.language_binder = LanguageBinder(self.language_table, self.config_store, notice_parent=self)
        self.config_binder = ConfigBinder(self.config_store, self.language_table.translate_enum)
        self.design_tracker = DesignTimeTracker(self.language_binder)

        self._site: Optional[DesignSurface] = None
        self._loaded = False
        self._disposed = False

        self.language_table.language_changed.connect(self.retranslate)

    # --- Design-time site ---

    @property
    def site(self) -> Optional[DesignSurface]:
        return self._site

    @site.setter
    def site(self, surface: Optional[DesignSurface]) -> None:
        self.set_site(surface)

    @property
    def design_mode(self) -> bool:
        return self._site is not None

    def set_site(self, surface: Optional[DesignSurface]) -> None:
        """Places the form on `surface`, or takes it off with None."""
        self.design_tracker.detach()
        self._site = surface
        if surface is not None:
            self.design_tracker.attach(surface)
        self.language_binder.design_mode = self.design_mode

    # --- Binding passes ---

    def apply_language(self) -> None:
        self.language_binder.design_mode = self.design_mode
        self.language_binder.apply_form(self, self.design_tracker.registry)

    def fill_fields(self) -> None:
        self.config_binder.fill(self)

    def store_fields(self) -> bool:
        return self.config_binder.store(self)

    def retranslate(self, language_code: str = "") -> None:
        """Re-applies display texts after a language switch; values and selections are kept."""
        if self.manual_language_apply and not self.design_mode:
            return
        self.logger.debug("Retranslating to %s", language_code or self.language_table.language)
        self.apply_language()

    def initialize_for_designer(self) -> bool:
        """Runs the one-time design-time language pass. Returns False if it already ran."""
        return self.design_tracker.on_first_paint(self, self.language_table)

    # --- Qt lifecycle ---

    def showEvent(self, event: QShowEvent) -> None:
        if not self._loaded:
            self._loaded = True
            if self.design_mode:
                self.logger.info("Loading %s on a design surface.", type(self).__name__)
                self.apply_language()
            else:
                if not self.manual_language_apply:
                    self.apply_language()
                self.fill_fields()
        super().showEvent(event)

    def paintEvent(self, event: QPaintEvent) -> None:
        if self.design_mode:
            self.initialize_for_designer()
        super().paintEvent(event)

    def done(self, result: Any) -> None:
        accepted = QDialog.DialogCode.Accepted
        if result in (accepted, accepted.value) and not self.design_mode and not self.manual_store_fields:
            try:
                self.store_fields()
            except ConfigError as e:
                self.logger.error(f"Failed to persist settings: {e}")
        super().done(result)

    def closeEvent(self, event: QCloseEvent) -> None:
        if self.testAttribute(Qt.WidgetAttribute.WA_DeleteOnClose):
            self.dispose()
        super().closeEvent(event)

    def dispose(self) -> None:
        """Drops design-time notifications and the language subscription. Safe to call twice."""
        self.design_tracker.detach()
        if self._disposed:
            return
        self._disposed = True
        try:
            self.language_table.language_changed.disconnect(self.retranslate)
        except TypeError:
            self.logger.debug("Language subscription was already gone.")
