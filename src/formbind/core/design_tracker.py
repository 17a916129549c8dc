"""
Design-time tracking for FormBind.

While a form is placed on a `DesignSurface`, the tracker listens to the surface's
structural notifications: a changed language key is applied to its component at once,
and components added to the surface are recorded so that full language passes include
them even though the form declares no field for them. The first paint on the surface
triggers one full pass, after looking for language files next to the form's module.
"""

import inspect
import logging
import traceback
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QWidget

from formbind import constants
from formbind.core.language_binder import LanguageBinder
from formbind.utils.helpers import show_design_notice


class DesignSurface(QObject):
    """
    A visual editing host.

    Components placed with `add_component()` are sited on the surface; property edits made
    through `change_property()` are broadcast as `component_changed`.
    """
    component_changed = pyqtSignal(object, str, object, object)  # component, member, old, new
    component_added = pyqtSignal(object)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.components: List[Any] = []

    def add_component(self, component: Any) -> None:
        component.site = self
        self.components.append(component)
        self.component_added.emit(component)

    def change_property(self, component: Any, member: str, new_value: Any) -> None:
        old_value = getattr(component, member, None)
        setattr(component, member, new_value)
        self.component_changed.emit(component, member, old_value, new_value)

    def path_of_module(self, form_type: type) -> Path:
        """Directory of the module that defines `form_type`."""
        return Path(inspect.getfile(form_type)).resolve().parent


@dataclass
class DesignTimeRegistry:
    """Components added on the design surface, by objectName."""
    widgets: Dict[str, QWidget] = field(default_factory=dict)
    actions: Dict[str, QAction] = field(default_factory=dict)


class DesignSubscription:
    """
    The connection of a tracker to a surface's notifications.

    `release()` disconnects both handlers and may be called any number of times.
    """

    def __init__(self, surface: DesignSurface,
                 on_changed: Callable[[Any, str, Any, Any], None],
                 on_added: Callable[[Any], None]) -> None:
        self.surface: Optional[DesignSurface] = surface
        self._on_changed = on_changed
        self._on_added = on_added
        surface.component_changed.connect(on_changed)
        surface.component_added.connect(on_added)

    def __enter__(self) -> "DesignSubscription":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

    @property
    def active(self) -> bool:
        return self.surface is not None

    def release(self) -> None:
        if self.surface is None:
            return
        for signal, handler in ((self.surface.component_changed, self._on_changed),
                                (self.surface.component_added, self._on_added)):
            try:
                signal.disconnect(handler)
            except (TypeError, RuntimeError):
                # Already disconnected, or the surface was destroyed first.
                pass
        self.surface = None


class DesignTimeTracker:
    """Keeps a form's localization in sync with edits made on its design surface."""

    def __init__(self, binder: LanguageBinder) -> None:
        self.binder = binder
        self.registry = DesignTimeRegistry()
        self.logger = logging.getLogger("FormBind.DesignTimeTracker")
        self._subscription: Optional[DesignSubscription] = None
        self._language_applied = False

    @property
    def surface(self) -> Optional[DesignSurface]:
        return self._subscription.surface if self._subscription else None

    def attach(self, surface: DesignSurface) -> DesignSubscription:
        """Subscribes to `surface`, dropping any previous subscription first."""
        self.detach()
        self._subscription = DesignSubscription(surface, self.on_component_changed, self.on_component_added)
        self.logger.debug("Attached to design surface %r", surface)
        return self._subscription

    def detach(self) -> None:
        if self._subscription is None:
            return
        self._subscription.release()
        self._subscription = None
        self.logger.debug("Detached from design surface")

    def on_component_changed(self, component: Any, member: str, old_value: Any, new_value: Any) -> None:
        if component is None or getattr(component, "site", None) is None or not member:
            return
        if member != constants.binding.LANGUAGE_KEY_PROPERTY:
            return
        language_key = None if new_value is None else str(new_value)
        if isinstance(component, (QWidget, QAction)):
            self.logger.info("Changing language key for %s to %s", component.objectName(), language_key)
            self.binder.apply_to(component, language_key)
        else:
            self.logger.info("Not possible to change language key for %s to %s", type(component).__name__, language_key)

    def on_component_added(self, component: Any) -> None:
        if component is None or getattr(component, "site", None) is None:
            return
        if not isinstance(component, (QWidget, QAction)):
            return
        name = component.objectName()
        if not name:
            self.logger.debug("Skipping unnamed %s added on the design surface", type(component).__name__)
            return
        if isinstance(component, QWidget):
            self.registry.widgets[name] = component
        else:
            self.registry.actions[name] = component

    def discover_language_paths(self, form_type: type, language_table: Any) -> List[Path]:
        """Registers language directories found relative to the module of `form_type`."""
        surface = self.surface
        if surface is None:
            return []
        base = surface.path_of_module(form_type)
        added: List[Path] = []
        for pair in constants.binding.DESIGN_LANGUAGE_DIRS:
            for relative in pair:
                candidate = base.joinpath(*relative)
                if language_table.add_language_file_path(candidate):
                    added.append(candidate)
                    break
        return added

    def on_first_paint(self, form: QWidget, language_table: Any) -> bool:
        """
        Runs the one-time language pass for `form`. Returns False if it already ran.

        Failures are shown on the surface instead of propagating into the host.
        """
        if self._language_applied:
            return False
        self._language_applied = True
        title = constants.binding.messages.DESIGNER_EXCEPTION_TITLE
        try:
            self.discover_language_paths(type(form), language_table)
        except Exception as e:
            self.logger.error(f"Language file discovery failed: {e}", exc_info=True)
            show_design_notice(form, traceback.format_exc(), title)
        try:
            self.binder.apply_form(form, self.registry)
        except Exception as e:
            self.logger.error(f"Design-time language pass failed: {e}", exc_info=True)
            show_design_notice(form, traceback.format_exc(), title)
        return True
