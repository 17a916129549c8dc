"""
Capability roles for bindable widgets.

A widget is Localizable when it exposes `language_key`, and ConfigBound when it exposes
`section_name` and `property_name`. Concrete components opt in through the
`LanguageBindable` and `ConfigBindable` mixins and declare a `binding_kind` tag, which the
configuration binder dispatches on.
"""

from enum import Enum
from typing import Any, Optional, Protocol, Tuple, runtime_checkable


class BindingKind(Enum):
    """How a ConfigBound widget exchanges its value with the configuration store."""
    NONE = "none"
    FLAG = "flag"
    TEXT = "text"
    HOTKEY = "hotkey"
    ENUM = "enum"


@runtime_checkable
class Localizable(Protocol):
    language_key: Optional[str]


@runtime_checkable
class ConfigBound(Protocol):
    section_name: Optional[str]
    property_name: Optional[str]


class LanguageBindable:
    """Mixin for widgets whose display text comes from the language table."""
    language_key: Optional[str] = None


class ConfigBindable:
    """Mixin for widgets whose value is bound to a configuration property."""
    binding_kind: BindingKind = BindingKind.NONE
    section_name: Optional[str] = None
    property_name: Optional[str] = None

    def bind_config(self, section_name: Optional[str], property_name: Optional[str]) -> None:
        self.section_name = section_name
        self.property_name = property_name


def config_binding(widget: Any) -> Optional[Tuple[str, str]]:
    """Returns (section, property) when `widget` is ConfigBound with both names set."""
    if not isinstance(widget, ConfigBound):
        return None
    if not widget.section_name or not widget.property_name:
        return None
    return widget.section_name, widget.property_name


def binding_kind_of(widget: Any) -> BindingKind:
    kind = getattr(widget, "binding_kind", BindingKind.NONE)
    return kind if isinstance(kind, BindingKind) else BindingKind.NONE
