"""
Core submodule for FormBind.

Contains the binding passes: the per-class field cache, the language and configuration
binders, and the design-time tracker.
"""

from formbind.core.config_binder import ConfigBinder
from formbind.core.design_tracker import DesignSurface, DesignTimeRegistry, DesignTimeTracker
from formbind.core.field_cache import bindable_fields, register_fields
from formbind.core.language_binder import LanguageBinder
from formbind.core.roles import BindingKind, ConfigBindable, ConfigBound, LanguageBindable, Localizable

__all__ = [
    "BindingKind",
    "ConfigBindable",
    "ConfigBinder",
    "ConfigBound",
    "DesignSurface",
    "DesignTimeRegistry",
    "DesignTimeTracker",
    "LanguageBindable",
    "LanguageBinder",
    "Localizable",
    "bindable_fields",
    "register_fields",
]
