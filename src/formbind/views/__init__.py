"""
Views submodule for FormBind.

Contains the bindable form base class and the settings dialog built on it.
"""

from .form import BindableForm
from .settings import SettingsDialog

__all__ = ["BindableForm", "SettingsDialog"]
