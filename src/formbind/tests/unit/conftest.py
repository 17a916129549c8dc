import json
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from formbind.constants.i18n import LanguageTable
from formbind.core import field_cache
from formbind.utils.config import ConfigStore


EN_STRINGS = {
    "// NOTE": "comment keys are skipped",
    "language_name": "English",
    "form_title": "Test Form",
    "greeting": "Hello",
    "btnSave": "Save",
    "group_general": "General",
    "menu_file": "File",
    "action_open": "Open",
    "action_recent": "Recent",
    "combo_format": "Format",
    "OutputFormat.PNG": "PNG image",
    "OutputFormat.JPG": "JPEG image",
    "OutputFormat.BMP": "Bitmap image",
    "OutputFormat.GIF": "GIF image",
}

DE_STRINGS = {
    "language_name": "Deutsch",
    "form_title": "Testformular",
    "greeting": "Hallo",
    "btnSave": "Speichern",
    "group_general": "Allgemein",
    "menu_file": "Datei",
    "action_open": "Öffnen",
    "action_recent": "Zuletzt",
    "combo_format": "Format",
    "OutputFormat.PNG": "PNG-Bild",
    "OutputFormat.JPG": "JPEG-Bild",
    "OutputFormat.BMP": "Bitmap-Bild",
    "OutputFormat.GIF": "GIF-Bild",
}


@pytest.fixture(scope="session")
def q_app():
    """Provides a QApplication instance for the test session."""
    return QApplication.instance() or QApplication([])


@pytest.fixture(autouse=True)
def clean_field_cache():
    """Every test starts with an empty per-class field cache."""
    field_cache.clear()
    yield
    field_cache.clear()


@pytest.fixture
def locales_dir(tmp_path):
    directory = tmp_path / "locales"
    directory.mkdir()
    (directory / "en_US.json").write_text(json.dumps(EN_STRINGS), encoding="utf-8")
    (directory / "de_DE.json").write_text(json.dumps(DE_STRINGS), encoding="utf-8")
    return directory


@pytest.fixture
def language_table(q_app, locales_dir):
    return LanguageTable("en_US", search_paths=[locales_dir])


@pytest.fixture
def config_store(tmp_path):
    store = ConfigStore(config_path=tmp_path / "config" / "FormBind_Config.json")
    store.load()
    return store
