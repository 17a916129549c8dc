"""
Unit tests for the LanguageTable.
"""
import json
from unittest.mock import MagicMock, patch

import pytest

from formbind.constants import i18n
from formbind.constants.config import OutputFormat
from formbind.constants.i18n import LanguageTable


def test_resolve_known_and_unknown_keys(language_table):
    assert language_table.resolve("greeting") == (True, "Hello")
    assert language_table.resolve("does_not_exist") == (False, "")
    assert language_table.resolve("") == (False, "")
    assert language_table.resolve(None) == (False, "")


def test_comment_keys_are_not_loaded(language_table):
    assert language_table.resolve("// NOTE") == (False, "")


def test_missing_key_falls_back_to_english(q_app, locales_dir):
    de = json.loads((locales_dir / "de_DE.json").read_text(encoding="utf-8"))
    del de["greeting"]
    (locales_dir / "de_DE.json").write_text(json.dumps(de), encoding="utf-8")

    table = LanguageTable("de_DE", search_paths=[locales_dir])

    assert table.resolve("greeting") == (True, "Hello")
    assert table.resolve("form_title") == (True, "Testformular")


def test_set_language_emits_signal(language_table):
    listener = MagicMock()
    language_table.language_changed.connect(listener)

    language_table.set_language("de-DE")
    language_table.set_language("de_DE")

    listener.assert_called_once_with("de_DE")
    assert language_table.get("greeting") == "Hallo"


def test_unavailable_language_falls_back(language_table):
    language_table.set_language("de_DE")
    language_table.set_language("xx_XX")
    assert language_table.language == "en_US"


def test_regional_variant_picks_same_base_language(q_app, locales_dir):
    table = LanguageTable("de_AT", search_paths=[locales_dir])
    assert table.language == "de_DE"


def test_available_languages_use_native_names(language_table):
    assert language_table.available_languages() == {"de_DE": "Deutsch", "en_US": "English"}


def test_translate_enum(language_table):
    assert language_table.translate_enum(OutputFormat.JPG) == "JPEG image"
    language_table.set_language("de_DE")
    assert language_table.translate_enum(OutputFormat.JPG) == "JPEG-Bild"


def test_translate_enum_without_entry_uses_member_name(q_app, tmp_path):
    directory = tmp_path / "bare"
    directory.mkdir()
    (directory / "en_US.json").write_text(json.dumps({"language_name": "English"}), encoding="utf-8")
    table = LanguageTable("en_US", search_paths=[directory])
    assert table.translate_enum(OutputFormat.BMP) == "BMP"


def test_add_language_file_path(language_table, tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    extra = tmp_path / "extra"
    extra.mkdir()
    (extra / "en_US.json").write_text(json.dumps({"greeting": "Hi there", "farewell": "Bye"}), encoding="utf-8")

    assert language_table.add_language_file_path(tmp_path / "missing") is False
    assert language_table.add_language_file_path(empty) is False
    assert language_table.add_language_file_path(extra) is True
    assert language_table.add_language_file_path(extra) is True

    assert language_table.search_paths.count(extra.resolve()) == 1
    assert language_table.resolve("greeting") == (True, "Hi there")
    assert language_table.resolve("farewell") == (True, "Bye")


def test_validate_reports_missing_keys(language_table, locales_dir):
    (locales_dir / "de_DE.json").write_text(json.dumps({"language_name": "Deutsch"}), encoding="utf-8")
    with pytest.raises(ValueError, match="de_DE"):
        language_table.validate()


def test_get_language_table_is_a_singleton(q_app, monkeypatch, locales_dir):
    monkeypatch.setattr(i18n, "table", None)
    with patch.object(i18n, "get_locales_path", return_value=locales_dir):
        first = i18n.get_language_table("de_DE")
        second = i18n.get_language_table("en_US")
    assert first is second
    assert first.language == "de_DE"


def test_bundled_tables_load(q_app):
    table = LanguageTable("en_US")
    assert table.resolve("settings_title") == (True, "Settings")
    assert table.translate_enum(OutputFormat.PNG) == "PNG image"
    table.validate()
