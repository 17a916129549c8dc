"""
Language tables for FormBind.

This module loads localized strings from language-specific JSON files found in an
ordered list of directories. It initializes a singleton `table` instance which
resolves keys in the current language with a fallback to English (en_US).
"""

import logging
import locale
import json
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from PyQt6.QtCore import QObject, pyqtSignal

from .binding import binding

logger = logging.getLogger("FormBind.I18n")
table: Optional["LanguageTable"] = None


def get_locales_path() -> Path:
    """Returns the absolute path to the bundled 'locales' directory."""
    return Path(__file__).parent / "locales"


def get_language_table(language_code: Optional[str] = None) -> "LanguageTable":
    """
    Initializes (if needed) and returns the global language table singleton.
    """
    global table
    if table is None:
        logger.debug("First call; initializing language table singleton.")
        table = LanguageTable(language_code)
    return table


class LanguageTable(QObject):
    """
    Key to localized string lookup, loaded from `<language_code>.json` files.

    Keys starting with '//' are comments and never loaded. `resolve()` never raises;
    an unknown key is reported as not found.
    """
    language_changed = pyqtSignal(str)

    FALLBACK_LANGUAGE = "en_US"
    NAME_KEY = "language_name"

    def __init__(self, language_code: Optional[str] = None,
                 search_paths: Optional[List[Union[str, Path]]] = None,
                 parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._search_paths: List[Path] = []
        self._strings: Dict[str, str] = {}
        self._fallback_strings: Dict[str, str] = {}
        self.language = ""

        paths = search_paths if search_paths is not None else [get_locales_path()]
        for path in paths:
            self.add_language_file_path(path)

        self._fallback_strings = self._load_language(self.FALLBACK_LANGUAGE)
        if not self._fallback_strings:
            logger.error("Base language %s could not be loaded from %s", self.FALLBACK_LANGUAGE, self._search_paths)

        self._determine_and_set_language(language_code)

        try:
            self.validate()
        except ValueError as e:
            logger.error(f"Language table validation failed on initialization: {e}")

    @property
    def search_paths(self) -> List[Path]:
        return list(self._search_paths)

    def add_language_file_path(self, path: Union[str, Path]) -> bool:
        """
        Registers a directory holding language files.

        Returns True if the directory exists and contains at least one language file.
        Strings of the current language are reloaded so the new files take effect.
        """
        candidate = Path(path)
        if not candidate.is_dir():
            logger.debug("Language file path does not exist: %s", candidate)
            return False
        resolved = candidate.resolve()
        if not any(resolved.glob("*.json")):
            logger.debug("No language files in %s", resolved)
            return False
        if resolved in self._search_paths:
            return True

        self._search_paths.append(resolved)
        logger.info("Added language file path: %s", resolved)
        if self.language:
            self._fallback_strings = self._load_language(self.FALLBACK_LANGUAGE)
            self._strings = self._load_language(self.language) or self._fallback_strings
        return True

    def _load_language(self, lang_code: str) -> Dict[str, str]:
        """Loads and merges a language dictionary from every search path, later paths winning."""
        merged: Dict[str, str] = {}
        for directory in self._search_paths:
            lang_file = directory / f"{lang_code}.json"
            if not lang_file.exists():
                continue
            try:
                with lang_file.open('r', encoding='utf-8') as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                logger.error(f"Failed to load or parse language file {lang_file}: {e}")
                continue
            if not isinstance(data, dict):
                logger.error("Language file %s does not contain an object", lang_file)
                continue
            for key, value in data.items():
                if key.startswith('//'):
                    continue
                if not isinstance(value, str):
                    logger.error(f"Value for '{key}' in {lang_file} is not a string (type: {type(value)}).")
                    continue
                merged[key] = value
        return merged

    def _determine_and_set_language(self, language_code: Optional[str]) -> None:
        """Determines the most appropriate language to use and loads it."""
        if language_code:
            detected_language = language_code.replace('-', '_')
        else:
            try:
                detected_locale = locale.getlocale(locale.LC_CTYPE)
                detected_language = detected_locale[0].replace('-', '_') if detected_locale and detected_locale[0] else self.FALLBACK_LANGUAGE
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to get default locale: {e}, falling back to {self.FALLBACK_LANGUAGE}.")
                detected_language = self.FALLBACK_LANGUAGE

        available_languages = list(self.available_languages().keys())

        effective_language = self.FALLBACK_LANGUAGE
        if detected_language in available_languages:
            effective_language = detected_language
        else:
            base_language = detected_language.split('_')[0]
            for supported_lang in available_languages:
                if supported_lang.startswith(base_language + '_'):
                    effective_language = supported_lang
                    break

        self.set_language(effective_language)

    def available_languages(self) -> Dict[str, str]:
        """Maps every language code found on the search paths to its native name."""
        languages: Dict[str, str] = {}
        for directory in self._search_paths:
            for lang_file in sorted(directory.glob("*.json")):
                code = lang_file.stem
                if code in languages:
                    continue
                try:
                    with lang_file.open('r', encoding='utf-8') as f:
                        name = json.load(f).get(self.NAME_KEY, code)
                except (json.JSONDecodeError, IOError, AttributeError):
                    name = code
                languages[code] = name if isinstance(name, str) else code
        return languages

    def set_language(self, language_code: str) -> None:
        """Sets the current language, loads its strings and notifies listeners."""
        normalized_language = language_code.replace('-', '_')

        if self.language == normalized_language:
            return

        if normalized_language not in self.available_languages():
            logger.warning(f"Language '{language_code}' is not available. Falling back to {self.FALLBACK_LANGUAGE}.")
            normalized_language = self.FALLBACK_LANGUAGE
            if self.language == normalized_language:
                return

        self.language = normalized_language
        if self.language == self.FALLBACK_LANGUAGE:
            self._strings = self._fallback_strings
        else:
            self._strings = self._load_language(self.language)

        if not self._strings:
            logger.error(f"Failed to load strings for '{self.language}'. Using English fallbacks.")
            self._strings = self._fallback_strings

        logger.info(f"Language table ready. Effective language: {self.language}")
        self.language_changed.emit(self.language)

    def resolve(self, key: Optional[str]) -> Tuple[bool, str]:
        """
        Looks up `key` in the current language, then in en_US.

        Returns (found, text); text is empty when the key is unknown.
        """
        if not key:
            return False, ""
        value = self._strings.get(key)
        if value is None:
            value = self._fallback_strings.get(key)
            if value is not None and self.language != self.FALLBACK_LANGUAGE:
                logger.debug(f"Key '{key}' not found in language '{self.language}'. Using en_US fallback.")
        if value is None:
            return False, ""
        return True, value

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        found, text = self.resolve(key)
        return text if found else default

    def translate_enum(self, member: Enum) -> str:
        """Display text for an enum member, keyed as '<EnumName>.<MEMBER>'."""
        key = binding.ENUM_KEY_FORMAT.format(enum_name=type(member).__name__, member_name=member.name)
        found, text = self.resolve(key)
        return text if found else member.name

    def validate(self) -> None:
        """
        Validates that all language files contain the same keys as the en_US master.
        """
        logger.debug("Validating all language tables...")
        master_keys = set(self._fallback_strings.keys())

        validation_errors = []
        for lang_code in self.available_languages():
            if lang_code == self.FALLBACK_LANGUAGE:
                continue

            translations_dict = self._load_language(lang_code)
            if not translations_dict:
                validation_errors.append(f"Could not load or parse '{lang_code}'.")
                continue

            current_lang_keys = set(translations_dict.keys())

            missing_keys = master_keys - current_lang_keys
            if missing_keys:
                validation_errors.append(f"Language '{lang_code}' is missing keys: {sorted(list(missing_keys))}")

            extra_keys = current_lang_keys - master_keys
            if extra_keys:
                logger.warning(f"Language '{lang_code}' has extra keys not in en_US: {sorted(list(extra_keys))}")

        if validation_errors:
            error_summary = "Language table validation failed:\n- " + "\n- ".join(validation_errors)
            raise ValueError(error_summary)
        else:
            logger.debug("All language tables validated successfully against en_US keys.")
