"""
Internationalization and translation utilities.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from beanstore.infrastructure.utilities.constants import FileSettings

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "ja"
FALLBACK_LANGUAGE = "ja"


class I18nManager:
    """Process-wide message catalog; ja is the fallback for missing keys"""

    _instance = None
    _translations: Dict[str, Dict[str, str]] = {}
    _language: str = DEFAULT_LANGUAGE

    def __new__(cls) -> "I18nManager":
        if cls._instance is None:
            cls._instance = super(I18nManager, cls).__new__(cls)
            cls._instance._load_translations()
        return cls._instance

    def _load_translations(self) -> None:
        """Read every locales/<lang>.json; a failed reload keeps what is loaded"""
        locales_dir = Path(__file__).resolve().parent.parent.parent / FileSettings.LOCALES_DIRECTORY
        if not locales_dir.is_dir():
            logger.warning("Locales directory missing: %s", locales_dir)
            return

        loaded: Dict[str, Dict[str, str]] = {}
        for path in sorted(locales_dir.glob("*.json")):
            try:
                loaded[path.stem] = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.error("Could not read locale %s: %s", path.name, e)
            else:
                logger.debug("Loaded %d messages for %s", len(loaded[path.stem]), path.stem)

        if not loaded:
            logger.error("No locale files loaded, keeping %d languages", len(self._translations))
            return
        self._translations.update(loaded)

    def reload(self) -> None:
        """Reload locale files at runtime."""
        self._load_translations()

    def set_language(self, language: str) -> None:
        """Switch the default language for subsequent lookups"""
        if language not in self._translations:
            logger.warning("Unknown language %s, keeping %s", language, self._language)
            return
        self._language = language

    @property
    def language(self) -> str:
        return self._language

    def get_text(self, key: str, language: Optional[str] = None, **params) -> str:
        """Get translated text for a key, formatted with params"""
        language = language or self._language

        text = None
        for candidate in (language, FALLBACK_LANGUAGE, "en"):
            mapping = self._translations.get(candidate)
            if mapping and key in mapping:
                text = mapping[key]
                break

        if text is None:
            logger.warning("No translation found for key: %s", key)
            return key

        if params:
            try:
                return text.format(**params)
            except (KeyError, IndexError) as e:
                logger.error("Bad parameters for translation %s: %s", key, e)
        return text

    def get_available_languages(self) -> list[str]:
        return sorted(self._translations)


# Global instance
i18n = I18nManager()


def tr(key: str, language: Optional[str] = None, **params) -> str:
    """Translate a message key"""
    return i18n.get_text(key, language, **params)
