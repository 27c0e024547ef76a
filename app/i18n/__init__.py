# -*- coding: utf-8 -*-
"""
Internationalization (i18n) module for Tim Evaluator.

Supports English and German with automatic system locale detection.
Date and number widgets follow the Qt default locale, which set_language()
keeps in sync.
"""

import locale
import logging
from typing import Callable, List
from PySide6.QtCore import QLocale

from app.i18n.translations import TRANSLATIONS

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ["en", "de"]

_current_language = "en"

# Callbacks to notify when language changes
_language_changed_callbacks: List[Callable[[str], None]] = []


def detect_system_language() -> str:
    """Return 'de' for a German system locale, 'en' otherwise."""
    system_locale = locale.getlocale()[0] or QLocale.system().name()
    if system_locale and system_locale.lower().startswith('de'):
        return 'de'
    return 'en'


def get_language() -> str:
    return _current_language


def set_language(lang: str) -> None:
    """
    Set the current UI language.

    Args:
        lang: 'en', 'de' or 'auto' (detect from system)
    """
    global _current_language
    if lang == 'auto':
        lang = detect_system_language()
    if lang not in SUPPORTED_LANGUAGES:
        lang = 'en'
    _current_language = lang

    QLocale.setDefault(QLocale(QLocale.German if lang == 'de' else QLocale.English))

    for callback in list(_language_changed_callbacks):
        try:
            callback(lang)
        except Exception as e:
            logger.warning(f"Language change callback failed: {e}")


def tr(key: str, **kwargs) -> str:
    """
    Get the translated string for the given key.

    Args:
        key: Translation key (e.g., 'export.button')
        **kwargs: Format arguments for string interpolation

    Returns:
        Translated string, or the key itself if not found.
    """
    translations = TRANSLATIONS.get(_current_language, TRANSLATIONS['en'])
    text = translations.get(key, TRANSLATIONS['en'].get(key, key))
    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError):
            logger.warning(f"Could not format translation {key!r} with {kwargs}")
    return text


def on_language_changed(callback: Callable[[str], None]) -> None:
    if callback not in _language_changed_callbacks:
        _language_changed_callbacks.append(callback)


def remove_language_callback(callback: Callable[[str], None]) -> None:
    if callback in _language_changed_callbacks:
        _language_changed_callbacks.remove(callback)

