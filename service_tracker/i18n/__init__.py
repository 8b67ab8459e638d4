# -*- coding: utf-8 -*-
"""
Internationalization (i18n) module for Service Tracker.

This module provides translation functions and language management.
Supports English and Spanish with automatic system locale detection.
"""

import locale
import logging
from datetime import datetime, tzinfo
from typing import Optional

from service_tracker.i18n.translations import TRANSLATIONS

logger = logging.getLogger(__name__)

# Supported languages
SUPPORTED_LANGUAGES = ["en", "es"]

# Current language (default to English)
_current_language = "en"


def detect_system_language() -> str:
    """
    Detect the system language and return a supported language code.

    Returns:
        'es' if Spanish is detected, 'en' otherwise.
    """
    system_locale, _ = locale.getlocale()
    if system_locale and system_locale.lower().startswith('es'):
        return 'es'
    return 'en'


def set_language(lang: str) -> None:
    """
    Set the current UI language.

    Args:
        lang: Language code ('en', 'es' or 'auto')
    """
    global _current_language
    if lang == 'auto':
        lang = detect_system_language()
    if lang not in SUPPORTED_LANGUAGES:
        logger.warning(f"Unsupported language {lang!r}, falling back to English")
        lang = 'en'
    _current_language = lang


def tr(key: str, **kwargs) -> str:
    """
    Get the translated string for the given key.

    Args:
        key: Translation key (e.g., 'records.name')
        **kwargs: Format arguments for string interpolation

    Returns:
        Translated string, or the key itself if not found.
    """
    translations = TRANSLATIONS.get(_current_language, TRANSLATIONS.get('en', {}))
    text = translations.get(key, key)

    # Apply format arguments if provided
    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError):
            pass

    return text


def format_timestamp(value: datetime, tz: Optional[tzinfo] = None) -> str:
    """
    Render a timestamp in local time using the current language's format.

    Args:
        value: Timezone-aware timestamp
        tz: Target timezone, defaults to the system's local zone
    """
    return value.astimezone(tz).strftime(tr("format.timestamp"))
