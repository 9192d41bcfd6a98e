"""
parlance - Locale-aware message translation and formatting.

Public API:
    Translator            : Translate keys or inline translations, format numbers and dates.
    install(translator)   : Make a translator the process-wide instance.
    get_translator()      : Get the process-wide instance.
    t / tc / n / d        : Shortcuts delegating to the process-wide instance.

Usage:
    from parlance import Translator, install, t

    install(Translator("en", {"hello": {"en": "Hello!", "de": "Hallo!"}}))
    get_translator().language = "de"
    print(t("hello"))
"""

import threading
from collections.abc import Mapping
from typing import Any

from .cache import TemplateCache
from .config import DateTimeFormatOptions, DefaultFormats, I18nConfig, NumberFormatOptions, load_config
from .locale import Locale, resolve_languages
from .lookup import EmptyKeyError
from .tables import (
    IncompleteTranslationsError,
    TranslationTable,
    assert_complete_translations,
    find_missing_translations,
)
from .templates import ParsedTemplate, parse_template, select_message
from .translator import Translator

__version__ = "0.1.0"

__all__ = [
    "Translator",
    "TranslationTable",
    "TemplateCache",
    "Locale",
    "ParsedTemplate",
    "parse_template",
    "select_message",
    "resolve_languages",
    "I18nConfig",
    "DefaultFormats",
    "NumberFormatOptions",
    "DateTimeFormatOptions",
    "load_config",
    "EmptyKeyError",
    "IncompleteTranslationsError",
    "TranslatorNotInstalledError",
    "find_missing_translations",
    "assert_complete_translations",
    "install",
    "get_translator",
    "reset",
    "t",
    "tc",
    "n",
    "d",
]


class TranslatorNotInstalledError(RuntimeError):
    """Raised when the process-wide translator is used before install()."""


_translator: Translator | None = None
_lock = threading.Lock()


def install(translator: Translator) -> Translator:
    """Make ``translator`` the process-wide instance and return it."""
    global _translator
    with _lock:
        _translator = translator
    return translator


def get_translator() -> Translator:
    """Get the process-wide translator.

    Raises:
        TranslatorNotInstalledError: If install() was never called.
    """
    translator = _translator
    if translator is None:
        raise TranslatorNotInstalledError("No translator installed, call parlance.install() first")
    return translator


def reset() -> None:
    """Forget the process-wide translator (for testing)."""
    global _translator
    with _lock:
        _translator = None


def t(key: str | Mapping[str, str], params: Mapping[str, Any] | None = None) -> str:
    """Translate a key with the process-wide translator."""
    return get_translator().t(key, params)


def tc(key: str | Mapping[str, str], count: Any, params: Mapping[str, Any] | None = None) -> str:
    """Translate a key with pluralization using the process-wide translator."""
    return get_translator().tc(key, count, params)


def n(value: Any = None, fmt: Any = "default") -> str:
    """Format a number with the process-wide translator."""
    return get_translator().n(value, fmt)


def d(value: Any = None, fmt: Any = None) -> str:
    """Format a date and time with the process-wide translator."""
    return get_translator().d(value, fmt)
