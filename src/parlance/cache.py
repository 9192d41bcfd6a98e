"""
Parsed-template cache.

Three levels: translation table (weak key) → primary language → message key.
Entries are filled lazily and only go away with their table. A lock makes
the check-then-fill step atomic so a cache can be shared between threads.
"""

import threading
import weakref
from collections.abc import Callable

import structlog

from .tables import TranslationTable
from .templates import ParsedTemplate

logger = structlog.get_logger()

__all__ = ["TemplateCache", "default_cache"]


class TemplateCache:
    """Memoizes ParsedTemplates per (table, primary language, key).

    Usage:
        cache = TemplateCache()
        template = cache.get_or_create(table, "de-DE", "hello", build)
    """

    def __init__(self) -> None:
        self._tables: weakref.WeakKeyDictionary[
            TranslationTable, dict[str, dict[str, ParsedTemplate]]
        ] = weakref.WeakKeyDictionary()
        self._lock = threading.Lock()

    def get(self, table: TranslationTable, language: str, key: str) -> ParsedTemplate | None:
        with self._lock:
            languages = self._tables.get(table)
            if languages is None:
                return None
            return languages.get(language, {}).get(key)

    def get_or_create(
        self,
        table: TranslationTable,
        language: str,
        key: str,
        factory: Callable[[], ParsedTemplate],
    ) -> ParsedTemplate:
        """Return the cached template, building and storing it on a miss.

        The factory runs under the cache lock; it must not re-enter the cache.
        """
        with self._lock:
            languages = self._tables.get(table)
            if languages is None:
                languages = {}
                self._tables[table] = languages

            templates = languages.setdefault(language, {})
            template = templates.get(key)
            if template is None:
                logger.debug("i18n.cache_miss", language=language, key=key)
                template = factory()
                templates[key] = template

            return template

    def __len__(self) -> int:
        """Number of tables currently holding cached templates."""
        with self._lock:
            return len(self._tables)

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()


default_cache = TemplateCache()
