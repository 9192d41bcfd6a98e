"""
Translation tables and completeness checks.

A TranslationTable is an immutable snapshot of ``key → {language → message}``.
It hashes by identity so the template cache can hold it as a weak key and
forget its entries once the table is garbage-collected.
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

__all__ = [
    "Translation",
    "TranslationTable",
    "IncompleteTranslationsError",
    "find_missing_translations",
    "assert_complete_translations",
]

# language → raw message
Translation = Mapping[str, str]


class IncompleteTranslationsError(ValueError):
    """Raised when a table lacks messages for some required languages."""

    def __init__(self, missing: dict[str, list[str]]) -> None:
        self.missing = missing
        details = ", ".join(
            f"{key} ({', '.join(languages)})" for key, languages in sorted(missing.items())
        )
        super().__init__(f"Missing translations: {details}")


class TranslationTable:
    """Immutable mapping from message key to its per-language messages."""

    __slots__ = ("_entries", "__weakref__")

    def __init__(self, translations: Mapping[str, Translation] | None = None) -> None:
        entries = {
            str(key): MappingProxyType(dict(entry))
            for key, entry in (translations or {}).items()
        }
        self._entries: Mapping[str, Translation] = MappingProxyType(entries)

    def get(self, key: str) -> Translation | None:
        return self._entries.get(key)

    def __getitem__(self, key: str) -> Translation:
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self):
        return self._entries.keys()

    def items(self):
        return self._entries.items()

    def __repr__(self) -> str:
        return f"TranslationTable({len(self._entries)} keys)"


def find_missing_translations(
    table: TranslationTable | Mapping[str, Translation],
    languages: Iterable[str],
) -> dict[str, list[str]]:
    """Walk a table and report, per key, the required languages it lacks.

    A language whose message is an empty string counts as missing.

    Returns:
        Mapping of key → missing languages (only keys with gaps are present).
    """
    required = list(languages)
    missing: dict[str, list[str]] = {}

    for key, entry in table.items():
        absent = [language for language in required if not entry.get(language)]
        if absent:
            missing[key] = absent

    return missing


def assert_complete_translations(
    table: TranslationTable | Mapping[str, Translation],
    languages: Iterable[str],
) -> None:
    """Raise IncompleteTranslationsError if any key lacks a required language."""
    missing = find_missing_translations(table, languages)
    if missing:
        raise IncompleteTranslationsError(missing)
