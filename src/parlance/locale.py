"""
Locale model and language fallback resolution.

A Locale is a language tag plus an optional region tag. Codes are opaque:
they are never rejected, only reported through diagnostics when Babel's
display-name tables do not recognize them.

Fallback order for a locale "de-CH" with default language "en":
    de-CH → de → en
"""

import re
from dataclasses import dataclass
from functools import lru_cache

import structlog
from babel import Locale as BabelLocale

logger = structlog.get_logger()

__all__ = [
    "Locale",
    "normalize_language",
    "resolve_languages",
    "check_locale",
]

_SUBTAG_SEPARATOR = re.compile(r"[-_]")
_REGION_SUBTAG = re.compile(r"^(?:[A-Za-z]{2}|\d{3})$")

# CLDR placeholder names for the "und" language and the "ZZ" region
_UNKNOWN_LANGUAGE = "Unknown language"
_UNKNOWN_REGION = "Unknown Region"


@dataclass(frozen=True)
class Locale:
    """Active locale: a language identifier and an optional region."""

    language: str
    region: str | None = None

    def __str__(self) -> str:
        if self.region:
            return f"{self.language}-{self.region}"
        return self.language

    @classmethod
    def parse(cls, code: "str | Locale") -> "Locale":
        """Parse a locale code such as "de", "de-DE", "de_DE" or "zh-Hant-TW".

        The first subtag is the language (lower-cased). The region is the
        first later subtag made of two letters or three digits (upper-cased).
        Any other subtag (scripts, variants) is ignored.
        """
        if isinstance(code, Locale):
            return code

        parts = [part for part in _SUBTAG_SEPARATOR.split(code.strip()) if part]
        if not parts:
            raise ValueError(f"Invalid locale code: {code!r}")

        region = None
        for part in parts[1:]:
            if _REGION_SUBTAG.match(part):
                region = part.upper()
                break

        return cls(language=parts[0].lower(), region=region)

    def with_language(self, language: str) -> "Locale":
        """Return a copy with another language, keeping the region."""
        return Locale(language=language, region=self.region)

    def with_region(self, region: str | None) -> "Locale":
        """Return a copy with another region (falsy clears it), keeping the language."""
        return Locale(language=self.language, region=region or None)


def normalize_language(code: "str | Locale") -> str:
    """Normalize a default language to the "language" or "language-REGION" form."""
    return str(Locale.parse(code))


def resolve_languages(locale: Locale, default_language: str) -> tuple[str, ...]:
    """Compute the ordered fallback list of language identifiers.

    Highest precedence first: language-region (if a region is set), the bare
    language, then the default language when it differs from both.

    Returns:
        Non-empty tuple of language identifiers.
    """
    order: list[str] = []
    if locale.region:
        order.append(f"{locale.language}-{locale.region}")
    order.append(locale.language)
    if default_language not in order:
        order.append(default_language)
    return tuple(order)


@lru_cache(maxsize=1)
def _display_names() -> BabelLocale:
    return BabelLocale("en", "US")


def check_locale(locale: Locale) -> bool:
    """Emit diagnostics for language or region codes unknown to CLDR.

    Purely observational: never raises and never alters the locale.

    Returns:
        True if both codes are known.
    """
    names = _display_names()
    known = True

    language_name = names.languages.get(locale.language)
    if not language_name or language_name == _UNKNOWN_LANGUAGE:
        logger.warning("i18n.unknown_language", language=locale.language)
        known = False

    if not locale.region:
        return known

    region_name = names.territories.get(locale.region)
    if not region_name or region_name == _UNKNOWN_REGION:
        logger.warning("i18n.unknown_region", region=locale.region)
        known = False

    return known
