"""
Translator: the public facade over lookup, selection and interpolation.

Holds the mutable active locale. Every change applies immediately to the
next call; hosts that need to react to changes register a listener with
subscribe().

Usage:
    translator = Translator(
        default_language="en",
        translations={"hello": {"en": "Hello!", "de": "Hallo!"}},
    )
    translator.language = "de"
    translator.t("hello")                 # "Hallo!"
    translator.tc("cats", 3)              # pluralized
    translator.n(1234.56, "EUR")          # "1.234,56 €"
    translator.d(datetime.now(), "short")
"""

from collections.abc import Callable, Mapping
from typing import Any

import structlog
from babel import Locale as BabelLocale

from .cache import TemplateCache
from .config.schema import (
    DateTimeFormatOptions,
    DefaultFormats,
    I18nConfig,
    NumberFormatOptions,
)
from .formatting import (
    DateTimeFormat,
    DateTimeFormats,
    NumberFormat,
    NumberFormats,
    babel_locale,
    format_number,
)
from .interpolate import interpolate
from .locale import Locale, check_locale, normalize_language, resolve_languages
from .lookup import lookup
from .tables import Translation, TranslationTable
from .templates import select_message

logger = structlog.get_logger()

__all__ = ["Translator", "LocaleListener"]

LocaleListener = Callable[[Locale], None]


class Translator:
    """Translate messages and format numbers and dates for the active locale.

    Attributes:
        default_language: Normalized default language ("en" or "en-US" form),
            always the last entry of the fallback order.
        table: Private copy of the translations.
    """

    def __init__(
        self,
        default_language: str | Locale = "en",
        translations: Mapping[str, Translation] | None = None,
        number_formats: Mapping[str, Any] | None = None,
        date_time_formats: Mapping[str, Any] | None = None,
        formats: DefaultFormats | None = None,
        default_time_zone: str | None = None,
        cache: TemplateCache | None = None,
    ) -> None:
        self.default_language = normalize_language(default_language)
        self.table = TranslationTable(translations)
        self._cache = cache

        formats = formats or DefaultFormats()
        number_aliases = {
            name: NumberFormatOptions.model_validate(options)
            for name, options in (number_formats or {}).items()
        }
        date_aliases = {
            name: DateTimeFormatOptions.model_validate(options)
            for name, options in (date_time_formats or {}).items()
        }
        self.number_formats = NumberFormats(
            number_aliases,
            default=formats.number_format,
        )
        self.date_time_formats = DateTimeFormats(
            date_aliases,
            defaults=formats,
            time_zone=default_time_zone,
        )

        self._listeners: list[LocaleListener] = []
        self._locale = Locale.parse(self.default_language)
        check_locale(self._locale)

    @classmethod
    def from_config(
        cls,
        config: I18nConfig,
        translations: Mapping[str, Translation] | None = None,
    ) -> "Translator":
        """Build a translator from a validated I18nConfig."""
        return cls(
            default_language=config.default_language,
            translations=translations,
            number_formats=config.number_formats,
            date_time_formats=config.date_time_formats,
            formats=config.formats,
            default_time_zone=config.default_time_zone,
        )

    # ── Locale state ────────────────────────────────────────────────────

    @property
    def locale(self) -> Locale:
        return self._locale

    @locale.setter
    def locale(self, value: "Locale | str") -> None:
        self._locale = Locale.parse(value)
        check_locale(self._locale)
        self._notify()

    @property
    def language(self) -> str:
        return self._locale.language

    @language.setter
    def language(self, value: str) -> None:
        self.locale = self._locale.with_language(Locale.parse(value).language)

    @property
    def region(self) -> str | None:
        return self._locale.region

    @region.setter
    def region(self, value: str | None) -> None:
        self.locale = self._locale.with_region(value.upper() if value else None)

    @property
    def languages(self) -> tuple[str, ...]:
        """Current fallback order, highest precedence first."""
        return resolve_languages(self._locale, self.default_language)

    def subscribe(self, listener: LocaleListener) -> Callable[[], None]:
        """Call ``listener(locale)`` after every locale change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._locale)
            except Exception as e:
                logger.warning("i18n.listener_failed", locale=str(self._locale), error=str(e))

    def _babel_locale(self) -> BabelLocale:
        return babel_locale(self._locale, self.default_language)

    # ── Translation ─────────────────────────────────────────────────────

    def t(self, key: str | Translation, params: Mapping[str, Any] | None = None) -> str:
        """Translate a message key (or inline translation) with count 1."""
        return self.tc(key, 1, params)

    def tc(
        self,
        key: str | Translation,
        n: Any,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """Translate with pluralization.

        ``{n}`` is bound to the count unless ``params`` sets "n" itself, in
        which case that value drives both the variant and the display.

        Raises:
            EmptyKeyError: If the key is empty.
        """
        template = lookup(self.table, key, self.languages, self._cache)

        merged: dict[str, Any] = {"n": n}
        merged.update(params or {})

        locale = self._babel_locale()
        default = self.number_formats.default

        def number_formatter(value: Any) -> str:
            return format_number(value, default, locale)

        return interpolate(select_message(template, merged["n"]), merged, number_formatter)

    # ── Formatting ──────────────────────────────────────────────────────

    def n(self, value: Any = None, fmt: NumberFormat | None = "default") -> str:
        """Format a number for the current locale.

        ``fmt`` is an alias, an ISO 4217 currency code, or explicit options.
        """
        return self.number_formats.format(value, self._babel_locale(), fmt)

    def d(self, value: Any = None, fmt: DateTimeFormat | None = None) -> str:
        """Format a date and time for the current locale."""
        return self.date_time_formats.format(value, self._babel_locale(), fmt, "datetime")

    def d_date(self, value: Any = None, fmt: DateTimeFormat | None = None) -> str:
        """Format the date part only."""
        return self.date_time_formats.format(value, self._babel_locale(), fmt, "date")

    def d_time(self, value: Any = None, fmt: DateTimeFormat | None = None) -> str:
        """Format the time part only."""
        return self.date_time_formats.format(value, self._babel_locale(), fmt, "time")

    def __repr__(self) -> str:
        return f"Translator(locale={str(self._locale)!r}, default_language={self.default_language!r})"
