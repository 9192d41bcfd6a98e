"""
Locale-aware number and date/time formatting on top of Babel (CLDR data).

Formats are picked either by alias (a name registered at construction, or
any ISO 4217 currency code for numbers) or by passing explicit options.
Unknown aliases are reported and formatted with default options.
"""

import copy
import datetime as dt
import decimal
import numbers
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Literal

import structlog
from babel import Locale as BabelLocale
from babel import UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from .config.schema import DateTimeFormatOptions, DefaultFormats, NumberFormatOptions
from .locale import Locale

logger = structlog.get_logger()

__all__ = [
    "STYLES",
    "NumberFormat",
    "DateTimeFormat",
    "babel_locale",
    "coerce_datetime",
    "format_number",
    "format_datetime",
    "NumberFormats",
    "DateTimeFormats",
]

STYLES = ("short", "medium", "long", "full")

# An alias name (or currency code), explicit options, or a mapping of options
NumberFormat = str | NumberFormatOptions | Mapping[str, Any]
DateTimeFormat = str | DateTimeFormatOptions | Mapping[str, Any]

Variant = Literal["datetime", "date", "time"]

_FALLBACK_LANGUAGE = "en"

_VARIANT_ALIASES = {"datetime": "default", "date": "date", "time": "time"}


# ── Locales ──────────────────────────────────────────────────────────────


def _try_babel_locale(language: str, region: str | None = None) -> BabelLocale | None:
    try:
        return BabelLocale(language, territory=region)
    except (UnknownLocaleError, ValueError):
        return None


@lru_cache(maxsize=128)
def babel_locale(locale: Locale, default_language: str = _FALLBACK_LANGUAGE) -> BabelLocale:
    """Find the most specific Babel locale with CLDR data for ``locale``.

    Fallback: language_REGION → language → default language → English.
    """
    if locale.region and (found := _try_babel_locale(locale.language, locale.region)):
        return found
    if found := _try_babel_locale(locale.language):
        return found

    default = Locale.parse(default_language)
    if found := _try_babel_locale(default.language, default.region):
        return found
    if found := _try_babel_locale(default.language):
        return found

    return BabelLocale(_FALLBACK_LANGUAGE)


# ── Numbers ──────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def _currency_codes() -> frozenset[str]:
    return frozenset(babel_numbers.list_currencies())


def _base_pattern(options: NumberFormatOptions, locale: BabelLocale) -> babel_numbers.NumberPattern:
    if options.pattern:
        return babel_numbers.parse_pattern(options.pattern)
    if options.style == "currency":
        return locale.currency_formats["standard"]
    if options.style == "percent":
        return locale.percent_formats[None]
    if options.style == "scientific":
        return locale.scientific_formats[None]
    return locale.decimal_formats[None]


def format_number(value: Any, options: NumberFormatOptions, locale: BabelLocale) -> str:
    """Format a number with explicit options.

    Fraction digit bounds override those of the pattern (and, for
    currencies, the currency's own precision).
    """
    pattern = _base_pattern(options, locale)
    currency_digits = True

    minimum = options.minimum_fraction_digits
    maximum = options.maximum_fraction_digits
    if minimum is not None or maximum is not None:
        pattern = copy.copy(pattern)
        low, high = pattern.frac_prec
        if minimum is not None:
            low, high = minimum, max(high, minimum)
        if maximum is not None:
            low, high = min(low, maximum), maximum
        pattern.frac_prec = (low, high)
        currency_digits = False

    return pattern.apply(
        value,
        locale,
        currency=options.currency if options.style == "currency" else None,
        currency_digits=currency_digits,
        group_separator=options.use_grouping,
    )


class NumberFormats:
    """Number format alias table.

    Resolution order for a string: registered alias → ISO 4217 currency code.
    """

    def __init__(
        self,
        aliases: Mapping[str, NumberFormatOptions] | None = None,
        default: NumberFormatOptions | None = None,
    ) -> None:
        self._aliases: dict[str, NumberFormatOptions] = {"default": default or NumberFormatOptions()}
        self._aliases.update(aliases or {})
        self.default = self._aliases["default"]

    @property
    def aliases(self) -> list[str]:
        return sorted(self._aliases)

    def resolve(self, fmt: NumberFormat | None) -> NumberFormatOptions:
        if fmt is None:
            return self.default
        if isinstance(fmt, NumberFormatOptions):
            return fmt
        if isinstance(fmt, Mapping):
            return NumberFormatOptions.model_validate(fmt)

        options = self._aliases.get(fmt)
        if options is not None:
            return options
        if fmt in _currency_codes():
            return NumberFormatOptions(style="currency", currency=fmt)

        logger.warning("i18n.unknown_number_format", alias=fmt)
        return NumberFormatOptions()

    def format(self, value: Any, locale: BabelLocale, fmt: NumberFormat | None = None) -> str:
        """Format ``value``; None yields an empty string."""
        if value is None:
            return ""

        if isinstance(value, bool) or not isinstance(value, (numbers.Number, str)):
            logger.warning("i18n.invalid_number", value=repr(value))
            return ""

        if isinstance(value, str):
            try:
                value = decimal.Decimal(value.strip())
            except decimal.InvalidOperation:
                logger.warning("i18n.invalid_number", value=value)
                return ""

        return format_number(value, self.resolve(fmt), locale)


# ── Dates and times ──────────────────────────────────────────────────────


def coerce_datetime(value: Any) -> dt.datetime | None:
    """Turn a date input into an aware datetime.

    Accepts datetimes, dates (midnight), POSIX timestamps in seconds and
    ISO-8601 strings. Naive values are taken as UTC.

    Raises:
        ValueError: If a string is not valid ISO-8601.
        TypeError: If the value type is not supported.
        OverflowError, OSError: If a timestamp is out of the platform range.
    """
    if isinstance(value, dt.datetime):
        result = value
    elif isinstance(value, dt.date):
        result = dt.datetime.combine(value, dt.time.min)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        return dt.datetime.fromtimestamp(value, tz=dt.timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        result = dt.datetime.fromisoformat(text)
    else:
        raise TypeError(f"Unsupported date value: {type(value).__name__}")

    if result.tzinfo is None:
        result = result.replace(tzinfo=dt.timezone.utc)
    return result


def _timezone(name: str | None) -> dt.tzinfo | None:
    if not name:
        return None
    try:
        return babel_dates.get_timezone(name)
    except LookupError:
        logger.warning("i18n.unknown_time_zone", time_zone=name)
        return None


def format_datetime(
    value: dt.datetime,
    options: DateTimeFormatOptions,
    locale: BabelLocale,
    time_zone: str | None = None,
) -> str:
    """Format an aware datetime with explicit options.

    Args:
        value: Aware datetime
        options: Formatting options
        locale: Babel locale
        time_zone: Default time zone, used when options carry none. Without
            either, the value's own time zone is kept.
    """
    tz = _timezone(options.time_zone or time_zone) or value.tzinfo
    value = value.astimezone(tz)

    if options.pattern:
        return babel_dates.format_datetime(value, options.pattern, tzinfo=tz, locale=locale)
    if options.skeleton:
        return babel_dates.format_skeleton(options.skeleton, value, tzinfo=tz, locale=locale)

    date_style, time_style = options.date_style, options.time_style
    if not date_style and not time_style:
        date_style = time_style = "medium"

    if date_style and time_style:
        if date_style == time_style:
            return babel_dates.format_datetime(value, date_style, tzinfo=tz, locale=locale)
        time_part = babel_dates.format_time(value, time_style, tzinfo=tz, locale=locale)
        date_part = babel_dates.format_date(value, date_style, locale=locale)
        return (
            babel_dates.get_datetime_format(date_style, locale=locale)
            .replace("'", "")
            .replace("{0}", time_part)
            .replace("{1}", date_part)
        )

    if date_style:
        return babel_dates.format_date(value, date_style, locale=locale)
    return babel_dates.format_time(value, time_style, tzinfo=tz, locale=locale)


def _builtin_date_aliases(defaults: DefaultFormats) -> dict[str, DateTimeFormatOptions]:
    aliases: dict[str, DateTimeFormatOptions] = {
        "default": defaults.date_time_format,
        "date": defaults.date_only_format,
        "time": defaults.time_only_format,
    }
    for style in STYLES:
        aliases[style] = DateTimeFormatOptions(date_style=style, time_style=style)
        aliases[f"{style}Date"] = DateTimeFormatOptions(date_style=style)
        aliases[f"{style}Time"] = DateTimeFormatOptions(time_style=style)
    return aliases


class DateTimeFormats:
    """Date/time format alias table and the three formatting variants.

    For the date-only and time-only variants a bare style name ("short",
    "medium", "long", "full") selects that style for the date or the time.
    """

    def __init__(
        self,
        aliases: Mapping[str, DateTimeFormatOptions] | None = None,
        defaults: DefaultFormats | None = None,
        time_zone: str | None = None,
    ) -> None:
        self.defaults = defaults or DefaultFormats()
        self.time_zone = time_zone
        self._aliases = _builtin_date_aliases(self.defaults)
        self._aliases.update(aliases or {})

    @property
    def aliases(self) -> list[str]:
        return sorted(self._aliases)

    def _default_for(self, variant: Variant) -> DateTimeFormatOptions:
        # "default", "date" and "time" aliases may be overridden by the caller
        return self._aliases[_VARIANT_ALIASES[variant]]

    def resolve(self, fmt: DateTimeFormat | None, variant: Variant = "datetime") -> DateTimeFormatOptions:
        if fmt is None:
            return self._default_for(variant)
        if isinstance(fmt, DateTimeFormatOptions):
            return fmt
        if isinstance(fmt, Mapping):
            return DateTimeFormatOptions.model_validate(fmt)

        if fmt in STYLES and variant == "date":
            return DateTimeFormatOptions(date_style=fmt)
        if fmt in STYLES and variant == "time":
            return DateTimeFormatOptions(time_style=fmt)

        options = self._aliases.get(fmt)
        if options is not None:
            return options

        logger.warning("i18n.unknown_date_format", alias=fmt)
        return self._default_for(variant)

    def format(
        self,
        value: Any,
        locale: BabelLocale,
        fmt: DateTimeFormat | None = None,
        variant: Variant = "datetime",
    ) -> str:
        """Format a date input; None and "" yield an empty string."""
        if value is None or value == "":
            return ""

        try:
            moment = coerce_datetime(value)
        except (TypeError, ValueError, OverflowError, OSError) as e:
            logger.warning("i18n.invalid_date", value=repr(value), error=str(e))
            return ""

        return format_datetime(moment, self.resolve(fmt, variant), locale, self.time_zone)
