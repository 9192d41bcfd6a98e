"""Tests for the Babel-backed number and date/time formatting."""

import datetime as dt
from decimal import Decimal

import pytest
from babel import Locale as BabelLocale
from babel import dates as babel_dates
from structlog.testing import capture_logs

from parlance.config.schema import DateTimeFormatOptions, DefaultFormats, NumberFormatOptions
from parlance.formatting import (
    DateTimeFormats,
    NumberFormats,
    babel_locale,
    coerce_datetime,
    format_datetime,
)
from parlance.locale import Locale

EN_US = BabelLocale("en", "US")
DE_DE = BabelLocale("de", "DE")

# 1234567890.123 seconds after the epoch
MOMENT = dt.datetime(2009, 2, 13, 23, 31, 30, 123000, tzinfo=dt.timezone.utc)


def warnings(logs: list[dict]) -> list[str]:
    return [entry["event"] for entry in logs if entry["log_level"] == "warning"]


# ── babel_locale ────────────────────────────────────────────────────────


class TestBabelLocale:
    def test_exact_match(self):
        assert str(babel_locale(Locale("de", "CH"))) == "de_CH"

    def test_unknown_region_falls_back_to_language(self):
        assert str(babel_locale(Locale("de", "ZZ"))) == "de"

    def test_unknown_language_falls_back_to_default(self):
        assert str(babel_locale(Locale("xx", "ZZ"), "fr-FR")) == "fr_FR"

    def test_last_resort_is_english(self):
        assert str(babel_locale(Locale("xx"), "yy")) == "en"


# ── Numbers ─────────────────────────────────────────────────────────────


class TestNumberFormats:
    @pytest.fixture
    def formats(self) -> NumberFormats:
        return NumberFormats(
            {
                "speed": NumberFormatOptions(pattern="#,##0.0"),
                "price": NumberFormatOptions(style="currency", currency="CHF"),
            }
        )

    def test_default_decimal(self, formats):
        assert formats.format(1234.56, EN_US) == "1,234.56"
        assert formats.format(1234.56, DE_DE) == "1.234,56"

    def test_integers_and_decimals(self, formats):
        assert formats.format(1234, EN_US) == "1,234"
        assert formats.format(Decimal("0.5"), EN_US) == "0.5"

    def test_currency_codes_are_aliases(self, formats):
        assert formats.format(1234.56, EN_US, "EUR") == "€1,234.56"
        assert formats.format(1234.56, EN_US, "USD") == "$1,234.56"
        assert formats.format(1234.56, DE_DE, "EUR") == "1.234,56\xa0€"
        assert formats.format(1234.56, DE_DE, "USD") == "1.234,56\xa0$"

    def test_custom_alias(self, formats):
        assert formats.format(1234.56, EN_US, "speed") == "1,234.6"

    def test_options_object(self, formats):
        options = NumberFormatOptions(minimum_fraction_digits=2)
        assert formats.format(1234.5, EN_US, options) == "1,234.50"

    def test_options_mapping(self, formats):
        assert formats.format(1234.56, EN_US, {"maximum_fraction_digits": 0}) == "1,235"

    def test_without_grouping(self, formats):
        assert formats.format(1234.56, EN_US, {"use_grouping": False}) == "1234.56"

    def test_percent(self, formats):
        assert formats.format(0.25, EN_US, {"style": "percent"}) == "25%"

    def test_currency_fraction_digits_override(self, formats):
        options = {"style": "currency", "currency": "EUR", "maximum_fraction_digits": 0}
        assert formats.format(1234.56, EN_US, options) == "€1,235"

    def test_none_is_empty(self, formats):
        assert formats.format(None, EN_US) == ""
        assert formats.format(None, EN_US, "EUR") == ""

    def test_numeric_string(self, formats):
        assert formats.format("1234.56", DE_DE) == "1.234,56"

    def test_invalid_values(self, formats):
        with capture_logs() as logs:
            assert formats.format("abc", EN_US) == ""
            assert formats.format(True, EN_US) == ""
        assert warnings(logs) == ["i18n.invalid_number", "i18n.invalid_number"]

    def test_unknown_alias_uses_default_options(self, formats):
        with capture_logs() as logs:
            assert formats.format(1234.56, EN_US, "bogus") == "1,234.56"
        assert warnings(logs) == ["i18n.unknown_number_format"]
        assert logs[0]["alias"] == "bogus"

    def test_configured_default(self):
        formats = NumberFormats(default=NumberFormatOptions(style="currency", currency="USD"))
        assert formats.format(1234.56, EN_US) == "$1,234.56"
        assert formats.format(1234.56, EN_US, "default") == "$1,234.56"

    def test_alias_overrides_default(self):
        formats = NumberFormats({"default": NumberFormatOptions(pattern="0.00")})
        assert formats.format(3, EN_US) == "3.00"

    def test_aliases_listing(self, formats):
        assert formats.aliases == ["default", "price", "speed"]

    def test_currency_style_requires_code(self):
        with pytest.raises(ValueError, match="requires a currency code"):
            NumberFormatOptions(style="currency")


# ── Date coercion ───────────────────────────────────────────────────────


class TestCoerceDatetime:
    def test_aware_datetime_unchanged(self):
        assert coerce_datetime(MOMENT) is MOMENT

    def test_naive_datetime_is_utc(self):
        naive = MOMENT.replace(tzinfo=None)
        assert coerce_datetime(naive) == MOMENT

    def test_date_is_midnight(self):
        result = coerce_datetime(dt.date(2009, 2, 13))
        assert result == dt.datetime(2009, 2, 13, tzinfo=dt.timezone.utc)

    def test_timestamp_in_seconds(self):
        assert coerce_datetime(1234567890.123) == MOMENT
        assert coerce_datetime(0) == dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)

    def test_iso_strings(self):
        assert coerce_datetime("2009-02-13T23:31:30.123Z") == MOMENT
        assert coerce_datetime("2009-02-14T00:31:30.123+01:00") == MOMENT

    def test_invalid_string(self):
        with pytest.raises(ValueError):
            coerce_datetime("yesterday")

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="Unsupported date value"):
            coerce_datetime(["2009"])


# ── Dates ───────────────────────────────────────────────────────────────


class TestFormatDatetime:
    def test_pattern(self):
        options = DateTimeFormatOptions(pattern="dd.MM.yyyy HH:mm:ss")
        assert format_datetime(MOMENT, options, EN_US) == "13.02.2009 23:31:30"

    def test_time_zone_option(self):
        options = DateTimeFormatOptions(pattern="yyyy-MM-dd HH:mm", time_zone="Europe/Berlin")
        assert format_datetime(MOMENT, options, EN_US) == "2009-02-14 00:31"

    def test_default_time_zone(self):
        options = DateTimeFormatOptions(pattern="HH:mm")
        assert format_datetime(MOMENT, options, EN_US, "America/New_York") == "18:31"

    def test_option_time_zone_wins(self):
        options = DateTimeFormatOptions(pattern="HH:mm", time_zone="UTC")
        assert format_datetime(MOMENT, options, EN_US, "America/New_York") == "23:31"

    def test_unknown_time_zone_keeps_value_zone(self):
        options = DateTimeFormatOptions(pattern="HH:mm", time_zone="Mars/Olympus")
        with capture_logs() as logs:
            assert format_datetime(MOMENT, options, EN_US) == "23:31"
        assert warnings(logs) == ["i18n.unknown_time_zone"]

    def test_date_style_only(self):
        options = DateTimeFormatOptions(date_style="medium")
        assert format_datetime(MOMENT, options, DE_DE) == "13.02.2009"
        assert format_datetime(MOMENT, options, EN_US) == babel_dates.format_date(
            MOMENT, "medium", locale=EN_US
        )

    def test_time_style_only(self):
        options = DateTimeFormatOptions(time_style="medium")
        assert format_datetime(MOMENT, options, DE_DE) == "23:31:30"

    def test_same_styles(self):
        options = DateTimeFormatOptions(date_style="short", time_style="short")
        expected = babel_dates.format_datetime(MOMENT, "short", tzinfo=dt.timezone.utc, locale=DE_DE)
        assert format_datetime(MOMENT, options, DE_DE) == expected

    def test_mixed_styles(self):
        options = DateTimeFormatOptions(date_style="long", time_style="short")
        result = format_datetime(MOMENT, options, EN_US)
        assert babel_dates.format_date(MOMENT, "long", locale=EN_US) in result
        assert babel_dates.format_time(MOMENT, "short", tzinfo=dt.timezone.utc, locale=EN_US) in result

    def test_no_style_is_medium(self):
        expected = babel_dates.format_datetime(MOMENT, "medium", tzinfo=dt.timezone.utc, locale=EN_US)
        assert format_datetime(MOMENT, DateTimeFormatOptions(), EN_US) == expected

    def test_skeleton(self):
        options = DateTimeFormatOptions(skeleton="yMd")
        expected = babel_dates.format_skeleton("yMd", MOMENT, tzinfo=dt.timezone.utc, locale=DE_DE)
        assert format_datetime(MOMENT, options, DE_DE) == expected


class TestDateTimeFormats:
    @pytest.fixture
    def formats(self) -> DateTimeFormats:
        return DateTimeFormats({"stamp": DateTimeFormatOptions(pattern="yyyyMMdd")})

    def test_variants_default_to_medium(self, formats):
        assert formats.format(MOMENT, DE_DE, variant="date") == "13.02.2009"
        assert formats.format(MOMENT, DE_DE, variant="time") == "23:31:30"
        assert formats.format(MOMENT, DE_DE) == babel_dates.format_datetime(
            MOMENT, "medium", tzinfo=dt.timezone.utc, locale=DE_DE
        )

    def test_builtin_aliases(self, formats):
        assert formats.format(MOMENT, DE_DE, "mediumDate") == "13.02.2009"
        assert formats.format(MOMENT, DE_DE, "date") == "13.02.2009"
        assert formats.format(MOMENT, DE_DE, "shortTime") == "23:31"
        assert formats.format(MOMENT, EN_US, "shortDate") == "2/13/09"

    def test_style_names_per_variant(self, formats):
        assert formats.format(MOMENT, EN_US, "short", "date") == "2/13/09"
        assert formats.format(MOMENT, DE_DE, "short", "time") == "23:31"

    def test_custom_alias(self, formats):
        assert formats.format(MOMENT, EN_US, "stamp") == "20090213"

    def test_mapping_options(self, formats):
        assert formats.format(MOMENT, EN_US, {"pattern": "MM/dd/yyyy"}) == "02/13/2009"

    def test_inputs(self, formats):
        for value in (MOMENT, 1234567890.123, "2009-02-13T23:31:30.123Z"):
            assert formats.format(value, DE_DE, variant="date") == "13.02.2009"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_inputs(self, formats, value):
        assert formats.format(value, EN_US) == ""
        assert formats.format(value, EN_US, variant="date") == ""
        assert formats.format(value, EN_US, variant="time") == ""

    def test_invalid_input(self, formats):
        with capture_logs() as logs:
            assert formats.format("not a date", EN_US) == ""
        assert warnings(logs) == ["i18n.invalid_date"]

    @pytest.mark.parametrize("value", [1e20, -1e20, float("inf"), float("nan")])
    def test_out_of_range_timestamps(self, formats, value):
        with capture_logs() as logs:
            assert formats.format(value, EN_US) == ""
            assert formats.format(value, EN_US, variant="date") == ""
            assert formats.format(value, EN_US, variant="time") == ""
        assert warnings(logs) == ["i18n.invalid_date"] * 3

    def test_unknown_alias_uses_variant_default(self, formats):
        with capture_logs() as logs:
            assert formats.format(MOMENT, DE_DE, "bogus", "date") == "13.02.2009"
        assert warnings(logs) == ["i18n.unknown_date_format"]

    def test_configured_defaults(self):
        defaults = DefaultFormats(
            date_time_format=DateTimeFormatOptions(pattern="dd.MM.yyyy HH:mm"),
            date_only_format=DateTimeFormatOptions(pattern="dd.MM.yyyy"),
            time_only_format=DateTimeFormatOptions(pattern="HH:mm:ss"),
        )
        formats = DateTimeFormats(defaults=defaults, time_zone="Europe/Berlin")
        assert formats.format(MOMENT, EN_US) == "14.02.2009 00:31"
        assert formats.format(MOMENT, EN_US, "default") == "14.02.2009 00:31"
        assert formats.format(MOMENT, EN_US, variant="date") == "14.02.2009"
        assert formats.format(MOMENT, EN_US, variant="time") == "00:31:30"

    def test_variant_aliases_override_defaults(self):
        formats = DateTimeFormats(
            {
                "default": DateTimeFormatOptions(pattern="MM/dd/yyyy, HH:mm:ss"),
                "date": DateTimeFormatOptions(pattern="MM/dd/yyyy"),
            }
        )
        assert formats.format(MOMENT, EN_US) == "02/13/2009, 23:31:30"
        assert formats.format(MOMENT, EN_US, variant="date") == "02/13/2009"
        assert formats.format(MOMENT, DE_DE, variant="time") == "23:31:30"
