"""
Pydantic models for parlance configuration.

Defines the formatting aliases, default formats, locale defaults and
logging settings, using Pydantic v2 for validation and defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

Style = Literal["short", "medium", "long", "full"]


class NumberFormatOptions(BaseModel):
    """Options for formatting a number with Babel."""

    style: Literal["decimal", "currency", "percent", "scientific"] = "decimal"
    currency: str | None = Field(
        default=None,
        description="ISO 4217 currency code, required when style is 'currency'",
    )
    pattern: str | None = Field(
        default=None,
        description="CLDR number pattern (e.g. '#,##0.00'), overrides the locale pattern",
    )
    minimum_fraction_digits: int | None = Field(default=None, ge=0, le=20)
    maximum_fraction_digits: int | None = Field(default=None, ge=0, le=20)
    use_grouping: bool = True

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, v: str | None) -> str | None:
        return v.upper() if v else v

    @model_validator(mode="after")
    def _check_currency(self) -> "NumberFormatOptions":
        if self.style == "currency" and not self.currency:
            raise ValueError("style 'currency' requires a currency code")
        if (
            self.minimum_fraction_digits is not None
            and self.maximum_fraction_digits is not None
            and self.minimum_fraction_digits > self.maximum_fraction_digits
        ):
            raise ValueError("minimum_fraction_digits cannot exceed maximum_fraction_digits")
        return self


class DateTimeFormatOptions(BaseModel):
    """Options for formatting a date and/or time with Babel.

    Precedence: ``pattern`` → ``skeleton`` → ``date_style``/``time_style``.
    With none of them set, the medium date and time styles are used.
    """

    date_style: Style | None = None
    time_style: Style | None = None
    pattern: str | None = Field(
        default=None,
        description="CLDR date pattern (e.g. 'dd.MM.yyyy HH:mm')",
    )
    skeleton: str | None = Field(
        default=None,
        description="CLDR skeleton (e.g. 'yMMdd'), adapted to the locale",
    )
    time_zone: str | None = Field(
        default=None,
        description="IANA time zone name, overrides the default time zone",
    )

    model_config = {"extra": "forbid", "frozen": True}


class DefaultFormats(BaseModel):
    """Formats used when no alias or options are given."""

    date_time_format: DateTimeFormatOptions = Field(
        default_factory=lambda: DateTimeFormatOptions(date_style="medium", time_style="medium")
    )
    date_only_format: DateTimeFormatOptions = Field(
        default_factory=lambda: DateTimeFormatOptions(date_style="medium")
    )
    time_only_format: DateTimeFormatOptions = Field(
        default_factory=lambda: DateTimeFormatOptions(time_style="medium")
    )
    number_format: NumberFormatOptions = Field(default_factory=NumberFormatOptions)

    model_config = {"extra": "forbid"}


class LoggingConfig(BaseModel):
    """Logging system configuration."""

    level: Literal["debug", "info", "warn", "error"] = "warn"
    file: Path | None = None
    verbose: int = 0

    model_config = {"extra": "forbid"}


class I18nConfig(BaseModel):
    """Complete parlance configuration.

    This is the root of the configuration tree and the entry point for
    validation.
    """

    default_language: str = "en"
    default_time_zone: str | None = None
    number_formats: dict[str, NumberFormatOptions] = Field(default_factory=dict)
    date_time_formats: dict[str, DateTimeFormatOptions] = Field(default_factory=dict)
    formats: DefaultFormats = Field(default_factory=DefaultFormats)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}

    @field_validator("default_language")
    @classmethod
    def _non_empty_language(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("default_language cannot be empty")
        return v.strip()
