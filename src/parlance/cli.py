"""
Command line interface for parlance using Click.

Translates inline messages and formats numbers and dates for a locale,
using the aliases and defaults of an optional YAML configuration.
"""

import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from . import __version__
from .config import I18nConfig, load_config
from .logging import configure_logging
from .lookup import EmptyKeyError
from .translator import Translator

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 3


def _load(kwargs: dict[str, Any]) -> I18nConfig:
    """Load the configuration and set up logging, exiting on config errors."""
    try:
        config = load_config(config_path=kwargs.get("config"), cli_args=kwargs)
    except (FileNotFoundError, ValidationError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    configure_logging(config.logging, quiet=kwargs.get("quiet", False))
    return config


def _make_translator(config: I18nConfig, locale: str | None) -> Translator:
    translator = Translator.from_config(config)
    if locale:
        translator.locale = locale
    return translator


def _split_pair(value: str, option: str) -> tuple[str, str]:
    name, sep, text = value.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected NAME=VALUE, got {value!r}", param_hint=option)
    return name.strip(), text


def _parse_number(value: str, param_hint: str = "VALUE") -> Any:
    try:
        number = Decimal(value)
    except InvalidOperation:
        raise click.BadParameter(f"not a number: {value!r}", param_hint=param_hint) from None
    if not number.is_finite():
        raise click.BadParameter(f"not a finite number: {value!r}", param_hint=param_hint)
    return int(number) if number == number.to_integral_value() and "." not in value else number


_common_options = [
    click.option(
        "-c",
        "--config",
        type=click.Path(exists=True, path_type=Path),
        help="Path to the YAML configuration file",
    ),
    click.option("-l", "--locale", help="Locale to use (e.g. de-DE), defaults to the default language"),
    click.option("--default-language", help="Override the configured default language"),
    click.option("--time-zone", help="Override the configured default time zone (IANA name)"),
    click.option(
        "--log-file",
        type=click.Path(path_type=Path),
        help="File to save structured logs (JSON)",
    ),
    click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv)"),
    click.option("-q", "--quiet", is_flag=True, help="Silence diagnostics on stderr"),
]


def common_options(func):
    for option in reversed(_common_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="parlance")
def main() -> None:
    """parlance - Locale-aware message translation and formatting.

    Translate pluralized messages and format numbers and dates
    according to CLDR locale conventions.
    """
    pass


@main.command("translate")
@click.argument("messages", nargs=-1, required=True)
@click.option("-n", "--count", default="1", show_default=True, help="Pluralization count")
@click.option("-p", "--param", "params", multiple=True, help="Interpolation parameter NAME=VALUE")
@common_options
def translate_cmd(
    messages: tuple[str, ...],
    count: str,
    params: tuple[str, ...],
    **kwargs: Any,
) -> None:
    """Translate an inline message given as LANG=TEXT pairs.

    Examples:

        \b
        $ parlance translate "en=one cat | {n} cats" "de=eine Katze | {n} Katzen" -l de -n 3
        3 Katzen
    """
    config = _load(kwargs)
    translator = _make_translator(config, kwargs.get("locale"))

    translation = dict(_split_pair(message, "MESSAGES") for message in messages)
    values = dict(_split_pair(param, "--param") for param in params)

    try:
        click.echo(translator.tc(translation, _parse_number(count, "--count"), values))
    except EmptyKeyError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_FAILED)


@main.command("number")
@click.argument("value")
@click.option("-f", "--format", "fmt", default="default", show_default=True, help="Alias or currency code")
@common_options
def number_cmd(
    value: str,
    fmt: str,
    **kwargs: Any,
) -> None:
    """Format a number.

    Examples:

        \b
        $ parlance number 1234.56 -l de-DE -f EUR
        1.234,56 €
    """
    config = _load(kwargs)
    translator = _make_translator(config, kwargs.get("locale"))
    click.echo(translator.n(_parse_number(value), fmt))


@main.command("date")
@click.argument("value")
@click.option("-f", "--format", "fmt", default=None, help="Date format alias (e.g. short, longDate)")
@click.option("--date-only", "variant", flag_value="date", help="Format only the date")
@click.option("--time-only", "variant", flag_value="time", help="Format only the time")
@common_options
def date_cmd(
    value: str,
    fmt: str | None,
    variant: str | None,
    **kwargs: Any,
) -> None:
    """Format an ISO-8601 date and time.

    Examples:

        \b
        $ parlance date 2009-02-13T23:31:30Z -l de-DE --date-only
        13.02.2009
    """
    config = _load(kwargs)
    translator = _make_translator(config, kwargs.get("locale"))

    if variant == "date":
        result = translator.d_date(value, fmt)
    elif variant == "time":
        result = translator.d_time(value, fmt)
    else:
        result = translator.d(value, fmt)

    if not result:
        click.echo(f"Error: invalid date {value!r}", err=True)
        sys.exit(EXIT_FAILED)
    click.echo(result)
