"""
Parameter interpolation for selected messages.

Placeholders look like ``{name}`` or ``{ name }`` and match case-insensitively.
A backslash right before the brace escapes it: ``\\{name}`` renders as the
literal ``{name}``. Placeholders with no matching parameter are left alone.
"""

import numbers
import re
from collections.abc import Callable, Mapping
from typing import Any

__all__ = ["NumberFormatter", "format_param", "interpolate"]

NumberFormatter = Callable[[Any], str]


def format_param(value: Any, number_formatter: NumberFormatter) -> str:
    """Render a parameter value for substitution.

    Numbers go through the locale-aware formatter, strings are used verbatim,
    None becomes an empty string and anything else uses str().
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, numbers.Number) and not isinstance(value, bool):
        return number_formatter(value)
    return str(value)


def _placeholder(name: str) -> re.Pattern[str]:
    return re.compile(r"(\\?)(\{\s*" + re.escape(name) + r"\s*\})", re.IGNORECASE)


def interpolate(
    message: str,
    params: Mapping[str, Any],
    number_formatter: NumberFormatter,
) -> str:
    """Substitute ``params`` into ``message`` and trim the result.

    Parameters are applied one after the other, in mapping order.
    """
    formatted = message

    for name, value in params.items():
        rendered = format_param(value, number_formatter)

        def replace(match: re.Match[str], rendered: str = rendered) -> str:
            if match.group(1):
                return match.group(2)
            return rendered

        formatted = _placeholder(str(name)).sub(replace, formatted)

    return formatted.strip()
