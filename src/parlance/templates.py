"""
Pluralized message templates.

A raw message holds up to three variants separated by an unescaped pipe:

    "{n} apples"                        one variant for every count
    "one apple | {n} apples"            singular | zero-or-plural
    "no apples | one apple | {n} apples" zero | singular | plural

"\\|" is a literal pipe. Escaped backslashes ("\\\\") right before a bare
pipe belong to the delimiter and are dropped, so "a\\\\|b" splits into "a"
and "b". Anywhere else "\\\\" is kept as-is.
"""

import math
import numbers
import re
from dataclasses import dataclass
from typing import Any

__all__ = [
    "ParsedTemplate",
    "EMPTY_TEMPLATE",
    "parse_template",
    "select_message",
]

# Escaped backslashes ending in a pipe (split), an escaped backslash,
# an escaped pipe, or a bare pipe (split)
_PIPE_TOKENS = re.compile(r"(?:\\\\)+\||\\\\|\\\||\|")


@dataclass(frozen=True)
class ParsedTemplate:
    """The zero, singular and plural variants of a message, already trimmed."""

    zero: str
    singular: str
    plural: str


EMPTY_TEMPLATE = ParsedTemplate(zero="", singular="", plural="")


def _split_variants(raw: str) -> list[str]:
    segments: list[str] = []
    current: list[str] = []
    last = 0

    for match in _PIPE_TOKENS.finditer(raw):
        current.append(raw[last:match.start()])
        last = match.end()

        token = match.group()
        if token == "\\|":
            current.append("|")
        elif token.endswith("|"):
            segments.append("".join(current))
            current = []
        else:
            current.append(token)

    current.append(raw[last:])
    segments.append("".join(current))
    return segments


def parse_template(raw: str) -> ParsedTemplate:
    """Split a raw message into its zero, singular and plural variants.

    Never fails: an empty string yields a template of empty strings, and
    segments beyond the third are ignored.
    """
    segments = _split_variants(raw)

    if len(segments) == 1:
        zero = singular = plural = segments[0]
    elif len(segments) == 2:
        singular, plural = segments
        zero = plural
    else:
        zero, singular, plural = segments[:3]

    return ParsedTemplate(zero=zero.strip(), singular=singular.strip(), plural=plural.strip())


def _coerce_count(n: Any) -> Any:
    if isinstance(n, bool):
        return math.nan
    if isinstance(n, str):
        text = n.strip()
        if not text:
            return 0
        if "_" in text:
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    if isinstance(n, numbers.Number):
        return n
    return math.nan


def select_message(template: ParsedTemplate, n: Any) -> str:
    """Pick the variant for count ``n``.

    Numeric strings are coerced first and a blank string counts as 0.
    Exactly 0 selects the zero variant, exactly 1 the singular one; anything
    else (negative, fractional, NaN, non-numeric) selects the plural variant.
    """
    count = _coerce_count(n)
    if count == 0:
        return template.zero
    if count == 1:
        return template.singular
    return template.plural
