"""
Message lookup: from a key (or inline translation) to a ParsedTemplate.

Keys go through the translation table and the template cache. Inline
translations (a ``language → message`` mapping given by the caller) bypass
both, since their identity is not stable across calls.
"""

from collections.abc import Mapping, Sequence

import structlog

from .cache import TemplateCache, default_cache
from .tables import Translation, TranslationTable
from .templates import EMPTY_TEMPLATE, ParsedTemplate, parse_template

logger = structlog.get_logger()

__all__ = ["EmptyKeyError", "lookup", "extract_template"]


class EmptyKeyError(ValueError):
    """Raised when an empty translation key is passed to t() or tc()."""

    def __init__(self) -> None:
        super().__init__("No translation key specified")


def extract_template(translation: Translation, languages: Sequence[str]) -> ParsedTemplate:
    """Pick the first message available in fallback order and parse it.

    An empty message counts as absent. When no language matches, a
    ``i18n.missing_default_language`` diagnostic is emitted and an empty
    template is returned.
    """
    for language in languages:
        message = translation.get(language)
        if message:
            return parse_template(message)

    logger.warning(
        "i18n.missing_default_language",
        language=languages[-1],
        translation=dict(translation),
    )
    return EMPTY_TEMPLATE


def lookup(
    table: TranslationTable,
    key_or_inline: str | Translation,
    languages: Sequence[str],
    cache: TemplateCache | None = None,
) -> ParsedTemplate:
    """Resolve a message key or inline translation to a ParsedTemplate.

    Args:
        table: Translation table searched for string keys.
        key_or_inline: Message key, or an inline ``language → message`` mapping.
        languages: Non-empty fallback order, highest precedence first.
        cache: Template cache (the shared module cache by default).

    Returns:
        The parsed template. An unknown key yields a template displaying the key.

    Raises:
        EmptyKeyError: If the key is falsy ("", None, 0...).
    """
    if isinstance(key_or_inline, Mapping):
        return extract_template(key_or_inline, languages)

    if not key_or_inline:
        raise EmptyKeyError()

    key = str(key_or_inline)
    cache = cache if cache is not None else default_cache

    def build() -> ParsedTemplate:
        translation = table.get(key)
        if translation is None:
            logger.warning("i18n.missing_key", key=key)
            translation = {languages[-1]: key}
        return extract_template(translation, languages)

    return cache.get_or_create(table, languages[0], key, build)
