"""Slug generation."""

import re
import unicodedata
from collections.abc import Awaitable, Callable

import logfire

from blog.domain.value import Slug
from blog.domain.value.types import SLUG_MAX_LENGTH

_SEPARATOR_RUN = re.compile(r"[\W_]+")


def slugify(text: str, separator: str = "-") -> str:
    """Convert text to a URL-safe slug.

    - Folds accented letters to their base letter
    - Lowercases
    - Replaces runs of whitespace/punctuation with one separator
    - Strips leading/trailing separators

    Args:
        text: Human-readable text
        separator: Separator between words

    Returns:
        Slug string (may be empty if text has no letters or digits)
    """
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c))
    slug = _SEPARATOR_RUN.sub(separator, folded.lower())
    return slug.strip(separator)[:SLUG_MAX_LENGTH].rstrip(separator)


async def generate_unique_slug(
    text: str,
    slug_exists: Callable[[Slug], Awaitable[bool]],
    fallback: str,
) -> Slug:
    """Generate a slug from text that is not taken yet.

    Collisions get a numeric suffix ("hello-world-2"). Text without any
    letters or digits uses ``fallback`` as its base.

    Args:
        text: Text to slugify
        slug_exists: Async predicate telling whether a slug is taken
        fallback: Base slug used when ``text`` slugifies to nothing

    Returns:
        Unique slug
    """
    base = slugify(text) or fallback
    candidate = base
    counter = 1
    while await slug_exists(Slug(candidate)):
        counter += 1
        suffix = f"-{counter}"
        candidate = base[: SLUG_MAX_LENGTH - len(suffix)].rstrip("-") + suffix
        logfire.debug("Slug collision, trying with suffix", base=base, attempt=candidate)
    return Slug(candidate)
