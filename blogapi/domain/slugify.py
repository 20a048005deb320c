# blogapi/domain/slugify.py
"""
Slug and text helpers for post content.

Todas las funciones son puras: sin I/O, misma entrada -> misma salida.
"""
import math
import re
from typing import Iterable, Optional

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")
_HTML_TAG = re.compile(r"<[^>]*>")

DEFAULT_EXCERPT_LENGTH = 150
DEFAULT_WORDS_PER_MINUTE = 200


def slugify(text: Optional[str]) -> str:
    """Convert arbitrary text into a URL-safe slug."""
    if not text:
        return ""

    slug = text.lower().strip()
    slug = _INVALID_CHARS.sub("", slug)
    slug = _WHITESPACE.sub(" ", slug)
    slug = slug.replace(" ", "-")
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def generate_unique_slug(text: Optional[str], existing_slugs: Iterable[str] = ()) -> str:
    """
    Slugify `text` and append the first free numeric suffix (-1, -2, ...)
    if the base slug is already in `existing_slugs`.
    """
    taken = set(existing_slugs)
    base = slugify(text)
    candidate = base
    counter = 1

    while candidate in taken:
        candidate = f"{base}-{counter}"
        counter += 1

    return candidate


def is_valid_slug(slug: Optional[str]) -> bool:
    if not slug:
        return False
    return SLUG_PATTERN.match(slug) is not None


def strip_html(text: Optional[str]) -> str:
    if not text:
        return ""
    return _HTML_TAG.sub("", text)


def clean_text(text: Optional[str]) -> str:
    """Strip tags, collapse whitespace and trim."""
    return _WHITESPACE.sub(" ", strip_html(text)).strip()


def word_count(text: Optional[str]) -> int:
    return len(strip_html(text).split())


def generate_excerpt(content: Optional[str], max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    cleaned = clean_text(content)
    if len(cleaned) <= max_length:
        return cleaned
    return cleaned[:max_length].strip() + "..."


def calculate_read_time(
    content: Optional[str],
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
) -> int:
    """Minutes to read `content`; 0 when empty, at least 1 otherwise."""
    if not content:
        return 0
    minutes = math.ceil(word_count(content) / words_per_minute)
    return max(1, minutes)
