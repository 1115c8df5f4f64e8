"""Domain value objects used across aggregates."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def slugify(text: str) -> str:
    """Derive a URL-safe slug: lower-cased, diacritics stripped, runs of
    non-alphanumerics collapsed to ``-`` and trimmed at both ends."""
    if not text:
        return ""

    decomposed = unicodedata.normalize("NFKD", text)
    ascii_only = decomposed.encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM_RUN.sub("-", ascii_only.lower()).strip("-")


@dataclass(frozen=True)
class Slug:
    """Value object for URL-safe identifiers derived from display names."""

    value: str

    def __init__(self, source: str):
        slug = slugify(source)
        if not slug:
            raise ValueError("Slug cannot be empty")
        object.__setattr__(self, "value", slug)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EmailAddress:
    """Value object for email addresses with validation."""

    value: str

    def __init__(self, value: str):
        if not value or not _EMAIL_PATTERN.match(value.strip()):
            raise ValueError("Invalid email address format")

        object.__setattr__(self, "value", value.lower().strip())

    def __str__(self) -> str:
        return self.value


__all__ = ["slugify", "Slug", "EmailAddress"]
