"""Locale-neutral collation for location names with accented characters."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

__all__ = ["collation_key", "sort_locations"]


def collation_key(name: str) -> str:
    """Return a diacritic- and case-insensitive sort key for ``name``.

    ``"São Paulo"`` and ``"sao paulo"`` produce the same key, so accented
    names sort next to their unaccented base letters.
    """

    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def sort_locations(names: Iterable[str]) -> list[str]:
    """Sort ``names`` by :func:`collation_key`; equal keys keep input order."""

    return sorted(names, key=collation_key)
