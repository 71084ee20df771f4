# Deterministic ordering of listing rows.
# Created: 2026-10-19
#
# Keys ignore case and accents first and fall back to the raw name, so the
# order is the same under any process locale ("b", "a", "C" -> a, b, C).

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from typing import TypeVar

from showdir.listing.entries import Buckets

T = TypeVar("T")


def sort_key(name: str) -> tuple[str, str, str]:
    folded = unicodedata.normalize("NFKD", name).casefold()
    base = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return (base, folded, name)


def sort_entries(entries: Iterable[T]) -> list[T]:
    """Return *entries* stably sorted by name."""
    return sorted(entries, key=lambda entry: sort_key(entry.name))


def sort_buckets(buckets: Buckets) -> Buckets:
    """Sort each bucket on its own. The synthetic entry is not pinned."""
    return Buckets(
        directories=sort_entries(buckets.directories),
        files=sort_entries(buckets.files),
        errors=sort_entries(buckets.errors),
    )
