# Tests for listing/sorting.py
# Created: 2026-10-19

from showdir.listing.entries import (
    Buckets,
    Entry,
    EntryStat,
    SyntheticEntry,
    UnreadableEntry,
    VirtualAction,
    synthetic_stat,
)
from showdir.listing.sorting import sort_buckets, sort_entries, sort_key

STAT = EntryStat(is_dir=False, mode=0o100644, mtime=0.0, size=1)


def entries(*names):
    return [Entry(name, STAT) for name in names]


def names_of(items):
    return [item.name for item in items]


class TestSortEntries:
    def test_locale_aware_case_insensitive(self):
        assert names_of(sort_entries(entries("b", "a", "C"))) == ["a", "b", "C"]

    def test_repeated_runs_agree(self):
        first = names_of(sort_entries(entries("b", "a", "C")))
        for _ in range(5):
            assert names_of(sort_entries(entries("C", "b", "a"))) == first

    def test_idempotent(self):
        once = sort_entries(entries("Zeta", "alpha", "Beta", "beta", "_x", "10", "9"))
        assert sort_entries(once) == once

    def test_accents_sort_with_base_letter(self):
        assert names_of(sort_entries(entries("f", "é", "d"))) == ["d", "é", "f"]

    def test_case_tie_is_deterministic(self):
        assert names_of(sort_entries(entries("b", "B"))) == names_of(
            sort_entries(entries("B", "b"))
        )

    def test_does_not_mutate_input(self):
        items = entries("b", "a")
        sort_entries(items)
        assert names_of(items) == ["b", "a"]

    def test_sort_key_orders_by_folded_name_first(self):
        assert sort_key("a") < sort_key("B") < sort_key("c")


class TestSortBuckets:
    def test_each_bucket_sorted_independently(self):
        buckets = Buckets(
            directories=entries("z", "m"),
            files=entries("y", "b"),
            errors=[UnreadableEntry("q", OSError()), UnreadableEntry("c", OSError())],
        )
        result = sort_buckets(buckets)
        assert names_of(result.directories) == ["m", "z"]
        assert names_of(result.files) == ["b", "y"]
        assert names_of(result.errors) == ["c", "q"]

    def test_synthetic_entry_sorts_by_literal_name(self):
        action = VirtualAction(name="Play media with IINA")
        synthetic = SyntheticEntry(action.name, synthetic_stat(), action=action)
        buckets = Buckets(directories=[*entries("Zoo", "Albums"), synthetic])

        result = sort_buckets(buckets)
        assert names_of(result.directories) == ["Albums", "Play media with IINA", "Zoo"]
