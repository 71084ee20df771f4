"""Directory listing pipeline: resolve, stat, sort, render."""

from showdir.listing.aggregator import aggregate
from showdir.listing.entries import (
    Buckets,
    Entry,
    EntryStat,
    ListingRequest,
    ParentEntry,
    SyntheticEntry,
    UnreadableEntry,
    VirtualAction,
)
from showdir.listing.errors import ErrorAction, ErrorPolicy, PathOutsideRootError, ShowDirError
from showdir.listing.middleware import DirectoryListing
from showdir.listing.render import ListingRenderer, RenderOptions
from showdir.listing.sorting import sort_buckets, sort_entries

__all__ = [
    "Buckets",
    "DirectoryListing",
    "Entry",
    "EntryStat",
    "ErrorAction",
    "ErrorPolicy",
    "ListingRenderer",
    "ListingRequest",
    "ParentEntry",
    "PathOutsideRootError",
    "RenderOptions",
    "ShowDirError",
    "SyntheticEntry",
    "UnreadableEntry",
    "VirtualAction",
    "aggregate",
    "sort_buckets",
    "sort_entries",
]
