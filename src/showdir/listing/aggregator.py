"""Concurrent stat fan-out over the names of one directory.

Every name except the synthetic one is stat'ed at once; the listing waits
until all lookups have settled. A failing lookup is recorded, never raised.
Stats run in the event loop's default executor (aiofiles), so a client
disconnect does not stop lookups that a worker thread already started.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable, Iterable

import aiofiles.os

from showdir.listing.entries import (
    Buckets,
    Entry,
    EntryStat,
    SyntheticEntry,
    UnreadableEntry,
    VirtualAction,
    synthetic_stat,
)

logger = logging.getLogger(__name__)

StatFunc = Callable[[str], Awaitable[os.stat_result]]


async def _lookup(directory: str, name: str, stat: StatFunc) -> Entry | UnreadableEntry:
    try:
        st = await stat(os.path.join(directory, name))
    except OSError as e:
        logger.debug("Cannot stat %s in %s: %s", name, directory, e)
        return UnreadableEntry(name, e)
    return Entry(name, EntryStat.from_stat_result(st))


async def aggregate(
    directory: str,
    names: Iterable[str],
    action: VirtualAction,
    *,
    stat: StatFunc | None = None,
) -> Buckets:
    """Stat *names* inside *directory* and partition them.

    Returns a :class:`Buckets` with directories, files and unreadable names.
    A name equal to ``action.name`` becomes a :class:`SyntheticEntry` in the
    directory bucket without any I/O. With no names, returns empty buckets
    without scheduling anything.
    """
    stat = stat or aiofiles.os.stat
    buckets = Buckets()

    pending = []
    for name in names:
        if name == action.name:
            buckets.directories.append(SyntheticEntry(name, synthetic_stat(), action=action))
        else:
            pending.append(_lookup(directory, name, stat))

    if not pending:
        return buckets

    # Results come back in dispatch order whatever order the stats finish in.
    for result in await asyncio.gather(*pending):
        if isinstance(result, UnreadableEntry):
            buckets.errors.append(result)
        elif result.is_directory():
            buckets.directories.append(result)
        else:
            buckets.files.append(result)

    if buckets.errors:
        logger.debug(
            "%d of %d entries unreadable in %s", len(buckets.errors), len(buckets), directory
        )
    return buckets
