"""String formatters for listing rows and cache headers."""

from __future__ import annotations

from datetime import datetime
from email.utils import formatdate
from typing import Protocol

from showdir.listing.entries import EntryStat
from showdir.listing.styles import ICONS

UNKNOWN_PERMS = "???!!!???"

_PERM_TRIADS = ("---", "--x", "-w-", "-wx", "r--", "r-x", "rw-", "rwx")
_SIZE_UNITS = ("k", "M", "G", "T", "P", "E", "Z", "Y")


class Named(Protocol):
    name: str

    def is_directory(self) -> bool: ...


def perms_to_string(stat: EntryStat | None) -> str:
    """``ls -l`` style permissions, e.g. ``drwxr-xr-x``."""
    if stat is None or not stat.mode:
        return UNKNOWN_PERMS
    kind = "d" if stat.is_directory() else "-"
    digits = f"{stat.mode & 0o777:03o}"
    return kind + "".join(_PERM_TRIADS[int(d)] for d in digits)


def size_to_string(stat: EntryStat | None, human_readable: bool = True, si: bool = False) -> str:
    """Byte count for files, empty for directories.

    With *human_readable*, sizes at or above one unit are scaled and printed
    with one decimal (``1.5k``); *si* switches the unit from 1024 to 1000.
    """
    if stat is None:
        return "?"
    if stat.is_directory():
        return ""

    size: float = stat.size
    threshold = 1000 if si else 1024
    if not human_readable or size < threshold:
        return f"{stat.size}B"

    unit = -1
    while size >= threshold and unit < len(_SIZE_UNITS) - 1:
        size /= threshold
        unit += 1
    return f"{size:.1f}{_SIZE_UNITS[unit]}"


def last_modified_to_string(stat: EntryStat | None) -> str:
    """Local modification time as ``DD-Mon-YYYY HH:MM``."""
    if stat is None:
        return ""
    return datetime.fromtimestamp(stat.mtime).strftime("%d-%b-%Y %H:%M")


def etag(stat: EntryStat, weak: bool = False) -> str:
    value = f'"{stat.ino}-{stat.size}-{int(stat.mtime * 1000)}"'
    return f"W/{value}" if weak else value


def http_date(timestamp: float) -> str:
    """RFC 1123 date in GMT, as used by ``Last-Modified``."""
    return formatdate(timestamp, usegmt=True)


def icon_class(entry: Named) -> str:
    if entry.is_directory():
        return "icon-_blank"
    ext = entry.name.rsplit(".", 1)[-1].lower()
    return f"icon-{ext}" if ext in ICONS else "icon-_page"
