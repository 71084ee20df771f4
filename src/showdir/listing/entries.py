"""Directory listing data models.

Design notes:
- Every row of a listing is one of four frozen dataclasses: a real ``Entry``,
  the ``ParentEntry`` (".."), the ``SyntheticEntry`` for the play-media action,
  and an ``UnreadableEntry`` for names that failed to stat.
- All variants answer ``name``, ``kind``, ``is_directory()`` and
  ``href(context)`` so the sorter and renderer treat them the same way.
- ``EntryStat`` is the minimal stat record needed to render a row. Real ones
  come from ``os.stat_result``; the synthetic one is fabricated.
"""

from __future__ import annotations

import os
import posixpath
import stat as stat_module
import time
from dataclasses import dataclass, field
from urllib.parse import quote

# encodeURIComponent-compatible set of characters left unescaped in links
_NAME_SAFE = "!~*'()"

SYNTHETIC_MODE = 0o777
SYNTHETIC_INODE = 1
SYNTHETIC_SIZE = 999


@dataclass(frozen=True)
class EntryStat:
    """Metadata needed to render a listing row."""

    is_dir: bool
    mode: int
    mtime: float
    size: int
    ino: int = 0
    is_special: bool = False

    def is_directory(self) -> bool:
        return self.is_dir

    @classmethod
    def from_stat_result(cls, st: os.stat_result) -> EntryStat:
        return cls(
            is_dir=stat_module.S_ISDIR(st.st_mode),
            mode=st.st_mode,
            mtime=st.st_mtime,
            size=st.st_size,
            ino=st.st_ino,
        )


def synthetic_stat(size: int = SYNTHETIC_SIZE) -> EntryStat:
    """Fabricated stat for the play-media entry. Never read from disk."""
    return EntryStat(
        is_dir=True,
        mode=SYNTHETIC_MODE,
        mtime=time.time(),
        size=size,
        ino=SYNTHETIC_INODE,
        is_special=True,
    )


def display_name(name: str) -> str:
    """*name* as printable text; undecodable bytes become U+FFFD."""
    return os.fsencode(name).decode("utf-8", "replace")


@dataclass(frozen=True)
class LinkContext:
    """Per-request values that links are built from."""

    pathname: str
    query: str = ""

    @property
    def search(self) -> str:
        return f"?{self.query}" if self.query else ""


@dataclass(frozen=True)
class VirtualAction:
    """The external action exposed as a directory row."""

    name: str
    public_url: str = ""
    link_template: str = "iina://weblink?url={url}"

    def link(self, pathname: str) -> str:
        target = quote(os.fsencode(posixpath.join(pathname, self.name)))
        return self.link_template.format(url=f"{self.public_url}{target}")


@dataclass(frozen=True)
class Entry:
    """A real file or directory found in the listed directory."""

    name: str
    stat: EntryStat

    def is_directory(self) -> bool:
        return self.stat.is_directory()

    @property
    def kind(self) -> str:
        return "directory" if self.is_directory() else "file"

    def href(self, context: LinkContext) -> str:
        # surrogate-escaped names are quoted as their original bytes
        href = f"./{quote(os.fsencode(self.name), safe=_NAME_SAFE)}"
        if self.is_directory():
            # Keep query parameters (page size, sort order) across navigation
            href += f"/{context.search}"
        return href


@dataclass(frozen=True)
class ParentEntry(Entry):
    """The ".." row."""

    name: str = field(default="..", init=False)
    stat: EntryStat = field(kw_only=True)


@dataclass(frozen=True)
class SyntheticEntry(Entry):
    """A row that looks like a directory but links to an external player."""

    action: VirtualAction = field(kw_only=True)

    @property
    def kind(self) -> str:
        return "synthetic"

    def href(self, context: LinkContext) -> str:
        return self.action.link(context.pathname)


@dataclass(frozen=True)
class UnreadableEntry:
    """A name whose stat lookup failed."""

    name: str
    error: OSError = field(compare=False)

    stat = None
    kind = "unreadable"

    def is_directory(self) -> bool:
        return False

    def href(self, context: LinkContext) -> str | None:
        return None


@dataclass
class Buckets:
    """Aggregated directory contents, one list per row kind."""

    directories: list[Entry] = field(default_factory=list)
    files: list[Entry] = field(default_factory=list)
    errors: list[UnreadableEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.directories) + len(self.files) + len(self.errors)


@dataclass(frozen=True)
class ListingRequest:
    """One directory listing request, after path resolution."""

    pathname: str
    directory: str
    query: str = ""
    host: str = ""

    @property
    def link_context(self) -> LinkContext:
        return LinkContext(pathname=self.pathname, query=self.query)
