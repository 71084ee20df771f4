"""HTML rendering of sorted listing buckets.

The page is a Jinja2 template with autoescaping on: request path, entry names,
query string and Host header are attacker-controlled and are always
entity-encoded. Only the packaged CSS is inserted as trusted markup.
"""

from __future__ import annotations

import platform
from collections.abc import Sequence
from dataclasses import dataclass

from jinja2 import Environment, PackageLoader
from markupsafe import Markup

from showdir import __version__
from showdir.listing.entries import Entry, ListingRequest, UnreadableEntry, display_name
from showdir.listing.formatting import (
    icon_class,
    last_modified_to_string,
    perms_to_string,
    size_to_string,
)
from showdir.listing.styles import CSS


@dataclass(frozen=True)
class RenderOptions:
    human_readable: bool = True
    si: bool = False
    hide_permissions: bool = False
    show_unreadable: bool = True


@dataclass(frozen=True)
class Row:
    kind: str
    icon: str
    perms: str
    last_modified: str
    size: str
    href: str | None
    display_name: str


class ListingRenderer:
    """Renders a directory listing page."""

    def __init__(self, options: RenderOptions | None = None):
        self.options = options or RenderOptions()
        self._env = Environment(
            loader=PackageLoader("showdir.listing", "templates"),
            autoescape=True,
            keep_trailing_newline=True,
        )
        self._template = self._env.get_template("listing.html")
        self._server = f"showdir/{__version__} (Python {platform.python_version()})"

    def row(self, entry: Entry | UnreadableEntry, request: ListingRequest) -> Row:
        stat = entry.stat
        return Row(
            kind=entry.kind,
            icon=icon_class(entry),
            perms=perms_to_string(stat),
            last_modified=last_modified_to_string(stat),
            size=size_to_string(stat, self.options.human_readable, self.options.si),
            href=entry.href(request.link_context),
            display_name=display_name(entry.name) + ("/" if entry.is_directory() else ""),
        )

    def render(
        self,
        request: ListingRequest,
        directories: Sequence[Entry],
        files: Sequence[Entry],
        errors: Sequence[UnreadableEntry] = (),
        parent: Entry | None = None,
    ) -> str:
        """Build the page. Rows: parent, directories, files, then unreadable names."""
        entries: list[Entry | UnreadableEntry] = []
        if parent is not None:
            entries.append(parent)
        entries.extend(directories)
        entries.extend(files)
        if self.options.show_unreadable:
            entries.extend(errors)

        return self._template.render(
            pathname=request.pathname,
            css=Markup(CSS),
            rows=[self.row(entry, request) for entry in entries],
            show_permissions=not self.options.hide_permissions,
            server=self._server,
            host=request.host,
        )
