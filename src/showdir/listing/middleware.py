# Directory listing middleware.
# Created: 2026-10-19
#
# Installed in front of the static mount with app.middleware("http"). Only
# GET/HEAD requests for directories under the base mount are answered here;
# everything else goes to call_next unchanged.

from __future__ import annotations

import logging
import posixpath
import stat as stat_module
from collections.abc import Awaitable, Callable
from urllib.parse import quote

import aiofiles.os
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.requests import Request
from starlette.responses import Response

from showdir.config import Settings
from showdir.listing.aggregator import aggregate
from showdir.listing.entries import EntryStat, ListingRequest, ParentEntry, VirtualAction
from showdir.listing.errors import ErrorPolicy, ErrorStage, PathOutsideRootError
from showdir.listing.formatting import etag, http_date
from showdir.listing.paths import (
    decode_pathname,
    is_under_mount,
    parent_link_allowed,
    parent_path,
    resolve_request_path,
)
from showdir.listing.render import ListingRenderer, RenderOptions
from showdir.listing.sorting import sort_buckets

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]

_METHODS = frozenset({"GET", "HEAD"})


def _raw_path(request: Request) -> str:
    # scope["path"] is already decoded; names containing "#" or "?" need the raw one
    raw = request.scope.get("raw_path")
    if raw:
        return raw.split(b"?", 1)[0].decode("utf-8", "replace")
    return quote(request.scope["path"])


class DirectoryListing:
    """HTTP middleware rendering an HTML index for directory requests."""

    def __init__(self, settings: Settings):
        self.root = str(settings.root)
        self.base_dir = settings.base_dir
        self.cache = settings.cache
        self.show_dotfiles = settings.show_dotfiles
        self.weak_etags = settings.weak_etags
        self.action = VirtualAction(
            name=settings.action_name,
            public_url=settings.public_url,
            link_template=settings.action_link_template,
        )
        self.policy = ErrorPolicy(settings.handle_error)
        self.renderer = ListingRenderer(
            RenderOptions(
                human_readable=settings.human_readable,
                si=settings.si,
                hide_permissions=settings.hide_permissions,
                show_unreadable=settings.show_unreadable,
            )
        )

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        if request.method not in _METHODS:
            return await call_next(request)

        raw_path = _raw_path(request)
        pathname = decode_pathname(raw_path)
        if not is_under_mount(pathname, self.base_dir):
            return await call_next(request)

        try:
            directory = resolve_request_path(pathname, self.root, self.base_dir)
        except PathOutsideRootError as e:
            logger.info("Refusing listing: %s", e)
            return await call_next(request)

        if not pathname.endswith("/"):
            return await self._redirect_directory(request, pathname, directory, call_next)

        listing = ListingRequest(
            pathname=pathname,
            directory=directory,
            query=request.url.query,
            host=request.headers.get("host", ""),
        )
        return await self.list_directory(request, listing, call_next)

    async def _redirect_directory(
        self, request: Request, pathname: str, directory: str, call_next: CallNext
    ) -> Response:
        # Relative links in a listing only work from a URL ending in "/".
        if not await aiofiles.os.path.isdir(directory):
            return await call_next(request)
        # Rebuilt from the normalized path: the raw one may start with "//host"
        location = quote("/" + posixpath.normpath(pathname).lstrip("/")) + "/"
        if request.url.query:
            location += f"?{request.url.query}"
        return RedirectResponse(location, status_code=302)

    async def list_directory(
        self, request: Request, listing: ListingRequest, call_next: CallNext
    ) -> Response:
        """Run the listing pipeline for one resolved directory."""
        directory = listing.directory

        try:
            st = await aiofiles.os.stat(directory)
            if not stat_module.S_ISDIR(st.st_mode):
                raise NotADirectoryError(directory)
        except (OSError, ValueError) as e:
            return await self.policy.respond(request, call_next, e, ErrorStage.STAT)
        dir_stat = EntryStat.from_stat_result(st)

        try:
            names = await aiofiles.os.listdir(directory)
        except OSError as e:
            return await self.policy.respond(request, call_next, e, ErrorStage.LISTDIR)

        if not self.show_dotfiles:
            names = [name for name in names if not name.startswith(".")]
        if self.action.name not in names:
            names.append(self.action.name)

        buckets = sort_buckets(await aggregate(directory, names, self.action))

        parent = None
        if parent_link_allowed(directory, self.root):
            try:
                parent_st = await aiofiles.os.stat(parent_path(directory))
            except OSError as e:
                return await self.policy.respond(request, call_next, e, ErrorStage.PARENT)
            parent = ParentEntry(stat=EntryStat.from_stat_result(parent_st))

        headers = {
            "etag": etag(dir_stat, self.weak_etags),
            "last-modified": http_date(dir_stat.mtime),
            "cache-control": self.cache,
        }
        html = self.renderer.render(
            listing,
            buckets.directories,
            buckets.files,
            buckets.errors,
            parent=parent,
        )
        logger.debug("Listed %s (%d entries)", directory, len(buckets))
        return HTMLResponse(html, headers=headers)
