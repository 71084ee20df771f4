"""Listing errors and the directory-level error policy.

Three failures go through :class:`ErrorPolicy`: stating the target directory,
reading its entries, and stating its parent for the ".." row. Per-entry stat
failures never do; the aggregator records them as unreadable entries.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from starlette.requests import Request
from starlette.responses import Response

from showdir.status_handlers import server_error

logger = logging.getLogger(__name__)


class ShowDirError(Exception):
    """Base class for listing errors."""


class PathOutsideRootError(ShowDirError):
    """A request path resolved outside the served root."""

    def __init__(self, pathname: str, root: str):
        super().__init__(f"{pathname!r} resolves outside {root!r}")
        self.pathname = pathname
        self.root = root


class ErrorAction(str, Enum):
    """What to do about a directory-level failure."""

    SERVER_ERROR = "server_error"
    PASS_THROUGH = "pass_through"


class ErrorStage(str, Enum):
    STAT = "stat"
    LISTDIR = "listdir"
    PARENT = "parent"


class ErrorPolicy:
    """Turns directory-level failures into a 500 page or a pass-through.

    Parameters
    ----------
    handle_error : bool
        When true, failures are answered locally with a 500 page. When false,
        the request is handed to the next handler unmodified.
    """

    def __init__(self, handle_error: bool = True):
        self.handle_error = handle_error

    def decide(self, error: BaseException) -> ErrorAction:
        return ErrorAction.SERVER_ERROR if self.handle_error else ErrorAction.PASS_THROUGH

    async def respond(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
        error: BaseException,
        stage: ErrorStage,
    ) -> Response:
        action = self.decide(error)
        logger.warning(
            "Listing %s failed at %s: %s (%s)",
            request.url.path,
            stage.value,
            error,
            action.value,
        )
        if action is ErrorAction.SERVER_ERROR:
            return server_error(error)
        return await call_next(request)
