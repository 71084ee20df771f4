# Error pages for the static server.
# Created: 2026-10-19
#
# Bodies carry no error details; those go to the log only.

from __future__ import annotations

import logging

from fastapi.responses import HTMLResponse

logger = logging.getLogger(__name__)

_PAGE = """<!doctype html>
<html>
  <head>
    <meta charset="utf-8">
    <title>{code} {reason}</title>
  </head>
  <body>
    <h1>{code} {reason}</h1>
  </body>
</html>
"""


def _page(code: int, reason: str) -> HTMLResponse:
    return HTMLResponse(_PAGE.format(code=code, reason=reason), status_code=code)


def server_error(error: BaseException | None = None) -> HTMLResponse:
    """500 response for a failure the listing could not recover from."""
    if error is not None:
        logger.debug("Responding 500 for %r", error)
    return _page(500, "Internal Server Error")


def not_found() -> HTMLResponse:
    return _page(404, "Not Found")
