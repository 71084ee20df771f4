"""Request path to filesystem path mapping, confined to the served root."""

from __future__ import annotations

import os
import posixpath
from urllib.parse import unquote

from showdir.listing.errors import PathOutsideRootError


def decode_pathname(raw: str) -> str:
    """Percent-decode the path component of *raw*. The query is never decoded."""
    path, _, _query = raw.partition("?")
    return unquote(path)


def _mount(base_dir: str) -> str:
    return posixpath.join("/", base_dir.strip("/"))


def is_under_mount(pathname: str, base_dir: str = "/") -> bool:
    """Whether the decoded *pathname* is served by the mount at *base_dir*."""
    mount = _mount(base_dir)
    if mount == "/":
        return pathname.startswith("/")
    return pathname == mount or pathname.startswith(mount + "/")


def is_within(path: str, root: str) -> bool:
    return path == root or path.startswith(root.rstrip(os.sep) + os.sep)


def resolve_request_path(pathname: str, root: str, base_dir: str = "/") -> str:
    """Map a decoded request *pathname* onto an absolute path under *root*.

    The mount prefix is stripped, the remainder joined onto *root* and the
    result normalized. Raises :class:`PathOutsideRootError` when the result
    would not be *root* or one of its descendants.
    """
    relative = posixpath.relpath(pathname or "/", _mount(base_dir))
    absolute = os.path.normpath(os.path.join(root, relative))
    if not is_within(absolute, root):
        raise PathOutsideRootError(pathname, root)
    return absolute


def parent_path(directory: str) -> str:
    return os.path.normpath(os.path.join(directory, ".."))


def parent_link_allowed(directory: str, root: str) -> bool:
    """Whether a ".." row may be shown for *directory*.

    A plain string-prefix test: *root* must already be canonical. At the root
    itself the parent is not prefixed by it, so no row is emitted.
    """
    return parent_path(directory).startswith(root)
