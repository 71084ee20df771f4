"""showdir - static file server with HTML directory listings."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("showdir")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"
