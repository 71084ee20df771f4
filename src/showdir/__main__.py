"""showdir entry point.

Examples:
  showdir                              Serve the current directory on :8080
  showdir ~/Movies -p 9000             Serve ~/Movies on port 9000
  showdir . --public-url http://nas:8080
                                       Player links point at http://nas:8080
"""

import argparse
import logging

from showdir import __version__
from showdir.config import Settings
from showdir.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="showdir",
        description="Static file server with HTML directory listings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("\n", 2)[2],
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Directory to serve (default: $SHOWDIR_ROOT or the current directory)",
    )
    parser.add_argument("--host", "-a", type=str, default=None, help="Address to bind")
    parser.add_argument("--port", "-p", type=int, default=None, help="Port (default: 8080)")
    parser.add_argument(
        "--base-dir", type=str, default=None, help="URL prefix to serve the root under"
    )
    parser.add_argument(
        "--cache", "-c", type=str, default=None, help="Cache-Control value for listings"
    )
    parser.add_argument(
        "--public-url",
        type=str,
        default=None,
        help="Public base URL used to build the external player link",
    )
    parser.add_argument(
        "--si", action="store_true", default=None, help="Use powers of 1000 for sizes"
    )
    parser.add_argument(
        "--no-human-readable",
        dest="human_readable",
        action="store_false",
        default=None,
        help="Print raw byte counts",
    )
    parser.add_argument(
        "--hide-permissions",
        action="store_true",
        default=None,
        help="Do not show the permissions column",
    )
    parser.add_argument(
        "--show-dotfiles", action="store_true", default=None, help="List dotfiles"
    )
    parser.add_argument(
        "--hide-unreadable",
        dest="show_unreadable",
        action="store_false",
        default=None,
        help="Drop entries that cannot be stat'ed instead of flagging them",
    )
    parser.add_argument(
        "--no-handle-error",
        dest="handle_error",
        action="store_false",
        default=None,
        help="Pass directory errors on instead of answering 500",
    )
    parser.add_argument(
        "--weak-etags", action="store_true", default=None, help="Emit weak etags"
    )
    parser.add_argument("--log-level", type=str, default=None, help="Log level (default: INFO)")
    parser.add_argument("--dev", action="store_true", help="Debug logging")
    parser.add_argument(
        "--version", "-v", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = vars(args).copy()
    overrides.pop("dev", None)
    return Settings.load(**overrides)


def main() -> None:
    """Main entry point."""
    args = build_parser().parse_args()
    settings = settings_from_args(args)

    setup_logging(level="DEBUG" if args.dev else settings.log_level)

    from showdir.server import run_server

    try:
        run_server(settings, dev=args.dev)
    except KeyboardInterrupt:
        logger.info("Stopped")


if __name__ == "__main__":
    main()
