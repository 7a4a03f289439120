"""Webactions CLI — fetch and print the web action metadata table.

Entry point registered as ``webactions`` in ``pyproject.toml``::

    [project.scripts]
    webactions = "webactions.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``webactions`` command."""
    parser = argparse.ArgumentParser(
        prog="webactions",
        description="Webactions — fetch and inspect web action metadata.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log fetch lifecycle to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- webactions metadata ----------------------------------------------
    metadata_parser = subparsers.add_parser("metadata", help="Print the metadata table")
    metadata_parser.add_argument(
        "--base-url",
        default=None,
        help="Backend base URL (default: $WEBACTIONS_BASE_URL)",
    )
    metadata_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the table as a JSON list",
    )

    # -- webactions raw ---------------------------------------------------
    raw_parser = subparsers.add_parser("raw", help="Fetch a URL and print its JSON body")
    raw_parser.add_argument(
        "--url",
        default=None,
        help="URL to fetch (default: $WEBACTIONS_RAW_URL)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    from webactions.cli._fetch import run_fetch

    run_fetch(args)
