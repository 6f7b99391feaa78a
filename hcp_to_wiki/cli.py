"""
Command-line entry point for hcp-to-wiki.

Usage:
    hcp-to-wiki adverts.csv                      # wiki tables to stdout
    hcp-to-wiki adverts.csv --debug-dump         # record/series dump first
    hcp-to-wiki adverts.csv --config my.yaml     # custom system rules
    hcp-to-wiki adverts.csv --matrix-out prices.parquet --matrix-format parquet

Wiki text (and the optional dump) go to stdout.  Logs and per-row
diagnostics go to stderr.  Fatal errors exit with status 1; a wrong
number of arguments exits with status 2.
"""

from __future__ import annotations

import argparse
import logging
import sys

from hcp_to_wiki import convert
from hcp_to_wiki.config import load_config, load_default_config
from hcp_to_wiki.exceptions import HcpToWikiError

log = logging.getLogger("hcp_to_wiki.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hcp-to-wiki",
        description=(
            "Convert a CSV of home-computer price adverts into wiki tables of "
            "the cheapest price per system per quarter."
        ),
    )
    parser.add_argument("input", help="Advert CSV file")
    parser.add_argument("--config", help="hcpconfig.yaml to use instead of the built-in defaults")
    parser.add_argument(
        "--debug-dump",
        action="store_true",
        default=None,
        help=(
            "Print the first records and every price series before the tables "
            "(off by default, so stdout holds only wiki text)"
        ),
    )
    parser.add_argument("--matrix-out", help="Also write the price matrix to this file")
    parser.add_argument(
        "--matrix-format",
        choices=["csv", "parquet"],
        help="Format for --matrix-out (default: from config, else csv)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.config) if args.config else load_default_config()
    except (FileNotFoundError, HcpToWikiError) as exc:
        log.error("%s", exc)
        return 1

    overrides = {}
    if args.debug_dump is not None:
        overrides["debug_dump"] = args.debug_dump
    if args.matrix_out is not None:
        overrides["matrix_path"] = args.matrix_out
    if args.matrix_format is not None:
        overrides["matrix_format"] = args.matrix_format
    if overrides:
        config = config.model_copy(
            update={"output": config.output.model_copy(update=overrides)}
        )

    try:
        result = convert(args.input, config)
    except HcpToWikiError as exc:
        log.error("%s", exc)
        return 1

    if result.debug_text:
        sys.stdout.write(result.debug_text)
    sys.stdout.write(result.wiki_text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
