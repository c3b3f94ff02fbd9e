"""Command line interface for schema-annotator.

Usage:
    schema-annotator annotate [--schema FILE] [--position before|after] [--force] [--dry-run]
    schema-annotator remove [--schema FILE] [--dry-run]
    schema-annotator show <table> [--schema FILE]
"""

import argparse
import logging
import sys

from schema_annotator import __version__
from schema_annotator.cli.annotate import cmd_annotate, cmd_remove, cmd_show


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--schema", default=None,
        help="Path to the schema manifest (default: $SCHEMA_ANNOTATOR_SCHEMA or ./schema.yaml)",
    )
    p.add_argument(
        "--config", default=None,
        help="Path to an annotation config (default: $SCHEMA_ANNOTATOR_CONFIG or ./.annotate.yaml)",
    )
    p.add_argument("--header", default=None, help="Header marker text")
    p.add_argument("--comment-prefix", default=None, help="Comment leader for block lines")


def _add_display(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--show-foreign-keys", action="store_true", default=None,
        help="Include a foreign key section",
    )
    p.add_argument(
        "--show-indexes", action="store_true", default=None,
        help="Include an index section",
    )
    p.add_argument(
        "--show-complete-foreign-keys", action="store_true", default=None,
        help="Don't shorten hashed constraint names",
    )
    order = p.add_mutually_exclusive_group()
    order.add_argument(
        "--sort", action="store_true", default=None,
        help="Order columns alphabetically",
    )
    order.add_argument(
        "--classified-sort", action="store_true", default=None,
        help="Order columns: primary key, plain, associations, timestamps",
    )


def _add_targets(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--root", default=None,
        help="Directory relative model paths are resolved against",
    )
    p.add_argument(
        "--table", action="append", default=None,
        help="Limit to this table (repeatable)",
    )
    p.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-annotator",
        description="Keep schema description comments in model files up to date",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log per-file details",
    )
    sub = parser.add_subparsers(dest="command")

    # annotate
    ann = sub.add_parser("annotate", help="Insert or refresh annotation blocks")
    _add_common(ann)
    _add_display(ann)
    _add_targets(ann)
    ann.add_argument(
        "--position", choices=["before", "after"], default=None,
        help="Where new blocks go (existing blocks stay put unless --force)",
    )
    ann.add_argument(
        "--force", action="store_true", default=None,
        help="Move existing blocks to --position",
    )

    # remove
    rem = sub.add_parser("remove", help="Remove annotation blocks")
    _add_common(rem)
    _add_targets(rem)

    # show
    show = sub.add_parser("show", help="Print the annotation block for a table")
    show.add_argument("table")
    _add_common(show)
    _add_display(show)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dispatch = {
        "annotate": cmd_annotate,
        "remove": cmd_remove,
        "show": cmd_show,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
