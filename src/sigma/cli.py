"""Evaluate outline documents from the command line.

Usage:
    sigma budget.txt
    sigma budget.txt --row-index --no-group
    cat budget.txt | sigma --format csv
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigError, Settings, load_settings
from .host import VariableStore
from .outline import build_tree
from .render import format_csv, format_table, render_rows

FORMATTERS = {"table": format_table, "csv": format_csv}


def render_document(source: str, settings: Settings, output_format: str = "table") -> str:
    """Evaluate one document in its own pass and render it."""
    host = VariableStore(group_digits=settings.group_digits)
    outline = build_tree(source, host)
    return FORMATTERS[output_format](render_rows(outline, host), settings)


def _read(name: str) -> str:
    if name == "-":
        return sys.stdin.read()
    return Path(name).read_text()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate indented outline calculator documents")
    parser.add_argument("files", nargs="*", default=["-"], help="Documents to evaluate ('-' for stdin)")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file")
    parser.add_argument(
        "--no-group",
        dest="group_digits",
        action="store_false",
        default=None,
        help="Do not group result digits",
    )
    parser.add_argument(
        "--row-index",
        dest="show_row_index",
        action="store_true",
        default=None,
        help="Show the row index column",
    )
    parser.add_argument("--format", choices=sorted(FORMATTERS), default="table")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    overrides = {
        key: getattr(args, key)
        for key in ("group_digits", "show_row_index")
        if getattr(args, key) is not None
    }
    settings = settings.model_copy(update=overrides)

    status = 0
    for i, name in enumerate(args.files):
        try:
            source = _read(name)
        except OSError as e:
            print(f"error: cannot read {name}: {e}", file=sys.stderr)
            status = 1
            continue

        if len(args.files) > 1:
            if i:
                print()
            print(f"== {name}")
        print(render_document(source, settings, args.format).rstrip("\n"))

    return status


if __name__ == "__main__":
    sys.exit(main())
