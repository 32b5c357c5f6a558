"""
Command-line interface for rendering CSV data as a table.

Usage:
    python -m tabprinter data.csv
    python -m tabprinter data.csv --style round --width 12 --align l,r,c
    python -m tabprinter data.csv --config table.json --color
    cat data.csv | python -m tabprinter - --style grid --page-size 20
    python -m tabprinter --list-styles
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .ansi import supports_color
from .config import TableConfig, load_config, validate_config
from .csvio import table_from_csv
from .errors import ConfigError, TableError
from .styles import TableStyle
from .table import Table

logger = logging.getLogger("tabprinter.cli")


def sample_table(style: TableStyle) -> Table:
    """Small demo table used by --list-styles."""
    table = Table(style, padding=1)
    table.add_column("Name", 8, "left")
    table.add_column("Age", 5, "right")
    table.add_column("City", 13, "center")
    table.add_rows([
        ["Alice", "30", "New York"],
        ["Bob", "25", "Los Angeles"],
    ])
    return table


def list_styles(color: bool) -> None:
    for style in TableStyle:
        print(f"{style.value}:")
        sample_table(style).print(sys.stdout, color=color)
        print()


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",")]


def build_config(args: argparse.Namespace) -> TableConfig:
    """Merge the --config file (if any) with command-line overrides."""
    config = load_config(args.config) if args.config else TableConfig()
    if args.style is not None:
        config.style = args.style
    if args.color is not None:
        config.color = args.color
    if args.marker is not None:
        config.truncation_marker = args.marker
    if args.padding is not None:
        config.padding = args.padding
    if args.page_size is not None:
        config.page_size = args.page_size
    return config


def load_table(args: argparse.Namespace, config: TableConfig) -> Table:
    """Read the CSV input, applying widths/alignments from config and flags."""
    widths = [c.width for c in config.columns] or None
    alignments = [c.align for c in config.columns] or None
    if args.widths:
        widths = [int(w) for w in _split(args.widths)]
    if args.align:
        alignments = _split(args.align)

    kwargs = dict(
        width=args.width,
        style=config.style,
        widths=widths,
        alignments=alignments,
        truncation_marker=config.truncation_marker,
        padding=config.padding,
        page_size=config.page_size,
        palette=config.resolve_palette(),
    )
    if args.input == "-":
        return table_from_csv(sys.stdin, **kwargs)
    return table_from_csv(args.input, **kwargs)


def run(args: argparse.Namespace) -> int:
    config = build_config(args)
    errors = validate_config(config)
    if errors:
        raise ConfigError(errors)

    table = load_table(args, config)
    if args.sort is not None:
        key = int(args.sort) if args.sort.lstrip("-").isdigit() else args.sort
        table = table.sorted_by(key, ascending=not args.desc)

    use_color = config.use_color(sys.stdout)
    logger.debug("Rendering %r (color=%s)", table, use_color)
    if table.page_size is not None and table.page_count() > 1:
        pause = None
        if args.input != "-" and sys.stdin.isatty() and sys.stdout.isatty():
            pause = lambda: input("Press Enter to continue...")
        table.print_paginated(sys.stdout, color=use_color, pause=pause)
    else:
        table.print(sys.stdout, color=use_color)
    return 0


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tabprinter",
        description="Render CSV data as a formatted terminal table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data.csv
  %(prog)s data.csv --style fancy_grid --width 12
  %(prog)s data.csv --widths 20,6,10 --align l,r,c --padding 1
  %(prog)s data.csv --config table.json --sort Age --desc
  %(prog)s --list-styles
        """,
    )

    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="CSV file to render ('-' for stdin)",
    )
    parser.add_argument(
        "-s", "--style",
        default=None,
        help=f"Table style: {', '.join(s.value for s in TableStyle)}",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="JSON table config (style, columns, colors)",
    )
    parser.add_argument(
        "-w", "--width",
        type=int,
        default=10,
        help="Width of every column (default: 10)",
    )
    parser.add_argument(
        "--widths",
        default=None,
        help="Comma-separated per-column widths",
    )
    parser.add_argument(
        "-a", "--align",
        default=None,
        help="Comma-separated per-column alignments (l, c, r)",
    )
    parser.add_argument(
        "--marker",
        default=None,
        help="Truncation marker ('' to hard-truncate)",
    )
    parser.add_argument(
        "--padding",
        type=int,
        default=None,
        help="Spaces on each side of every cell",
    )
    parser.add_argument(
        "--sort",
        default=None,
        help="Sort rows by column header or index",
    )
    parser.add_argument(
        "--desc",
        action="store_true",
        help="Sort descending",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Rows per page",
    )
    color_group = parser.add_mutually_exclusive_group()
    color_group.add_argument(
        "--color",
        dest="color",
        action="store_const",
        const="always",
        help="Always emit ANSI colors",
    )
    color_group.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const="never",
        help="Never emit ANSI colors",
    )
    parser.add_argument(
        "--list-styles",
        action="store_true",
        help="Show a sample of every style and exit",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging to stderr",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(name)s %(levelname)s: %(message)s")

    if args.list_styles:
        color = {"always": True, "never": False}.get(args.color, supports_color())
        list_styles(color)
        return 0

    if args.input is None:
        parser.error("an input CSV file is required (use '-' for stdin)")

    try:
        return run(args)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.config}: {e}", file=sys.stderr)
        return 1
    except (TableError, ValueError, KeyError, IndexError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
