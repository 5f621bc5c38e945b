#!/usr/bin/env python3
"""
Dumps the script opcode table of an overlay image to a text file.

Usage: python3 dump_opcodes.py [format] [overlay_file] [output_file]

Every argument is optional: the format defaults to 'eos' and the file names
default to the ones registered for the chosen format.
"""

import sys

from overlaydump import (
    FORMATS, OverlayDumpError, decode_table, get_format, load_overlay, write_report,
)


def print_progress(row: int):
    print(f"\rRead {row + 1:<3}", end='', flush=True)


def format_listing() -> str:
    lines = ["Known formats:"]
    for key in sorted(FORMATS):
        lines.append(f"  {key:<6} {FORMATS[key].title}")
    return "\n".join(lines)


def dump_opcodes(format_key: str, overlay_path: str = None, output_path: str = None):
    """Decodes the table and writes the report. Errors propagate to the caller."""
    table_format = get_format(format_key)
    overlay_path = overlay_path or table_format.default_input
    output_path = output_path or table_format.default_output

    data = load_overlay(overlay_path)

    print("Started!")
    entries = decode_table(data, table_format, on_row=print_progress)

    print("\nWriting!")
    write_report(entries, table_format, output_path)
    print("Done!")
    return entries


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 3 or (args and args[0] in ('-h', '--help')):
        print(f"Usage: python3 {sys.argv[0]} [format] [overlay_file] [output_file]")
        print(format_listing())
        return 1

    format_key = args[0] if len(args) > 0 else "eos"
    overlay_path = args[1] if len(args) > 1 else None
    output_path = args[2] if len(args) > 2 else None

    try:
        dump_opcodes(format_key, overlay_path, output_path)
    except KeyError as e:
        print(f"ERROR: {e.args[0]}", file=sys.stderr)
        return 1
    except OverlayDumpError as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
