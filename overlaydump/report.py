"""
Text report for a decoded opcode table.

The report is built completely in memory and only then written out, so a
failed run never leaves a half-written opcode list on disk.
"""

import os
import stat
import tempfile
from typing import List, Sequence

from .decoder import DecodedEntry
from .formats import TableFormat

BANNER_RULE = "=" * 61
NAME_WIDTH = 35
PARAM_WIDTH = 2
UNK_WIDTH = 3


def render_banner() -> List[str]:
    return [BANNER_RULE, "\tScript OpCode List", BANNER_RULE]


def format_entry(entry: DecodedEntry, table_format: TableFormat) -> str:
    line = (f"\t0x{entry.index:03x} - {entry.name:<{NAME_WIDTH}}, "
            f"{entry.param_count:>{PARAM_WIDTH}} params")
    # Contiguous formats carry three unknown bytes next to the param count.
    for i in range(len(table_format.extra_fields)):
        value = entry.extra_fields[i] if i < len(entry.extra_fields) else 0
        line += f", Unk{i + 1}: {value:>{UNK_WIDTH}}"
    return line


def render_report(entries: Sequence[DecodedEntry], table_format: TableFormat) -> str:
    lines = render_banner()
    for entry in entries:
        lines.append(format_entry(entry, table_format))
    return "\n".join(lines) + "\n"


def current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _target_file_mode(filepath: str) -> int:
    try:
        return stat.S_IMODE(os.stat(filepath).st_mode)
    except FileNotFoundError:
        return 0o666 & ~current_umask()


def write_report(entries: Sequence[DecodedEntry], table_format: TableFormat, filepath: str):
    """
    Writes the rendered report to `filepath`.

    The text goes to a temporary file next to the destination first and is
    moved into place with os.replace; on any error the temporary file is
    removed and the destination is left untouched.

    The written file keeps the mode of the report it replaces, or gets the
    usual umask-derived mode when there was none.
    """
    text = render_report(entries, table_format)
    directory = os.path.dirname(os.path.abspath(filepath))
    mode = _target_file_mode(filepath)
    fd, tmp_path = tempfile.mkstemp(prefix=".opcodelist-", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, 'w', encoding='latin-1', newline='\n') as f:
            f.write(text)
        # mkstemp always creates 0600
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, filepath)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
