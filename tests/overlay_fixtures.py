"""
Helpers for building small synthetic overlay images in tests.
"""

import struct

from overlaydump import EOS_OVERLAY11, EOTD_OVERLAY11, TableFormat, TableLayout, FieldSpec, FieldRole

POINTER_BASE = 0x02000000


def contiguous_format(entry_count=3, table_offset=0x10) -> TableFormat:
    """Same row layout as the Explorers of Sky table, tiny offsets."""
    return TableFormat(
        key="test-contiguous",
        title="Synthetic contiguous table",
        layout=TableLayout.CONTIGUOUS,
        entry_count=entry_count,
        table_offset=table_offset,
        pointer_base=POINTER_BASE,
        fields=EOS_OVERLAY11.fields,
    )


def split_format(entry_count=3, table_offset=0x10, param_table_offset=0x40) -> TableFormat:
    return TableFormat(
        key="test-split",
        title="Synthetic split table",
        layout=TableLayout.SPLIT_PARALLEL,
        entry_count=entry_count,
        table_offset=table_offset,
        param_table_offset=param_table_offset,
        pointer_base=POINTER_BASE,
        fields=EOTD_OVERLAY11.fields,
    )


def build_contiguous_overlay(rows, table_offset=0x10):
    """
    rows: list of (nbparams, unk1, unk2, unk3, name_bytes)

    The string pool follows the table and stores names in REVERSE row order,
    so physical pool order never matches table order.
    """
    table_end = table_offset + len(rows) * 8
    pool = b''
    name_offsets = {}
    for i in reversed(range(len(rows))):
        name_offsets[i] = table_end + len(pool)
        pool += rows[i][4] + b'\0'

    data = bytearray(b'\xAA' * table_offset)
    for i, (nbparams, u1, u2, u3, _) in enumerate(rows):
        data += struct.pack('<bbbbI', nbparams, u1, u2, u3, POINTER_BASE + name_offsets[i])
    data += pool
    return bytes(data)


def build_split_overlay(rows, table_offset=0x10, param_table_offset=0x40):
    """rows: list of (nbparams, name_bytes). Pool starts right after the param table."""
    pool_start = param_table_offset + len(rows)
    pool = b''
    pointers = []
    for nbparams, name in rows:
        pointers.append(POINTER_BASE + pool_start + len(pool))
        pool += name + b'\0'

    data = bytearray(b'\x00' * table_offset)
    for ptr in pointers:
        data += struct.pack('<I', ptr)
    data += b'\x00' * (param_table_offset - len(data))
    for nbparams, _ in rows:
        data += struct.pack('<b', nbparams)
    data += pool
    return bytes(data)
