"""
Endian-aware integer reads over an immutable byte buffer.

A ByteCursor is a value: reading from it hands back the decoded integer and
a *new* cursor positioned after the field. The cursor that was passed in is
never moved, so two readers can never advance each other by accident.
"""

import struct
from dataclasses import dataclass
from typing import Tuple

from .errors import TruncatedReadError

# width -> (unsigned code, signed code)
_STRUCT_CODES = {
    1: ('B', 'b'),
    2: ('H', 'h'),
    4: ('I', 'i'),
    8: ('Q', 'q'),
}


@dataclass(frozen=True)
class ByteCursor:
    """An owned read position (offset + bounds) inside a byte buffer."""
    data: bytes
    offset: int = 0

    def __post_init__(self):
        if not (0 <= self.offset <= len(self.data)):
            raise ValueError(
                f"Cursor offset {self.offset} is out of bounds (Size: {len(self.data)})"
            )

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def seek(self, offset: int) -> "ByteCursor":
        """Returns a cursor at an absolute offset in the same buffer."""
        return ByteCursor(self.data, offset)

    def advance(self, num_bytes: int) -> "ByteCursor":
        """Returns a cursor moved forward by a relative number of bytes."""
        return self.seek(self.offset + num_bytes)


def read_int(cursor: ByteCursor, width: int, signed: bool = False,
             little_endian: bool = True) -> Tuple[int, ByteCursor]:
    """
    Decodes a `width`-byte integer at the cursor.

    Little-endian puts byte k at bits [8k, 8k+8); big-endian reverses the
    order. Signed reads are two's complement sign-extended.

    Returns:
        (value, cursor advanced by `width`)

    Raises:
        TruncatedReadError: fewer than `width` bytes are left in the buffer.
    """
    codes = _STRUCT_CODES.get(width)
    if codes is None:
        raise ValueError(f"Unsupported integer width: {width}")

    if cursor.remaining < width:
        raise TruncatedReadError(cursor.offset, width, cursor.remaining)

    fmt = ('<' if little_endian else '>') + codes[1 if signed else 0]
    value = struct.unpack_from(fmt, cursor.data, cursor.offset)[0]
    return value, cursor.advance(width)


def read_uint(cursor: ByteCursor, width: int, little_endian: bool = True) -> Tuple[int, ByteCursor]:
    return read_int(cursor, width, signed=False, little_endian=little_endian)


def read_sint(cursor: ByteCursor, width: int, little_endian: bool = True) -> Tuple[int, ByteCursor]:
    return read_int(cursor, width, signed=True, little_endian=little_endian)
