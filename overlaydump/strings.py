# strings.py - Bounded null-terminated string extraction
from .errors import UnterminatedStringError


def c_string_length(data: bytes, offset: int) -> int:
    """
    Counts the bytes from `offset` up to the next 0x00.

    The scan never goes past the end of `data`; running out of buffer before
    a terminator is found raises UnterminatedStringError.
    """
    if not (0 <= offset < len(data)):
        raise UnterminatedStringError(offset, len(data))

    null_pos = data.find(b'\0', offset)
    if null_pos == -1:
        raise UnterminatedStringError(offset, len(data))
    return null_pos - offset


def read_c_string(data: bytes, offset: int) -> str:
    """Returns the string at `offset`, one character per byte (Latin-1)."""
    length = c_string_length(data, offset)
    return data[offset:offset + length].decode('latin-1')
