# errors.py - Exception types raised while decoding an overlay opcode table
from typing import Optional


class OverlayDumpError(Exception):
    """Base class for every failure that aborts a dump run."""

    kind = "OverlayDumpError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        # Filled in by the decoder once it knows which table row failed.
        self.row: Optional[int] = None

    def __str__(self):
        if self.row is None:
            return f"{self.kind}: {self.message}"
        return f"{self.kind} at row 0x{self.row:03x}: {self.message}"


class OverlayIOError(OverlayDumpError):
    kind = "IOError"

    def __init__(self, path: str, reason: str):
        super().__init__(f"Couldn't open file {path}: {reason}")
        self.path = path


class TruncatedReadError(OverlayDumpError):
    kind = "TruncatedRead"

    def __init__(self, offset: int, width: int, available: int):
        super().__init__(
            f"Not enough bytes to read {width} byte(s) at offset 0x{offset:x} "
            f"({available} remaining)"
        )
        self.offset = offset
        self.width = width
        self.available = available


class UnterminatedStringError(OverlayDumpError):
    kind = "UnterminatedString"

    def __init__(self, offset: int, buffer_size: int):
        super().__init__(
            f"String at offset 0x{offset:x} went past the end of the buffer "
            f"(size 0x{buffer_size:x})"
        )
        self.offset = offset
        self.buffer_size = buffer_size


class InvalidPointerError(OverlayDumpError):
    kind = "InvalidPointer"

    def __init__(self, pointer: int, pointer_base: int):
        super().__init__(
            f"Pointer 0x{pointer:08x} is below the overlay base 0x{pointer_base:08x}"
        )
        self.pointer = pointer
        self.pointer_base = pointer_base
