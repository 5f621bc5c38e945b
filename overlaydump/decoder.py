# decoder.py - Walks an opcode table row by row and resolves each row's name
"""
The decoder drives one pass over a TableFormat's rows:

    NOT_STARTED -> DECODING(row i) -> COMPLETE
                          |
                          +-> FAILED(error)

Every row is read field by field through its own ByteCursor, the string
pointer is translated into a file offset and the name is fetched from the
string pool. Any failure aborts the whole run: entries decoded so far are
dropped and the error (tagged with the failing row) is re-raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .byte_reader import ByteCursor, read_int
from .errors import InvalidPointerError, OverlayDumpError, TruncatedReadError
from .formats import FieldRole, FieldSpec, TableFormat
from .strings import read_c_string


@dataclass(frozen=True)
class DecodedEntry:
    """One row of the opcode table. `index` is the opcode's numeric value."""
    index: int
    param_count: int
    extra_fields: Tuple[int, ...]
    name: str
    pointer: int = 0
    name_offset: int = 0

    @property
    def opcode(self) -> int:
        return self.index


class DecoderState(Enum):
    NOT_STARTED = "not_started"
    DECODING = "decoding"
    COMPLETE = "complete"
    FAILED = "failed"


def translate_pointer(pointer: int, pointer_base: int) -> int:
    """Converts an in-memory address into an offset within the overlay file."""
    if pointer < pointer_base:
        raise InvalidPointerError(pointer, pointer_base)
    return pointer - pointer_base


class OpcodeTableDecoder:
    """
    Decodes the opcode table described by `table_format` out of `data`.

    Args:
        data: The complete overlay image.
        table_format: Where the table is and how its rows are laid out.
        on_row: Optional callback, called with the row index after each row
            has been decoded. It only observes progress.
    """

    def __init__(self, data: bytes, table_format: TableFormat,
                 on_row: Optional[Callable[[int], None]] = None):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("Input data must be bytes.")
        self.data = bytes(data)
        self.format = table_format
        self.on_row = on_row
        self.state = DecoderState.NOT_STARTED
        self.current_row: Optional[int] = None
        self.error: Optional[BaseException] = None

    def decode(self) -> List[DecodedEntry]:
        if self.state is not DecoderState.NOT_STARTED:
            raise RuntimeError(f"Decoder already ran (state: {self.state.value})")

        self.state = DecoderState.DECODING
        entries: List[DecodedEntry] = []
        try:
            for row in range(self.format.entry_count):
                self.current_row = row
                entries.append(self._decode_row(row))
                if self.on_row is not None:
                    self.on_row(row)
        except BaseException as e:
            if isinstance(e, OverlayDumpError):
                e.row = self.current_row
            self.error = e
            self.state = DecoderState.FAILED
            entries.clear()
            raise

        self.state = DecoderState.COMPLETE
        return entries

    def _read_field(self, row: int, field: FieldSpec) -> int:
        offset = self.format.field_offset(row, field)
        if offset > len(self.data):
            raise TruncatedReadError(offset, field.width, 0)
        cursor = ByteCursor(self.data, offset)
        value, _ = read_int(cursor, field.width, signed=field.signed,
                            little_endian=self.format.little_endian)
        return value

    def _decode_row(self, row: int) -> DecodedEntry:
        param_count = 0
        pointer = 0
        extras = []
        for field in self.format.fields:
            value = self._read_field(row, field)
            if field.role is FieldRole.PARAM_COUNT:
                param_count = value
            elif field.role is FieldRole.STRING_POINTER:
                pointer = value
            else:
                extras.append(value)

        name_offset = translate_pointer(pointer, self.format.pointer_base)
        name = read_c_string(self.data, name_offset)

        return DecodedEntry(
            index=row,
            param_count=param_count,
            extra_fields=tuple(extras),
            name=name,
            pointer=pointer,
            name_offset=name_offset,
        )


def decode_table(data: bytes, table_format: TableFormat,
                 on_row: Optional[Callable[[int], None]] = None) -> List[DecodedEntry]:
    """Shortcut for OpcodeTableDecoder(...).decode()."""
    return OpcodeTableDecoder(data, table_format, on_row).decode()
