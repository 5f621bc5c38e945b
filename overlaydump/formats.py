"""
Table format descriptors for the supported overlay images.

Each supported game build gets one TableFormat record: where the opcode
table lives in the overlay file, how many rows it has, how a row is laid out
and which load address turns embedded pointers back into file offsets.
The decoder itself knows nothing about any particular game.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class FieldRole(Enum):
    PARAM_COUNT = "paramCount"
    RAW_BYTE = "rawByte"
    STRING_POINTER = "stringPointer"


class TableLayout(Enum):
    # Every field of a row sits next to the others: row i starts at
    # table_offset + i * entry_size.
    CONTIGUOUS = "contiguous"
    # Each field lives in its own array; row i of a field is at
    # <that array's offset> + i * field.width.
    SPLIT_PARALLEL = "split_parallel"


MAIN_TABLE = 0
PARAM_TABLE = 1


@dataclass(frozen=True)
class FieldSpec:
    name: str
    width: int
    role: FieldRole
    signed: bool = False
    table: int = MAIN_TABLE


@dataclass(frozen=True)
class TableFormat:
    """Constant description of one on-disk opcode table."""
    key: str
    title: str
    layout: TableLayout
    entry_count: int
    table_offset: int
    pointer_base: int
    fields: Tuple[FieldSpec, ...]
    param_table_offset: Optional[int] = None
    little_endian: bool = True
    default_input: str = "overlay_0011.bin"
    default_output: str = "opcodelist.txt"

    def __post_init__(self):
        if self.entry_count <= 0:
            raise ValueError(f"{self.key}: entry_count must be positive, got {self.entry_count}")
        roles = [f.role for f in self.fields]
        if roles.count(FieldRole.STRING_POINTER) != 1:
            raise ValueError(f"{self.key}: exactly one string pointer field is required")
        if roles.count(FieldRole.PARAM_COUNT) != 1:
            raise ValueError(f"{self.key}: exactly one param count field is required")
        if self.layout is TableLayout.SPLIT_PARALLEL:
            if self.param_table_offset is None:
                raise ValueError(f"{self.key}: split layout needs a param_table_offset")
            for f in self.fields:
                if f.table not in (MAIN_TABLE, PARAM_TABLE):
                    raise ValueError(f"{self.key}: field {f.name} maps to unknown table {f.table}")

    @property
    def entry_size(self) -> int:
        return sum(f.width for f in self.fields)

    @property
    def string_field(self) -> FieldSpec:
        return next(f for f in self.fields if f.role is FieldRole.STRING_POINTER)

    @property
    def param_field(self) -> FieldSpec:
        return next(f for f in self.fields if f.role is FieldRole.PARAM_COUNT)

    @property
    def extra_fields(self) -> Tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.role is FieldRole.RAW_BYTE)

    def field_offset(self, row: int, field: FieldSpec) -> int:
        """Absolute file offset of `field` for table row `row`."""
        if self.layout is TableLayout.CONTIGUOUS:
            offset = self.table_offset + row * self.entry_size
            for f in self.fields:
                if f is field:
                    return offset
                offset += f.width
            raise ValueError(f"{self.key}: field {field.name} is not part of this layout")

        base = self.table_offset if field.table == MAIN_TABLE else self.param_table_offset
        return base + row * field.width

    def table_end(self) -> int:
        """One past the last byte the table occupies."""
        if self.layout is TableLayout.CONTIGUOUS:
            return self.table_offset + self.entry_count * self.entry_size
        return max(self.field_offset(self.entry_count - 1, f) + f.width for f in self.fields)


# --- Known formats ---

EOS_OVERLAY11 = TableFormat(
    key="eos",
    title="Explorers of Sky (overlay_0011)",
    layout=TableLayout.CONTIGUOUS,
    entry_count=383,
    table_offset=0x3C3D0,
    pointer_base=0x22DC240,
    fields=(
        FieldSpec("nbparams", 1, FieldRole.PARAM_COUNT, signed=True),
        FieldSpec("unk1", 1, FieldRole.RAW_BYTE, signed=True),
        FieldSpec("unk2", 1, FieldRole.RAW_BYTE, signed=True),
        FieldSpec("unk3", 1, FieldRole.RAW_BYTE, signed=True),
        FieldSpec("stringoffset", 4, FieldRole.STRING_POINTER),
    ),
)

# Name pointers and param counts are stored as two parallel arrays.
# UNVERIFIED: entry_count, both table offsets and pointer_base have not been
# checked against a real Time/Darkness overlay_0011 dump.
EOTD_OVERLAY11 = TableFormat(
    key="eotd",
    title="Explorers of Time/Darkness (overlay_0011, unverified offsets)",
    layout=TableLayout.SPLIT_PARALLEL,
    entry_count=316,
    table_offset=0x3A0B0,
    param_table_offset=0x3A5A0,
    pointer_base=0x22DCB80,
    fields=(
        FieldSpec("stringoffset", 4, FieldRole.STRING_POINTER, table=MAIN_TABLE),
        FieldSpec("nbparams", 1, FieldRole.PARAM_COUNT, signed=True, table=PARAM_TABLE),
    ),
)

FORMATS: Dict[str, TableFormat] = {
    fmt.key: fmt for fmt in (EOS_OVERLAY11, EOTD_OVERLAY11)
}


def get_format(key: str) -> TableFormat:
    try:
        return FORMATS[key]
    except KeyError:
        known = ", ".join(sorted(FORMATS))
        raise KeyError(f"Unknown table format '{key}' (known formats: {known})") from None
