"""
overlaydump - Opcode table extraction for game overlay images
"""

from .errors import (
    OverlayDumpError, OverlayIOError, TruncatedReadError,
    UnterminatedStringError, InvalidPointerError,
)
from .byte_reader import ByteCursor, read_int, read_uint, read_sint
from .strings import read_c_string, c_string_length
from .formats import (
    FieldRole, TableLayout, FieldSpec, TableFormat,
    EOS_OVERLAY11, EOTD_OVERLAY11, FORMATS, get_format,
)
from .decoder import DecodedEntry, DecoderState, OpcodeTableDecoder, decode_table, translate_pointer
from .overlay_file import load_overlay
from .report import format_entry, render_report, write_report

__all__ = [
    'OverlayDumpError',
    'OverlayIOError',
    'TruncatedReadError',
    'UnterminatedStringError',
    'InvalidPointerError',
    'ByteCursor',
    'read_int',
    'read_uint',
    'read_sint',
    'read_c_string',
    'c_string_length',
    'FieldRole',
    'TableLayout',
    'FieldSpec',
    'TableFormat',
    'EOS_OVERLAY11',
    'EOTD_OVERLAY11',
    'FORMATS',
    'get_format',
    'DecodedEntry',
    'DecoderState',
    'OpcodeTableDecoder',
    'decode_table',
    'translate_pointer',
    'load_overlay',
    'format_entry',
    'render_report',
    'write_report',
]
