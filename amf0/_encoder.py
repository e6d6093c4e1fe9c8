"""AMF0 encoder — append the wire form of values to a byte buffer.

Every multi-byte field is packed big-endian with an explicit struct
format; host byte order never leaks onto the wire.
"""

from __future__ import annotations

import struct
from typing import Mapping

from ._constants import (
    MAX_STRING_BYTES,
    OBJECT_TERMINATOR,
    TAG_BOOLEAN,
    TAG_ECMA_ARRAY,
    TAG_NULL,
    TAG_NUMBER,
    TAG_OBJECT,
    TAG_STRING,
)
from ._errors import ERR_LIMIT_SIZE, ERR_TYPE, ERR_UTF8, Amf0Error
from ._value import Kind, Value

_NUMBER = struct.Struct(">Bd")
_U16BE = struct.Struct(">H")

# Tag byte followed by the always-zero u32 length hint.
_ECMA_HEADER = bytes([TAG_ECMA_ARRAY, 0, 0, 0, 0])


def _utf8(s: str) -> bytes:
    """UTF-8 bytes of s, capped at the u16 length field."""
    if not isinstance(s, str):
        raise Amf0Error(ERR_TYPE, "expected str, got {}".format(type(s).__name__))
    try:
        raw = s.encode("utf-8")
    except UnicodeEncodeError:
        raise Amf0Error(ERR_UTF8, "text is not encodable as UTF-8")
    # The length field is 16 bits and is never wrapped.
    if len(raw) > MAX_STRING_BYTES:
        raise Amf0Error(
            ERR_LIMIT_SIZE,
            "string of {} bytes exceeds {}".format(len(raw), MAX_STRING_BYTES),
        )
    return raw


class Encoder:
    """Append-only AMF0 writer.

    Not safe to share between threads; each encode should use its own
    instance (or the module-level encode()).
    """

    def __init__(self) -> None:
        self.buf = bytearray()

    def getvalue(self) -> bytes:
        return bytes(self.buf)

    # ── Primitives ───────────────────────────────────────────

    def write_number(self, n: float) -> None:
        self.buf += _NUMBER.pack(TAG_NUMBER, n)

    def write_boolean(self, b: bool) -> None:
        self.buf.append(TAG_BOOLEAN)
        self.buf.append(0x01 if b else 0x00)

    def write_string(self, s: str) -> None:
        raw = _utf8(s)
        self.buf.append(TAG_STRING)
        self.buf += _U16BE.pack(len(raw))
        self.buf += raw

    def write_null(self) -> None:
        self.buf.append(TAG_NULL)

    def write_key(self, s: str) -> None:
        # Keys are never tagged.
        raw = _utf8(s)
        self.buf += _U16BE.pack(len(raw))
        self.buf += raw

    # ── Containers ───────────────────────────────────────────

    def _write_body(self, mapping: Mapping[str, Value]) -> None:
        for k, v in mapping.items():
            self.write_key(k)
            self.write_value(v)
        self.buf += OBJECT_TERMINATOR

    def write_object(self, mapping: Mapping[str, Value]) -> None:
        self.buf.append(TAG_OBJECT)
        self._write_body(mapping)

    def write_ecma_array(self, mapping: Mapping[str, Value]) -> None:
        self.buf += _ECMA_HEADER
        self._write_body(mapping)

    # ── Dispatch ─────────────────────────────────────────────

    def write_value(self, value: Value) -> None:
        if not isinstance(value, Value):
            raise Amf0Error(ERR_TYPE, "cannot encode {}".format(type(value).__name__))
        kind = value.kind
        if kind is Kind.NUMBER:
            self.write_number(value.as_number())
        elif kind is Kind.BOOLEAN:
            self.write_boolean(value.as_boolean())
        elif kind is Kind.STRING:
            self.write_string(value.as_string())
        elif kind is Kind.NULL:
            self.write_null()
        elif kind is Kind.OBJECT:
            self.write_object(value.as_object())
        else:
            self.write_ecma_array(value.as_object())


def encode(value: Value) -> bytes:
    """Encode a single Value to AMF0 bytes."""
    enc = Encoder()
    enc.write_value(value)
    return enc.getvalue()
