"""AMF0 decoder — rebuild values from a cursor over an in-memory buffer.

The whole encoded value must already be in the buffer; there is no
resumable or incremental mode.  Every read checks the remaining length
before touching the buffer and raises ERR_TRUNCATED if it falls short.

Object and ECMA-array bodies share one loop:

    ExpectKeyOrEnd --"" key--> Done --0x09--> (return)
    ExpectKeyOrEnd --key k---> ExpectValue --value v--> ExpectKeyOrEnd
                                                 (map[k] = v)

A key repeated within one body keeps its last value.
"""

from __future__ import annotations

import struct
from typing import Dict, List, Union

from ._constants import (
    ECMA_HINT_SIZE,
    NUMBER_SIZE,
    STRING_LENGTH_SIZE,
    TAG_BOOLEAN,
    TAG_ECMA_ARRAY,
    TAG_NULL,
    TAG_NUMBER,
    TAG_OBJECT,
    TAG_OBJECT_END,
    TAG_STRING,
)
from ._errors import (
    ERR_OBJECT_END,
    ERR_TRUNCATED,
    ERR_UNEXPECTED_TAG,
    ERR_UNSUPPORTED_TYPE,
    ERR_UTF8,
    Amf0Error,
)
from ._value import Kind, Value

Buffer = Union[bytes, bytearray, memoryview]

_DOUBLE = struct.Struct(">d")
_U16BE = struct.Struct(">H")

_TAG_NAMES = {
    TAG_NUMBER: "number",
    TAG_BOOLEAN: "boolean",
    TAG_STRING: "string",
    TAG_OBJECT: "object",
    TAG_NULL: "null",
    TAG_ECMA_ARRAY: "ECMA array",
}


class Decoder:
    """Forward-only reader over one buffer.

    `pos` is the offset of the next unread byte.  After a successful
    read_value() it sits just past that value, so concatenated values can
    be read one after another.  After a failure its position is undefined
    and the instance should be discarded.
    """

    def __init__(self, buf: Buffer, pos: int = 0) -> None:
        self.buf = bytes(buf)
        self.pos = pos

    @property
    def remaining(self) -> int:
        return max(0, len(self.buf) - self.pos)

    def at_end(self) -> bool:
        return self.pos >= len(self.buf)

    # ── Raw reads ────────────────────────────────────────────

    def _need(self, n: int, what: str) -> None:
        if self.pos + n > len(self.buf):
            raise Amf0Error(
                ERR_TRUNCATED,
                "truncated {} at offset {}: need {} bytes, have {}".format(
                    what, self.pos, n, self.remaining),
            )

    def _take(self, n: int, what: str) -> bytes:
        self._need(n, what)
        out = self.buf[self.pos:self.pos + n]
        self.pos += n
        return out

    def read_byte(self) -> int:
        self._need(1, "byte")
        b = self.buf[self.pos]
        self.pos += 1
        return b

    def peek_byte(self) -> int:
        self._need(1, "byte")
        return self.buf[self.pos]

    def _expect_tag(self, tag: int) -> None:
        got = self.read_byte()
        if got != tag:
            raise Amf0Error(
                ERR_UNEXPECTED_TAG,
                "expected {} tag 0x{:02x}, got 0x{:02x} at offset {}".format(
                    _TAG_NAMES[tag], tag, got, self.pos - 1),
            )

    def _read_text(self, what: str) -> str:
        (n,) = _U16BE.unpack(self._take(STRING_LENGTH_SIZE, what + " length"))
        raw = self._take(n, what + " payload")
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            raise Amf0Error(ERR_UTF8, "invalid UTF-8 in {} ending at offset {}".format(what, self.pos))

    # ── Scalars ──────────────────────────────────────────────

    def read_number(self) -> float:
        self._expect_tag(TAG_NUMBER)
        return _DOUBLE.unpack(self._take(NUMBER_SIZE, "number"))[0]

    def read_boolean(self) -> bool:
        self._expect_tag(TAG_BOOLEAN)
        return self.read_byte() != 0

    def read_string(self) -> str:
        self._expect_tag(TAG_STRING)
        return self._read_text("string")

    def read_null(self) -> None:
        self._expect_tag(TAG_NULL)

    def read_key(self) -> str:
        """Read an untagged object key."""
        return self._read_text("key")

    # ── Containers ───────────────────────────────────────────

    def _read_body(self) -> Dict[str, Value]:
        result: Dict[str, Value] = {}
        while True:
            key = self.read_key()
            if key == "":
                break
            result[key] = self.read_value()
        end = self.read_byte()
        if end != TAG_OBJECT_END:
            raise Amf0Error(
                ERR_OBJECT_END,
                "expected object end 0x09, got 0x{:02x} at offset {}".format(end, self.pos - 1),
            )
        return result

    def read_object(self) -> Dict[str, Value]:
        self._expect_tag(TAG_OBJECT)
        return self._read_body()

    def read_ecma_array(self) -> Dict[str, Value]:
        self._expect_tag(TAG_ECMA_ARRAY)
        # Length hint: informational only, never checked against the body.
        self._take(ECMA_HINT_SIZE, "ECMA array length hint")
        return self._read_body()

    # ── Dispatch ─────────────────────────────────────────────

    def read_value(self) -> Value:
        tag = self.peek_byte()
        if tag == TAG_NUMBER:
            return Value.number(self.read_number())
        if tag == TAG_BOOLEAN:
            return Value.boolean(self.read_boolean())
        if tag == TAG_STRING:
            return Value.string(self.read_string())
        if tag == TAG_OBJECT:
            return Value._adopt_map(Kind.OBJECT, self.read_object())
        if tag == TAG_ECMA_ARRAY:
            return Value._adopt_map(Kind.ECMA_ARRAY, self.read_ecma_array())
        if tag == TAG_NULL:
            self.read_null()
            return Value.null()
        # Cursor stays on the offending tag.
        raise Amf0Error(
            ERR_UNSUPPORTED_TYPE,
            "unsupported AMF0 type 0x{:02x} at offset {}".format(tag, self.pos),
        )


def decode(buf: Buffer) -> Value:
    """Decode the first value in buf.  Trailing bytes are ignored."""
    return Decoder(buf).read_value()


def decode_all(buf: Buffer) -> List[Value]:
    """Decode every concatenated value in buf, in order."""
    dec = Decoder(buf)
    values: List[Value] = []
    while not dec.at_end():
        values.append(dec.read_value())
    return values
