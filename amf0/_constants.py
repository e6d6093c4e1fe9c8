"""AMF0 constants — wire type tags and length limits.

Only the subset of AMF0 markers this package speaks is listed.  Markers
such as undefined (0x06), reference (0x07), strict array (0x0A), date
(0x0B) and long string (0x0C) are deliberately absent: the decoder reports
them as ERR_UNSUPPORTED_TYPE.
"""

from __future__ import annotations

# ── Type tags (single byte each) ─────────────────────────────
TAG_NUMBER: int = 0x00      # payload: IEEE-754 double, big-endian, 8 bytes
TAG_BOOLEAN: int = 0x01     # payload: 1 byte, nonzero = true
TAG_STRING: int = 0x02      # payload: u16be length + UTF-8 bytes
TAG_OBJECT: int = 0x03      # payload: key/value pairs + empty key + 0x09
TAG_NULL: int = 0x05        # no payload
TAG_ECMA_ARRAY: int = 0x08  # payload: u32be length hint + object body

# Terminates an Object/ECMA-array body.  Never a value's leading tag.
TAG_OBJECT_END: int = 0x09

# Empty key (u16be zero length) followed by the end marker.
OBJECT_TERMINATOR: bytes = b"\x00\x00\x09"

# ── Field widths ─────────────────────────────────────────────
NUMBER_SIZE: int = 8
STRING_LENGTH_SIZE: int = 2
ECMA_HINT_SIZE: int = 4

# Strings and keys carry a u16 length, so their UTF-8 form is capped.
MAX_STRING_BYTES: int = 0xFFFF
