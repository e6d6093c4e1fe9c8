"""amf0 — AMF0 value model and codec.

Encode and decode the six AMF0 kinds this package supports: Number,
Boolean, String, Null, Object and ECMA Array.

Quick start:
    >>> from amf0 import Value, encode, decode
    >>> encode(Value.number(3.5)).hex()
    '00400c000000000000'
    >>> decode(b"\\x03\\x00\\x00\\x09")
    Value(OBJECT, {})

Plain Python objects work too:
    >>> from amf0 import dumps, loads
    >>> loads(dumps({"app": "live", "tcUrl": None}))
    {'app': 'live', 'tcUrl': None}

The codec only handles bytes already in memory.  Framing, transport and
retries belong to the caller.
"""

from __future__ import annotations

from typing import Any

from ._decoder import Decoder, decode, decode_all
from ._encoder import Encoder, encode
from ._errors import (
    ERR_LIMIT_SIZE,
    ERR_OBJECT_END,
    ERR_TRUNCATED,
    ERR_TYPE,
    ERR_UNEXPECTED_TAG,
    ERR_UNSUPPORTED_TYPE,
    ERR_UTF8,
    Amf0Error,
)
from ._native import to_native, to_value
from ._value import Kind, Value

__version__ = "1.0.0"

__all__ = [
    # Value model
    "Kind",
    "Value",
    # Codec
    "Encoder",
    "Decoder",
    "encode",
    "decode",
    "decode_all",
    # Plain-Python adapter
    "to_value",
    "to_native",
    "dumps",
    "loads",
    # Exception
    "Amf0Error",
    # Error codes
    "ERR_TRUNCATED",
    "ERR_UNEXPECTED_TAG",
    "ERR_UNSUPPORTED_TYPE",
    "ERR_OBJECT_END",
    "ERR_UTF8",
    "ERR_LIMIT_SIZE",
    "ERR_TYPE",
]


# ── Convenience: plain objects in, plain objects out ──────────

def dumps(obj: Any, *, ecma: bool = False) -> bytes:
    """Encode a plain Python object (dict, str, float, bool, None) to AMF0.

    dicts become Objects, or ECMA arrays when ecma=True.
    """
    return encode(to_value(obj, ecma=ecma))


def loads(buf: bytes) -> Any:
    """Decode the first AMF0 value in buf into plain Python objects."""
    return to_native(decode(buf))
