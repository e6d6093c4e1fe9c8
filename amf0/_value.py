"""AMF0 value model — a closed tagged variant over six kinds.

    NUMBER      (0x00)  — IEEE-754 double
    BOOLEAN     (0x01)  — true or false
    STRING      (0x02)  — text, at most 65535 UTF-8 bytes on the wire
    OBJECT      (0x03)  — insertion-ordered map, string keys
    NULL        (0x05)  — no payload
    ECMA_ARRAY  (0x08)  — same payload as OBJECT, different tag

A Value holds exactly a kind and a payload, and the constructor refuses
any payload that does not belong to the kind.  Payload accessors check the
kind first, so asking a NUMBER for its string raises instead of returning
something meaningless.

Map payloads are plain dicts of Value.  They are owned: constructing from
a mapping copies it, and copying a Value copies every nested map and
Value, so two Values never share a payload.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional

from ._constants import (
    TAG_BOOLEAN,
    TAG_ECMA_ARRAY,
    TAG_NULL,
    TAG_NUMBER,
    TAG_OBJECT,
    TAG_STRING,
)
from ._errors import ERR_TYPE, Amf0Error


class Kind(IntEnum):
    """Value kinds.  Each member's integer value is its wire tag."""

    NUMBER = TAG_NUMBER
    BOOLEAN = TAG_BOOLEAN
    STRING = TAG_STRING
    OBJECT = TAG_OBJECT
    NULL = TAG_NULL
    ECMA_ARRAY = TAG_ECMA_ARRAY


_MAP_KINDS = (Kind.OBJECT, Kind.ECMA_ARRAY)


def _copy_map(mapping: Mapping[str, "Value"]) -> Dict[str, "Value"]:
    out: Dict[str, Value] = {}
    for k, v in mapping.items():
        if not isinstance(k, str):
            raise Amf0Error(ERR_TYPE, "map key must be str, got {}".format(type(k).__name__))
        if not isinstance(v, Value):
            raise Amf0Error(ERR_TYPE, "map value for key {!r} is not a Value".format(k))
        out[k] = v.copy()
    return out


def _check_payload(kind: Kind, payload: Any) -> Any:
    """Return the payload normalized for kind, or raise ERR_TYPE."""
    if kind is Kind.NULL:
        if payload is not None:
            raise Amf0Error(ERR_TYPE, "NULL takes no payload")
        return None

    if kind is Kind.NUMBER:
        if payload is None:
            return 0.0
        # bool is an int subclass; True is not a number here.
        if isinstance(payload, bool) or not isinstance(payload, (int, float)):
            raise Amf0Error(ERR_TYPE, "NUMBER payload must be float")
        try:
            return float(payload)
        except OverflowError:
            raise Amf0Error(ERR_TYPE, "integer too large for a double")

    if kind is Kind.BOOLEAN:
        if payload is None:
            return False
        if not isinstance(payload, bool):
            raise Amf0Error(ERR_TYPE, "BOOLEAN payload must be bool")
        return payload

    if kind is Kind.STRING:
        if payload is None:
            return ""
        if not isinstance(payload, str):
            raise Amf0Error(ERR_TYPE, "STRING payload must be str")
        return payload

    # OBJECT / ECMA_ARRAY
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise Amf0Error(ERR_TYPE, "{} payload must be a mapping".format(kind.name))
    return _copy_map(payload)


class Value:
    """One AMF0 value: a kind plus the payload that kind carries."""

    __slots__ = ("_kind", "_payload")

    def __init__(self, kind: Kind, payload: Any = None) -> None:
        try:
            kind = Kind(kind)
        except ValueError:
            raise Amf0Error(ERR_TYPE, "unknown kind {!r}".format(kind))
        self._payload = _check_payload(kind, payload)
        self._kind = kind

    # ── Named constructors ───────────────────────────────────

    @classmethod
    def number(cls, n: float) -> "Value":
        return cls(Kind.NUMBER, n)

    @classmethod
    def boolean(cls, b: bool) -> "Value":
        return cls(Kind.BOOLEAN, b)

    @classmethod
    def string(cls, s: str) -> "Value":
        return cls(Kind.STRING, s)

    @classmethod
    def null(cls) -> "Value":
        return cls(Kind.NULL)

    @classmethod
    def object(cls, mapping: Optional[Mapping[str, "Value"]] = None) -> "Value":
        return cls(Kind.OBJECT, {} if mapping is None else mapping)

    @classmethod
    def ecma_array(cls, mapping: Optional[Mapping[str, "Value"]] = None) -> "Value":
        """ECMA arrays are only ever built on request, never inferred."""
        return cls(Kind.ECMA_ARRAY, {} if mapping is None else mapping)

    @classmethod
    def _adopt_map(cls, kind: Kind, mapping: Dict[str, "Value"]) -> "Value":
        """Wrap a freshly built map without copying it.  Decoder use only."""
        v = cls.__new__(cls)
        v._kind = kind
        v._payload = mapping
        return v

    # ── Accessors ────────────────────────────────────────────

    @property
    def kind(self) -> Kind:
        return self._kind

    def _expect(self, *kinds: Kind) -> None:
        if self._kind not in kinds:
            raise Amf0Error(
                ERR_TYPE,
                "expected {}, value is {}".format(
                    " or ".join(k.name for k in kinds), self._kind.name),
            )

    def as_number(self) -> float:
        self._expect(Kind.NUMBER)
        return self._payload

    def as_boolean(self) -> bool:
        self._expect(Kind.BOOLEAN)
        return self._payload

    def as_string(self) -> str:
        self._expect(Kind.STRING)
        return self._payload

    def as_object(self) -> Dict[str, "Value"]:
        """Return the owned map of an OBJECT or ECMA_ARRAY by reference."""
        self._expect(*_MAP_KINDS)
        return self._payload

    def is_null(self) -> bool:
        return self._kind is Kind.NULL

    def is_map(self) -> bool:
        return self._kind in _MAP_KINDS

    # ── Copy ─────────────────────────────────────────────────

    def copy(self) -> "Value":
        """Deep copy.  Nested maps and Values are duplicated, never shared."""
        if self._kind in _MAP_KINDS:
            return Value._adopt_map(self._kind, _copy_map(self._payload))
        # Scalar payloads are immutable.
        v = Value.__new__(Value)
        v._kind = self._kind
        v._payload = self._payload
        return v

    def __copy__(self) -> "Value":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Value":
        return self.copy()

    # ── Comparison / display ─────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        if self._kind is Kind.NUMBER:
            a, b = self._payload, other._payload
            # Two NaNs are the same Number for round-trip purposes.
            return a == b or (math.isnan(a) and math.isnan(b))
        return self._payload == other._payload

    # Maps are mutable through as_object().
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._kind is Kind.NULL:
            return "Value(NULL)"
        return "Value({}, {!r})".format(self._kind.name, self._payload)
