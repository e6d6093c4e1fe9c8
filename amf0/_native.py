"""Plain-Python adapter for the AMF0 value model.

Type mapping:
    None          ↔ NULL
    bool          ↔ BOOLEAN
    int / float   → NUMBER     (NUMBER always comes back as float)
    str           ↔ STRING
    dict          → OBJECT     (or ECMA_ARRAY when ecma=True)
    OBJECT / ECMA_ARRAY → dict

Lists, bytes and everything else have no AMF0 kind in this package and
are rejected with ERR_TYPE.  The mapping is lossy in one direction only:
an ECMA_ARRAY read back as a dict forgets that it was an ECMA array.
"""

from __future__ import annotations

from typing import Any, Dict

from ._errors import ERR_TYPE, Amf0Error
from ._value import Kind, Value


def to_value(obj: Any, *, ecma: bool = False) -> Value:
    """Convert a plain Python object tree into a Value tree.

    With ecma=True every dict, at any depth, becomes an ECMA_ARRAY instead
    of an OBJECT.  Values already present in the tree are copied as-is.
    """
    if isinstance(obj, Value):
        return obj.copy()

    if obj is None:
        return Value.null()

    # bool before int: isinstance(True, int) is True.
    if isinstance(obj, bool):
        return Value.boolean(obj)

    if isinstance(obj, (int, float)):
        return Value.number(obj)

    if isinstance(obj, str):
        return Value.string(obj)

    if isinstance(obj, dict):
        out: Dict[str, Value] = {}
        for k, v in obj.items():
            if not isinstance(k, str):
                raise Amf0Error(ERR_TYPE, "dict key must be str, got {}".format(type(k).__name__))
            out[k] = to_value(v, ecma=ecma)
        return Value._adopt_map(Kind.ECMA_ARRAY if ecma else Kind.OBJECT, out)

    raise Amf0Error(ERR_TYPE, "no AMF0 kind for {}".format(type(obj).__name__))


def to_native(value: Value) -> Any:
    """Convert a Value tree back into plain Python objects."""
    kind = value.kind
    if kind is Kind.NULL:
        return None
    if kind is Kind.NUMBER:
        return value.as_number()
    if kind is Kind.BOOLEAN:
        return value.as_boolean()
    if kind is Kind.STRING:
        return value.as_string()
    return {k: to_native(v) for k, v in value.as_object().items()}
