"""AMF0 error codes and exception class.

Decoding fails with one of the first four codes; the rest come from the
value model, the native-object adapter, and the two encode-time limits on
text (length and UTF-8 encodability).
"""

from __future__ import annotations

# ── Error codes ──────────────────────────────────────────────
# Grep-friendly; the conformance vectors refer to these names.

ERR_TRUNCATED: str = "ERR_TRUNCATED"                  # fewer bytes than a field needs
ERR_UNEXPECTED_TAG: str = "ERR_UNEXPECTED_TAG"        # tag-specific read saw another tag
ERR_UNSUPPORTED_TYPE: str = "ERR_UNSUPPORTED_TYPE"    # dispatcher saw an unknown tag
ERR_OBJECT_END: str = "ERR_OBJECT_END"                # empty key not followed by 0x09
ERR_UTF8: str = "ERR_UTF8"                            # text not valid / encodable UTF-8
ERR_LIMIT_SIZE: str = "ERR_LIMIT_SIZE"                # string or key over 65535 bytes
ERR_TYPE: str = "ERR_TYPE"                            # wrong kind or unconvertible object

DECODE_ERRORS = frozenset({
    ERR_TRUNCATED,
    ERR_UNEXPECTED_TAG,
    ERR_UNSUPPORTED_TYPE,
    ERR_OBJECT_END,
    ERR_UTF8,
})


class Amf0Error(Exception):
    """Exception for AMF0 encoding and decoding errors.

    The `.code` attribute is one of the ERR_* strings above and is what
    tests and callers should compare against.
    """

    def __init__(self, code: str, msg: str = "") -> None:
        super().__init__(msg or code)
        self.code = code
