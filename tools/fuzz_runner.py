#!/usr/bin/env python3
# tools/fuzz_runner.py
#
# Property fuzzing for the amf0 codec.
#
# Three fuzz categories:
#   A) random Value trees -> encode -> decode must round-trip
#   B) every strict prefix of an encoding must fail with ERR_TRUNCATED
#   C) random byte soup -> decode must either succeed or raise a decode error
#
# Any violation prints a minimal repro payload and exits non-zero.

import os, sys, random
from typing import Any, Dict

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from amf0 import Amf0Error, ERR_TRUNCATED, Value, decode, encode
from amf0._errors import DECODE_ERRORS

SEED = int(os.environ.get("AMF0_SEED", "4242"))
ROUNDS = int(os.environ.get("AMF0_FUZZ_ROUNDS", "2000"))
MAX_GEN_DEPTH = int(os.environ.get("AMF0_GEN_MAX_DEPTH", "5"))

random.seed(SEED)

def violation(label: str, ctx: Dict[str, Any]) -> None:
    print("VIOLATION:", label)
    for k, v in ctx.items():
        print("  {}: {}".format(k, v)[:4000])
    raise SystemExit(1)

# --- generators ---

def rand_text(nmax: int) -> str:
    out = []
    for _ in range(random.randint(0, nmax)):
        r = random.random()
        if r < 0.80:
            out.append(chr(random.randint(0x20, 0x7E)))
        elif r < 0.95:
            out.append(chr(random.randint(0xA0, 0xD7FF)))
        else:
            out.append(chr(random.randint(0x10000, 0x10FFFF)))
    return "".join(out)

def rand_number() -> float:
    r = random.random()
    if r < 0.1:
        return random.choice([0.0, -0.0, float("inf"), float("-inf"), float("nan")])
    if r < 0.5:
        return float(random.randint(-2**31, 2**31))
    return random.uniform(-1e12, 1e12)

def rand_scalar() -> Value:
    r = random.random()
    if r < 0.35:
        return Value.number(rand_number())
    if r < 0.55:
        return Value.boolean(random.random() < 0.5)
    if r < 0.90:
        return Value.string(rand_text(24))
    return Value.null()

def rand_value(depth: int = 0) -> Value:
    if depth >= MAX_GEN_DEPTH or random.random() < 0.45:
        return rand_scalar()
    entries: Dict[str, Value] = {}
    for _ in range(random.randint(0, 6)):
        # Empty keys terminate a body, so generated keys are never empty.
        entries[rand_text(10) or "k"] = rand_value(depth + 1)
    if random.random() < 0.7:
        return Value.object(entries)
    return Value.ecma_array(entries)

def rand_soup() -> bytes:
    # Bias the leading byte towards known tags so decoding gets past byte 0.
    head = random.choice([0x00, 0x01, 0x02, 0x03, 0x05, 0x08, 0x09, 0xFF])
    tail = bytes(random.getrandbits(8) for _ in range(random.randint(0, 24)))
    return bytes([head]) + tail

def main() -> int:
    for i in range(ROUNDS):
        v = rand_value()
        buf = encode(v)

        # A) round-trip
        try:
            back = decode(buf)
        except Amf0Error as e:
            violation("A decode of valid encoding failed", {"round": i, "err": e.code, "hex": buf.hex()})
        if back != v:
            violation("A round-trip mismatch", {"round": i, "value": repr(v), "hex": buf.hex()})

        # B) truncation, on a sample of cut points for large encodings
        cuts = range(len(buf)) if len(buf) <= 64 else random.sample(range(len(buf)), 64)
        for cut in cuts:
            try:
                decode(buf[:cut])
            except Amf0Error as e:
                if e.code != ERR_TRUNCATED:
                    violation("B wrong error for prefix", {"round": i, "cut": cut, "err": e.code, "hex": buf.hex()})
                continue
            violation("B prefix decoded", {"round": i, "cut": cut, "hex": buf.hex()})

        # C) byte soup
        soup = rand_soup()
        try:
            decode(soup)
        except Amf0Error as e:
            if e.code not in DECODE_ERRORS:
                violation("C non-decode error", {"round": i, "err": e.code, "hex": soup.hex()})

    print(f"OK: fuzz rounds={ROUNDS} seed={SEED} (no violations)")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
