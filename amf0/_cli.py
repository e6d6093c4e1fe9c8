"""AMF0 command-line interface.

Usage:
    echo '{"app":"live"}' | python3 -m amf0 encode [--ecma] [--format hex|base64|raw]
    echo '0300036170700200046c697665000009' | python3 -m amf0 decode [--all]
    python3 -m amf0 decode --format raw --input payload.bin
    python3 -m amf0 version
"""

from __future__ import annotations

import argparse
import base64
import json
import sys
from typing import Any, List, Optional

from . import Amf0Error, __version__, decode, decode_all, dumps, to_native

_FORMATS = ("hex", "base64", "raw")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amf0",
        description="AMF0 encoder/decoder",
    )
    sub = parser.add_subparsers(dest="command")

    # ── encode ──
    enc_p = sub.add_parser("encode", help="Encode JSON as AMF0")
    enc_p.add_argument("--input", "-i", metavar="FILE",
                       help="Read JSON from FILE instead of stdin")
    enc_p.add_argument("--ecma", action="store_true",
                       help="Encode JSON objects as ECMA arrays")
    enc_p.add_argument("--format", "-f", choices=_FORMATS, default="hex",
                       help="Output format (default: hex)")

    # ── decode ──
    dec_p = sub.add_parser("decode", help="Decode AMF0 to JSON")
    dec_p.add_argument("--input", "-i", metavar="FILE",
                       help="Read AMF0 from FILE instead of stdin")
    dec_p.add_argument("--format", "-f", choices=_FORMATS, default="hex",
                       help="Input format (default: hex)")
    dec_p.add_argument("--all", action="store_true",
                       help="Decode every concatenated value into a JSON list")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _read_input(filepath: Optional[str]) -> bytes:
    """Read bytes from a file or stdin."""
    if filepath:
        with open(filepath, "rb") as f:
            return f.read()
    if sys.stdin.isatty():
        print("amf0: reading from stdin (Ctrl-D to end)...", file=sys.stderr)
    return sys.stdin.buffer.read()


def _from_text(raw: bytes, fmt: str) -> bytes:
    if fmt == "hex":
        return bytes.fromhex(raw.decode("ascii"))
    if fmt == "base64":
        return base64.b64decode(raw, validate=True)
    return raw


def _cmd_encode(args: argparse.Namespace) -> None:
    obj = json.loads(_read_input(args.input))
    out = dumps(obj, ecma=args.ecma)
    if args.format == "raw":
        sys.stdout.buffer.write(out)
    elif args.format == "base64":
        print(base64.b64encode(out).decode("ascii"))
    else:
        print(out.hex())


def _cmd_decode(args: argparse.Namespace) -> None:
    raw = _read_input(args.input)
    if args.format != "raw":
        raw = raw.strip()
    buf = _from_text(raw, args.format)
    result: Any
    if args.all:
        result = [to_native(v) for v in decode_all(buf)]
    else:
        result = to_native(decode(buf))
    print(json.dumps(result, ensure_ascii=False))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"amf0 {__version__}")
        return

    try:
        if args.command == "encode":
            _cmd_encode(args)
        elif args.command == "decode":
            _cmd_decode(args)
    except Amf0Error as e:
        print(f"amf0: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except json.JSONDecodeError as e:
        print(f"amf0: JSON parse error: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"amf0: bad {args.format} input: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
