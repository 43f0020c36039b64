"""i2pcert command-line interface.

Usage:
    i2pcert parse --hex 050004deadbeef
    printf '\\x05\\x00\\x04\\xde\\xad\\xbe\\xef' | python3 -m i2pcert parse
    python3 -m i2pcert parse --input cert.b64 --base64 --all
    python3 -m i2pcert encode --type 5 --payload-hex deadbeef
    python3 -m i2pcert version

Exit status: 0 on success, 1 when --strict and a warning condition was
reported, 2 on a fatal condition or unreadable input.
"""

from __future__ import annotations

import argparse
import base64
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from . import (
    Certificate,
    CertificateError,
    Condition,
    NullSink,
    __version__,
    read_certificate,
    read_certificates,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i2pcert",
        description="I2P certificate reader and serializer",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.environ.get("I2PCERT_LOG_LEVEL", "WARNING"),
        help="Logging level for format warnings (default: $I2PCERT_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    # ── parse ──
    parse_p = sub.add_parser("parse", help="Read a certificate and print it as JSON")
    parse_p.add_argument("--hex", metavar="HEX",
                         help="Certificate bytes as hex instead of stdin")
    parse_p.add_argument("--input", "-i", metavar="FILE",
                         help="Read bytes from FILE instead of stdin")
    parse_p.add_argument("--base64", action="store_true",
                         help="Input (file or stdin) is base64 text")
    parse_p.add_argument("--all", action="store_true",
                         help="Read every certificate packed in the input")
    parse_p.add_argument("--strict", action="store_true",
                         help="Exit 1 on truncated or excess data")

    # ── encode ──
    enc_p = sub.add_parser("encode", help="Emit a certificate's wire bytes (hex)")
    enc_p.add_argument("--type", "-t", type=int, required=True, dest="cert_type",
                       help="Certificate type (0-255)")
    enc_p.add_argument("--payload-hex", default="", metavar="HEX",
                       help="Payload bytes as hex")
    enc_p.add_argument("--length", type=int, default=None,
                       help="Declared length (default: payload size)")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _read_input(args: argparse.Namespace) -> bytes:
    """Collect the raw certificate bytes from --hex, a file, or stdin."""
    if args.hex is not None:
        return bytes.fromhex(args.hex)
    if args.input:
        with open(args.input, "rb") as f:
            raw = f.read()
    else:
        if sys.stdin.isatty():
            print("i2pcert: reading from stdin (Ctrl-D to end)...", file=sys.stderr)
        raw = sys.stdin.buffer.read()
    if args.base64:
        return base64.b64decode(raw, validate=False)
    return raw


def _describe(cert: Optional[Certificate], condition: Condition,
              remainder: Optional[bytes] = None) -> Dict[str, Any]:
    out: Dict[str, Any] = {"condition": condition.value}
    if cert is None:
        return out
    # The reader already reported anomalies; do not repeat them.
    quiet = NullSink()
    length, _ = cert.length(quiet)
    payload, _ = cert.data(quiet)
    out.update({
        "type": cert.type(),
        "type_name": cert.type_name,
        "declared_length": cert.declared_length,
        "effective_length": length,
        "payload_hex": payload.hex(),
    })
    if remainder is not None:
        out["remainder_hex"] = remainder.hex()
    return out


def _cmd_parse(args: argparse.Namespace) -> int:
    raw = _read_input(args)

    if args.all:
        results = list(read_certificates(raw))
        records: List[Dict[str, Any]] = [_describe(c, cond) for c, cond in results]
        print(json.dumps(records, indent=2))
        conditions = [cond for _, cond in results]
    else:
        cert, remainder, cond = read_certificate(raw)
        print(json.dumps(_describe(cert, cond, remainder), indent=2))
        conditions = [cond]

    if any(c.is_fatal for c in conditions):
        return 2
    if args.strict and any(c.is_warning for c in conditions):
        return 1
    return 0


def _cmd_encode(args: argparse.Namespace) -> int:
    payload = bytes.fromhex(args.payload_hex)
    if args.length is None:
        cert = Certificate.build(args.cert_type, payload)
    else:
        cert = Certificate(args.cert_type, args.length, payload)
    print(cert.to_bytes().hex())
    return 0


def _setup_logging(level: str) -> None:
    # Defaults from the environment bypass argparse choices.
    if level not in LOG_LEVELS:
        raise ValueError(f"unknown log level {level!r}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        _setup_logging(args.log_level)
    except ValueError as e:
        print(f"i2pcert: {e}", file=sys.stderr)
        sys.exit(2)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"i2pcert {__version__}")
        return

    try:
        if args.command == "parse":
            status = _cmd_parse(args)
        else:
            status = _cmd_encode(args)
    except CertificateError as e:
        print(f"i2pcert: error [{e.condition.value}]: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"i2pcert: bad input: {e}", file=sys.stderr)
        sys.exit(2)

    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
