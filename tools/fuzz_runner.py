#!/usr/bin/env python3
# tools/fuzz_runner.py
#
# Reader fuzzing over hostile buffers.
#
# Generates three fuzz categories:
#   A) random byte strings of random length -> read_certificate
#   B) valid encodings with a mutated length field
#   C) valid encodings concatenated -> read_certificates
#
# The reader must never raise, and header + payload + remainder must always
# account for the input.  Any violation prints a minimal repro and exits non-zero.

import os, sys, random
from typing import Any, Dict

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(ROOT, "implementations", "python"))

from i2pcert import (
    CERT_MIN_SIZE,
    Certificate,
    Condition,
    NullSink,
    read_certificate,
    read_certificates,
)

SEED = int(os.environ.get("I2PCERT_SEED", "4242"))
ROUNDS = int(os.environ.get("I2PCERT_FUZZ_ROUNDS", "5000"))

random.seed(SEED)
QUIET = NullSink()

def rand_bytes(nmax: int) -> bytes:
    return bytes(random.getrandbits(8) for _ in range(random.randint(0, nmax)))

def rand_valid() -> bytes:
    payload = rand_bytes(40) or b"\x00"
    return Certificate.build(random.randint(0, 5), payload).to_bytes()

def mismatch(label: str, ctx: Dict[str, Any]) -> None:
    print("MISMATCH:", label)
    print("CTX:", {k: (v.hex() if isinstance(v, bytes) else v) for k, v in ctx.items()})
    raise SystemExit(1)

def check_read(raw: bytes, label: str, i: int) -> None:
    try:
        cert, rest, cond = read_certificate(raw, QUIET)
    except Exception as e:
        mismatch(label + " raised " + type(e).__name__, {"round": i, "input": raw})
        return
    if cert is None:
        if cond is not Condition.TOO_SHORT or len(raw) >= CERT_MIN_SIZE:
            mismatch(label + " missing certificate", {"round": i, "input": raw})
        return
    if raw[:CERT_MIN_SIZE] + cert.payload != raw:
        mismatch(label + " payload split", {"round": i, "input": raw})
    if cond is Condition.EXCESS_DATA:
        clipped, _ = cert.data(QUIET)
        if raw[:CERT_MIN_SIZE] + clipped + rest != raw:
            mismatch(label + " remainder split", {"round": i, "input": raw})
    elif rest:
        mismatch(label + " unexpected remainder", {"round": i, "input": raw})

def main() -> int:
    for i in range(ROUNDS):
        r = random.random()

        # A) random garbage
        if r < 0.40:
            check_read(rand_bytes(12), "A random", i)
            continue

        # B) valid record with a lying length field
        if r < 0.75:
            raw = bytearray(rand_valid())
            raw[1:3] = random.getrandbits(16).to_bytes(2, "big")
            if random.random() < 0.3:
                raw += rand_bytes(8)
            check_read(bytes(raw), "B mutated length", i)
            continue

        # C) packed sequence of valid records
        parts = [rand_valid() for _ in range(random.randint(1, 5))]
        got = list(read_certificates(b"".join(parts), QUIET))
        want = [read_certificate(p, QUIET)[0] for p in parts]
        if [c for c, _ in got] != want or any(c is not Condition.NONE for _, c in got):
            mismatch("C sequence", {"round": i, "input": b"".join(parts)})

    print(f"OK: fuzz rounds={ROUNDS} seed={SEED} (no mismatches)")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
