#!/usr/bin/env python3
# tools/invariants_runner.py
#
# Certificate invariants (property tests) over randomly generated records.
#
# This runner:
# - generates random certificates (type, declared length, payload) within limits
# - checks round-trip, clipping idempotence, and condition exclusivity
#
# Exit code:
#   0 -> all checks passed
#   1 -> invariant violation

import os, sys, random
from typing import Any, Dict, Optional

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.join(ROOT, "implementations", "python"))

from i2pcert import Certificate, Condition, NullSink, read_certificate

SEED = int(os.environ.get("I2PCERT_SEED", "1337"))
TRIALS = int(os.environ.get("I2PCERT_TRIALS", "2000"))
MAX_PAYLOAD = int(os.environ.get("I2PCERT_GEN_MAX_PAYLOAD", "96"))

random.seed(SEED)
QUIET = NullSink()

def rand_payload() -> bytes:
    return bytes(random.getrandbits(8) for _ in range(random.randint(0, MAX_PAYLOAD)))

def rand_certificate() -> Certificate:
    payload = rand_payload()
    r = random.random()
    if r < 0.5:
        declared = len(payload)
    elif r < 0.75:
        declared = random.randint(0, max(len(payload) - 1, 0))
    else:
        declared = len(payload) + random.randint(1, 16)
    return Certificate(random.randint(0, 255), declared, payload)

def expected_condition(cert: Certificate) -> Condition:
    if cert.declared_length < 1:
        return Condition.TOO_SHORT
    if cert.declared_length > len(cert.payload):
        return Condition.TRUNCATED
    if cert.declared_length < len(cert.payload):
        return Condition.EXCESS_DATA
    return Condition.NONE

def fail(label: str, context: Dict[str, Any]) -> int:
    print("INVARIANT FAIL:", label)
    print("CTX:", {k: (v.hex() if isinstance(v, bytes) else v) for k, v in context.items()})
    return 1

def main() -> int:
    for t in range(TRIALS):
        cert = rand_certificate()
        ctx: Dict[str, Any] = {"trial": t, "cert": repr(cert)}

        # (1) Exactly one condition, and the right one
        length, cond = cert.length(QUIET)
        if cond is not expected_condition(cert):
            return fail("condition classification", dict(ctx, got=cond.value))

        # (2) Clipping idempotence
        once, cond1 = cert.data(QUIET)
        if cond1 is not cond:
            return fail("data/length condition agreement", ctx)
        if cond is not Condition.TOO_SHORT:
            again, _ = Certificate(cert.kind, cert.declared_length, once).data(QUIET)
            if again != once or len(once) != length:
                return fail("clipping idempotence", dict(ctx, once=once))

        # (3) Round-trip for well-formed records
        if cond is Condition.NONE:
            wire = cert.to_bytes()
            got, rest, rcond = read_certificate(wire, QUIET)
            if got != cert or rest or rcond is not Condition.NONE:
                return fail("round-trip", dict(ctx, wire=wire))

        # (4) Encode stability (encode twice same bytes)
        if cert.declared_length <= len(cert.payload):
            if cert.to_bytes() != cert.to_bytes():
                return fail("encode stability", ctx)

    print(f"OK: invariants passed for TRIALS={TRIALS} seed={SEED}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
