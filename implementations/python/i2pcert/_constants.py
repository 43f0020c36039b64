"""I2P certificate constants — type tags, header layout, and size limits.

Wire layout (common structures, accurate for router version 0.9.24):

    +----+----+----+----+----+-//
    |type| length  | payload
    +----+----+----+----+----+-//
"""

from __future__ import annotations

from typing import Dict

__structure_version__ = "0.9.24"

# ── Certificate type tags (single byte) ──────────────────────
# Values outside 0–5 are structurally legal; they are carried through
# untouched and simply have no symbolic name.
CERT_NULL: int = 0
CERT_HASHCASH: int = 1
CERT_HIDDEN: int = 2
CERT_SIGNED: int = 3
CERT_MULTIPLE: int = 4
CERT_KEY: int = 5

CERT_TYPE_NAMES: Dict[int, str] = {
    CERT_NULL: "NULL",
    CERT_HASHCASH: "HASHCASH",
    CERT_HIDDEN: "HIDDEN",
    CERT_SIGNED: "SIGNED",
    CERT_MULTIPLE: "MULTIPLE",
    CERT_KEY: "KEY",
}

# ── Header layout ────────────────────────────────────────────
CERT_TYPE_SIZE: int = 1
CERT_LENGTH_SIZE: int = 2
CERT_MIN_SIZE: int = CERT_TYPE_SIZE + CERT_LENGTH_SIZE  # header only

# ── Limits ───────────────────────────────────────────────────
MAX_CERT_TYPE: int = 0xFF
MAX_PAYLOAD_LENGTH: int = 0xFFFF

# Size of the DSA-SHA1 signature that accompanies a bare certificate.
SIGNATURE_SIZE: int = 40
