"""i2pcert — I2P certificate reader and serializer.

Read the type-length-value certificate record used throughout the I2P
common structures, reconcile its declared length with the bytes actually
present, and write it back in canonical form.

Quick start:
    >>> from i2pcert import read_certificate, Condition
    >>> cert, rest, cond = read_certificate(bytes.fromhex("050004deadbeef"))
    >>> cert.type_name, cert.data()[0].hex(), cond
    ('KEY', 'deadbeef', <Condition.NONE: 'NONE'>)

Malformed lengths are reported, not raised:
    >>> cert, rest, cond = read_certificate(bytes.fromhex("010002aabbccdd"))
    >>> cert.data()[0].hex(), rest.hex(), cond.name
    ('aabb', 'ccdd', 'EXCESS_DATA')
"""

from __future__ import annotations

from ._certificate import (
    Certificate,
    CertificateInterface,
    read_certificate,
    read_certificate_strict,
    read_certificates,
)
from ._constants import (
    CERT_HASHCASH,
    CERT_HIDDEN,
    CERT_KEY,
    CERT_MIN_SIZE,
    CERT_MULTIPLE,
    CERT_NULL,
    CERT_SIGNED,
    CERT_TYPE_NAMES,
    MAX_PAYLOAD_LENGTH,
    SIGNATURE_SIZE,
)
from ._diagnostics import (
    DiagnosticsSink,
    LoggingSink,
    NullSink,
    get_default_sink,
    set_default_sink,
)
from ._errors import CertificateError, Condition, describe

__version__ = "0.9.24.1"

__all__ = [
    # Entity and reader
    "Certificate",
    "CertificateInterface",
    "read_certificate",
    "read_certificate_strict",
    "read_certificates",
    # Conditions
    "Condition",
    "CertificateError",
    "describe",
    # Diagnostics
    "DiagnosticsSink",
    "LoggingSink",
    "NullSink",
    "get_default_sink",
    "set_default_sink",
    # Type tags and sizes
    "CERT_NULL",
    "CERT_HASHCASH",
    "CERT_HIDDEN",
    "CERT_SIGNED",
    "CERT_MULTIPLE",
    "CERT_KEY",
    "CERT_TYPE_NAMES",
    "CERT_MIN_SIZE",
    "MAX_PAYLOAD_LENGTH",
    "SIGNATURE_SIZE",
]
