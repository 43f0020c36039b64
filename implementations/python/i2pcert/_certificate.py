"""I2P certificate: the record, its reader and its serializer.

A certificate is one TLV record:

    type    (1 byte)   NULL, HASHCASH, HIDDEN, SIGNED, MULTIPLE, KEY, ...
    length  (2 bytes)  declared payload length, uint16be
    payload (length)   opaque

The declared length comes from a peer and is never trusted on its own.
`Certificate` keeps whatever payload it was given and reconciles it with
the declared length every time `length()` or `data()` is called; the
reader only splits the buffer.  This keeps a record that lies about its
length inspectable instead of lost.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Protocol, Tuple, cast

from ._constants import (
    CERT_MIN_SIZE,
    CERT_TYPE_NAMES,
    CERT_TYPE_SIZE,
    MAX_PAYLOAD_LENGTH,
    SIGNATURE_SIZE,
)
from ._diagnostics import DiagnosticsSink, get_default_sink
from ._errors import CertificateError, Condition, describe
from ._integer import decode_uint, encode_uint8, encode_uint16


class CertificateInterface(Protocol):
    """Capabilities every certificate-like structure provides."""

    def to_bytes(self) -> bytes: ...

    def length(self, sink: Optional[DiagnosticsSink] = None) -> Tuple[int, Condition]: ...

    def data(self, sink: Optional[DiagnosticsSink] = None) -> Tuple[bytes, Condition]: ...

    def type(self) -> int: ...

    def signature_size(self) -> int: ...


@dataclass(frozen=True)
class Certificate:
    """One certificate record.

    `payload` may be shorter or longer than `declared_length`; see
    `length()` for how the two are reconciled.
    """

    kind: int
    declared_length: int
    payload: bytes = b""

    def __post_init__(self) -> None:
        # Normalize bytearray/memoryview so instances hash and compare as values.
        if not isinstance(self.payload, bytes):
            object.__setattr__(self, "payload", bytes(self.payload))

    @classmethod
    def build(cls, kind: int, payload: bytes = b"") -> "Certificate":
        """Make a well-formed certificate whose declared length fits its payload."""
        payload = bytes(payload)
        if len(payload) > MAX_PAYLOAD_LENGTH:
            raise CertificateError(
                Condition.OUT_OF_BOUNDS,
                "payload of {} bytes exceeds maximum {}".format(
                    len(payload), MAX_PAYLOAD_LENGTH),
            )
        return cls(kind, len(payload), payload)

    # ── Accessors ─────────────────────────────────────────────

    def type(self) -> int:
        """Return the certificate type exactly as read."""
        return self.kind

    @property
    def type_name(self) -> Optional[str]:
        """Symbolic name of the type, or None for unassigned values."""
        return CERT_TYPE_NAMES.get(self.kind)

    def signature_size(self) -> int:
        return SIGNATURE_SIZE

    def length(self, sink: Optional[DiagnosticsSink] = None) -> Tuple[int, Condition]:
        """Reconcile the declared length with the payload actually present.

        Returns ``(length, condition)``:

          - declared < 1        -> (declared, TOO_SHORT)
          - declared > payload  -> (len(payload), TRUNCATED)
          - declared < payload  -> (declared, EXCESS_DATA)
          - otherwise           -> (declared, NONE)

        A zero declared length is reported as TOO_SHORT even though a
        header-only record is well formed on the wire.
        """
        if sink is None:
            sink = get_default_sink()
        actual = len(self.payload)

        if self.declared_length < 1:
            sink.warn(
                "Certificate.length",
                describe(Condition.TOO_SHORT),
                certificate_bytes_length=self.declared_length,
                certificate_min_size=CERT_MIN_SIZE - 1,
            )
            return self.declared_length, Condition.TOO_SHORT

        if self.declared_length > actual:
            sink.warn(
                "Certificate.length",
                describe(Condition.TRUNCATED),
                certificate_bytes_length=self.declared_length,
                certificate_actual_length=actual,
            )
            return actual, Condition.TRUNCATED

        if self.declared_length < actual:
            sink.warn(
                "Certificate.length",
                describe(Condition.EXCESS_DATA),
                certificate_bytes_length=self.declared_length,
                certificate_actual_length=actual,
            )
            return self.declared_length, Condition.EXCESS_DATA

        return self.declared_length, Condition.NONE

    def data(self, sink: Optional[DiagnosticsSink] = None) -> Tuple[bytes, Condition]:
        """Return the effective payload and the condition behind it.

        TOO_SHORT yields no payload, TRUNCATED yields everything available,
        and EXCESS_DATA clips to the declared length.
        """
        _length, condition = self.length(sink)
        if condition is Condition.TOO_SHORT:
            return b"", condition
        if condition is Condition.EXCESS_DATA:
            return self.payload[:self.declared_length], condition
        return self.payload, condition

    # ── Serializer ────────────────────────────────────────────

    def to_bytes(self) -> bytes:
        """Encode as type + uint16be length + declared-length payload bytes.

        The declared length is authoritative here; nothing is reconciled.
        A declared length that is negative, wider than 16 bits, or longer
        than the payload raises OUT_OF_BOUNDS.
        """
        n = self.declared_length
        if n < 0 or n > MAX_PAYLOAD_LENGTH or n > len(self.payload):
            raise CertificateError(
                Condition.OUT_OF_BOUNDS,
                "declared length {} out of bounds for payload of {} bytes".format(
                    n, len(self.payload)),
            )
        return encode_uint8(self.kind) + encode_uint16(n) + self.payload[:n]

    def __bytes__(self) -> bytes:
        return self.to_bytes()


if TYPE_CHECKING:
    _conforms: CertificateInterface = Certificate(0, 0)


# ── Reader ────────────────────────────────────────────────────

def read_certificate(
    data: bytes, sink: Optional[DiagnosticsSink] = None
) -> Tuple[Optional[Certificate], bytes, Condition]:
    """Read one certificate from the front of `data`.

    Returns ``(certificate, remainder, condition)``.  The certificate's
    payload is everything after the 3-byte header, unclipped; with
    EXCESS_DATA the bytes past the declared length are also returned as
    the remainder so the next structure can be read from them.  A buffer
    shorter than the header yields no certificate at all.
    """
    if sink is None:
        sink = get_default_sink()
    data = bytes(data)

    if len(data) < CERT_MIN_SIZE:
        sink.warn(
            "read_certificate",
            describe(Condition.TOO_SHORT),
            certificate_bytes_length=len(data),
            certificate_min_size=CERT_MIN_SIZE,
        )
        return None, b"", Condition.TOO_SHORT

    cert = Certificate(
        kind=decode_uint(data[:CERT_TYPE_SIZE]),
        declared_length=decode_uint(data[CERT_TYPE_SIZE:CERT_MIN_SIZE]),
        payload=data[CERT_MIN_SIZE:],
    )

    _length, condition = cert.length(sink)
    if condition is Condition.EXCESS_DATA:
        return cert, data[CERT_MIN_SIZE + cert.declared_length:], condition
    return cert, b"", condition


def read_certificate_strict(
    data: bytes, allow_remainder: bool = False
) -> Tuple[Certificate, bytes]:
    """Read one certificate, raising `CertificateError` on any anomaly.

    With `allow_remainder`, trailing bytes past the declared length are
    returned instead of rejected, which is what a caller reading a
    certificate embedded in a larger structure wants.
    """
    cert, remainder, condition = read_certificate(data)
    if condition is Condition.EXCESS_DATA and allow_remainder:
        condition = Condition.NONE
    condition.raise_for()
    return cast(Certificate, cert), remainder


def read_certificates(
    data: bytes, sink: Optional[DiagnosticsSink] = None
) -> Iterator[Tuple[Optional[Certificate], Condition]]:
    """Yield consecutive certificates packed back to back in `data`.

    Records followed by another are yielded clipped to their declared
    length with Condition.NONE.  Iteration stops after the first record
    that leaves no remainder (the last one, a truncated one, or a
    too-short one), so the final condition tells how the buffer ended.
    """
    buf = bytes(data)
    while buf:
        cert, remainder, condition = read_certificate(buf, sink)
        if condition is Condition.EXCESS_DATA and cert is not None:
            yield Certificate(cert.kind, cert.declared_length,
                              cert.payload[:cert.declared_length]), Condition.NONE
            buf = remainder
            continue
        yield cert, condition
        return
