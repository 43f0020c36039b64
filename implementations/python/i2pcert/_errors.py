"""Certificate conditions and the exception raised for fatal ones.

Parsing never raises for a malformed record.  The reader and the accessors
hand back their best-effort result together with a `Condition` so callers
pick strict or lenient handling themselves.  Only encoding raises, because
there is no best-effort byte string to return when the declared length
points past the payload.
"""

from __future__ import annotations

import enum


class Condition(enum.Enum):
    """Outcome of reconciling a certificate's declared length.

    At most one condition applies to a record; `NONE` means the declared
    length and the payload agree.
    """

    NONE = "NONE"
    TOO_SHORT = "TOO_SHORT"          # buffer or declared length below minimum
    TRUNCATED = "TRUNCATED"          # declared length > available bytes
    EXCESS_DATA = "EXCESS_DATA"      # available bytes > declared length
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"  # encode: declared length > payload

    @property
    def is_fatal(self) -> bool:
        return self in _FATAL

    @property
    def is_warning(self) -> bool:
        return self in (Condition.TRUNCATED, Condition.EXCESS_DATA)

    def raise_for(self, msg: str = "") -> None:
        """Raise `CertificateError` unless this is `Condition.NONE`."""
        if self is not Condition.NONE:
            raise CertificateError(self, msg or _MESSAGES[self])


_FATAL = frozenset({Condition.TOO_SHORT, Condition.OUT_OF_BOUNDS})

_MESSAGES = {
    Condition.TOO_SHORT: "certificate is too short",
    Condition.TRUNCATED: "certificate data is shorter than specified by length",
    Condition.EXCESS_DATA: "certificate contains data beyond length",
    Condition.OUT_OF_BOUNDS: "certificate length exceeds payload",
}


def describe(condition: Condition) -> str:
    """Human-readable reason for a condition ("" for NONE)."""
    return _MESSAGES.get(condition, "")


class CertificateError(Exception):
    """Exception for certificate processing errors.

    The `.condition` attribute is what callers and tests compare against;
    the message text is for humans only.
    """

    def __init__(self, condition: Condition, msg: str = "") -> None:
        super().__init__(msg or describe(condition) or condition.value)
        self.condition = condition
