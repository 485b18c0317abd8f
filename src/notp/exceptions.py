"""Exception types raised by notp.

Every error derives from :class:`OTPError`, which is itself a ``ValueError``
so callers that only catch ``ValueError`` keep working.
"""


class OTPError(ValueError):
    """Base class for all notp errors."""


class InvalidSecret(OTPError):
    """The shared secret is empty or decodes to no key bytes."""


class InvalidCounter(OTPError):
    """The counter is negative or does not fit in 64 bits."""


class InvalidDigits(OTPError):
    """The requested code width is outside the supported range."""


class InvalidPeriod(OTPError):
    """The TOTP period is not a positive number of seconds."""


class InvalidWindow(OTPError):
    """The verification window is negative."""


class InvalidTimestamp(OTPError):
    """A timestamp is not a non-negative number of Unix milliseconds."""


class UnsupportedAlgorithm(OTPError):
    """The algorithm tag is unknown or the crypto backend cannot compute it."""


class TruncationOutOfRange(OTPError):
    """The HMAC digest is too short for dynamic truncation.

    Only a non-conformant HMAC provider can trigger this.
    """


class InvalidToken(OTPError):
    """A token passed to verification is not a code of the expected width.

    Verification treats this as a non-match and does not propagate it.
    """


class Base32Error(OTPError):
    """Strict Base32 decoding rejected the input."""
