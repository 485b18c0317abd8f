"""HOTP (RFC 4226) and TOTP (RFC 6238) one-time passwords."""

import logging

from notp.algorithms import Algorithm, HmacProvider, compute_hmac
from notp.base32 import decode as base32_decode
from notp.base32 import encode as base32_encode
from notp.exceptions import (
    Base32Error,
    InvalidCounter,
    InvalidDigits,
    InvalidPeriod,
    InvalidSecret,
    InvalidTimestamp,
    InvalidToken,
    InvalidWindow,
    OTPError,
    TruncationOutOfRange,
    UnsupportedAlgorithm,
)
from notp.hotp import VerificationResult
from notp.hotp import generate as hotp_generate
from notp.hotp import verify as hotp_verify
from notp.token import HotpToken, TotpToken
from notp.totp import generate as totp_generate
from notp.totp import time_remaining, time_step
from notp.totp import verify as totp_verify


logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Algorithm",
    "Base32Error",
    "HmacProvider",
    "HotpToken",
    "InvalidCounter",
    "InvalidDigits",
    "InvalidPeriod",
    "InvalidSecret",
    "InvalidTimestamp",
    "InvalidToken",
    "InvalidWindow",
    "OTPError",
    "TotpToken",
    "TruncationOutOfRange",
    "UnsupportedAlgorithm",
    "VerificationResult",
    "base32_decode",
    "base32_encode",
    "compute_hmac",
    "hotp_generate",
    "hotp_verify",
    "time_remaining",
    "time_step",
    "totp_generate",
    "totp_verify",
]
