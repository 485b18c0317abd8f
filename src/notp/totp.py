"""RFC 6238 TOTP (Time-based One-Time Password) implementation.

Timestamps are Unix time in milliseconds; periods are in seconds.
"""

import logging
import math
import time
from typing import Optional, Union

from notp import hotp
from notp.algorithms import Algorithm, HmacProvider, compute_hmac
from notp.defaults import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_PERIOD,
    DEFAULT_TOTP_WINDOW,
    MAX_COUNTER,
)
from notp.exceptions import InvalidPeriod, InvalidTimestamp, InvalidToken
from notp.hotp import NO_MATCH, VerificationResult


logger = logging.getLogger(__name__)

Number = Union[int, float]


def now_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def time_step(timestamp: Number, period: Number = DEFAULT_PERIOD) -> int:
    """
    Compute the TOTP counter for a timestamp.

    Args:
        timestamp: Unix time in milliseconds.
        period: Time step length in seconds.

    Returns:
        ``floor(timestamp / 1000 / period)``.

    Raises:
        InvalidPeriod: If period is not positive.
        InvalidTimestamp: If timestamp is not a finite number.
    """
    validate_period(period)
    if (
        isinstance(timestamp, bool)
        or not isinstance(timestamp, (int, float))
        or (isinstance(timestamp, float) and not math.isfinite(timestamp))
    ):
        raise InvalidTimestamp(
            f"Timestamp must be a finite number of milliseconds, got {timestamp!r}"
        )
    if isinstance(timestamp, int) and isinstance(period, int):
        return timestamp // (1000 * period)
    return math.floor(timestamp / 1000 / period)


def time_remaining(timestamp: Optional[Number] = None, period: Number = DEFAULT_PERIOD) -> float:
    """Seconds left before the code for ``timestamp`` (default: now) rolls over."""
    validate_period(period)
    if timestamp is None:
        timestamp = now_ms()
    return period - ((timestamp / 1000) % period)


def generate(
    secret: str,
    period: Number = DEFAULT_PERIOD,
    digits: int = DEFAULT_DIGITS,
    timestamp: Optional[Number] = None,
    algorithm: Union[Algorithm, str] = DEFAULT_ALGORITHM,
    hmac_provider: Optional[HmacProvider] = None,
) -> str:
    """
    Generate a TOTP code.

    Args:
        secret: The shared secret, Base32 encoded.
        period: Time step length in seconds (default: 30).
        digits: Number of digits in the output code (default: 6).
        timestamp: Unix time in milliseconds (default: now).
        algorithm: HMAC hash function tag (default: SHA1).
        hmac_provider: Optional replacement for the HMAC computation.

    Returns:
        A zero-padded TOTP code string.

    Raises:
        InvalidPeriod: If period is not positive.
        InvalidCounter: If the timestamp is before the Unix epoch.
        InvalidSecret, InvalidDigits, UnsupportedAlgorithm: As for HOTP.
    """
    if timestamp is None:
        timestamp = now_ms()
    counter = time_step(timestamp, period)
    return hotp.generate(secret, counter, digits, algorithm, hmac_provider)


def verify(
    token: str,
    secret: str,
    period: Number = DEFAULT_PERIOD,
    digits: int = DEFAULT_DIGITS,
    window: int = DEFAULT_TOTP_WINDOW,
    timestamp: Optional[Number] = None,
    algorithm: Union[Algorithm, str] = DEFAULT_ALGORITHM,
    hmac_provider: Optional[HmacProvider] = None,
) -> VerificationResult:
    """
    Verify a TOTP code, tolerating ``window`` steps of clock drift either way.

    Time steps are tried in ascending order of delta, from ``-window`` to
    ``+window``; the first match wins. Steps before the epoch or beyond the
    64-bit counter range are skipped.

    Args:
        token: The code supplied by the user.
        secret: The shared secret, Base32 encoded.
        period: Time step length in seconds (default: 30).
        digits: Number of digits in the code (default: 6).
        window: Accepted drift in time steps (default: 1).
        timestamp: Unix time in milliseconds (default: now).
        algorithm: HMAC hash function tag (default: SHA1).
        hmac_provider: Optional replacement for the HMAC computation.

    Returns:
        ``VerificationResult(True, delta)`` with the signed step offset of the
        match, otherwise ``VerificationResult(False, None)``.

    Raises:
        InvalidPeriod, InvalidSecret, InvalidDigits, InvalidWindow,
        UnsupportedAlgorithm: If the configuration is malformed.
        InvalidTimestamp: If timestamp is not a finite number.
    """
    if timestamp is None:
        timestamp = now_ms()
    current = time_step(timestamp, period)
    key = hotp.decode_secret(secret)
    hotp.validate_digits(digits)
    hotp.validate_window(window)
    algorithm = Algorithm.parse(algorithm)
    provider = hmac_provider or compute_hmac

    try:
        hotp.check_token(token, digits)
    except InvalidToken as e:
        logger.debug("Rejecting malformed TOTP token: %s", e)
        return NO_MATCH

    for delta in range(-window, window + 1):
        step = current + delta
        if not 0 <= step <= MAX_COUNTER:
            continue
        if hotp.tokens_equal(token, hotp.generate_code(key, step, digits, algorithm, provider)):
            logger.debug("TOTP token matched at delta %d", delta)
            return VerificationResult(True, delta)

    logger.debug("TOTP token did not match within window %d", window)
    return NO_MATCH


def validate_period(period: Number) -> None:
    if isinstance(period, bool) or not isinstance(period, (int, float)) or not period > 0:
        raise InvalidPeriod(f"Period must be a positive number of seconds, got {period!r}")


def validate_timestamp(timestamp: Number) -> None:
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)) or timestamp < 0:
        raise InvalidTimestamp(
            f"Timestamp must be non-negative Unix milliseconds, got {timestamp!r}"
        )
