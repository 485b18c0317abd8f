"""RFC 4226 HOTP (HMAC-based One-Time Password) implementation."""

import logging
from typing import NamedTuple, Optional, Union

from cryptography.hazmat.primitives import constant_time

from notp import base32
from notp.algorithms import Algorithm, HmacProvider, compute_hmac
from notp.defaults import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_HOTP_WINDOW,
    MAX_COUNTER,
    MAX_DIGITS,
    MIN_DIGITS,
)
from notp.exceptions import (
    InvalidCounter,
    InvalidDigits,
    InvalidSecret,
    InvalidToken,
    InvalidWindow,
    TruncationOutOfRange,
)


logger = logging.getLogger(__name__)


class VerificationResult(NamedTuple):
    """Outcome of a verification: ``delta`` is the matched offset in steps."""

    success: bool
    delta: Optional[int] = None

    def __bool__(self) -> bool:
        return self.success


NO_MATCH = VerificationResult(False, None)


def generate(
    secret: str,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[Algorithm, str] = DEFAULT_ALGORITHM,
    hmac_provider: Optional[HmacProvider] = None,
) -> str:
    """
    Generate an HOTP code using RFC 4226.

    Args:
        secret: The shared secret, Base32 encoded.
        counter: The moving counter value (incremented after each use).
        digits: Number of digits in the output code (default: 6).
        algorithm: HMAC hash function tag (default: SHA1).
        hmac_provider: Optional replacement for the HMAC computation.

    Returns:
        A zero-padded HOTP code string.

    Raises:
        InvalidSecret: If the secret is empty or decodes to no bytes.
        InvalidCounter: If the counter is negative or wider than 64 bits.
        InvalidDigits: If digits is outside [6, 10].
        UnsupportedAlgorithm: If the algorithm is not supported.
        TruncationOutOfRange: If the provider returned a too-short digest.
    """
    key = decode_secret(secret)
    validate_counter(counter)
    validate_digits(digits)
    algorithm = Algorithm.parse(algorithm)
    return generate_code(key, counter, digits, algorithm, hmac_provider or compute_hmac)


def verify(
    token: str,
    secret: str,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[Algorithm, str] = DEFAULT_ALGORITHM,
    window: int = DEFAULT_HOTP_WINDOW,
    hmac_provider: Optional[HmacProvider] = None,
) -> VerificationResult:
    """
    Verify an HOTP code against ``counter`` and the ``window`` counters after it.

    The search only moves forward: a code for a counter behind the expected
    one is a replay and never matches.

    Args:
        token: The code supplied by the user.
        secret: The shared secret, Base32 encoded.
        counter: The next expected counter value.
        digits: Number of digits in the code (default: 6).
        algorithm: HMAC hash function tag (default: SHA1).
        window: How many counters after ``counter`` are also accepted.
        hmac_provider: Optional replacement for the HMAC computation.

    Returns:
        ``VerificationResult(True, i)`` for the first matching ``counter + i``,
        otherwise ``VerificationResult(False, None)``.

    Raises:
        InvalidSecret, InvalidCounter, InvalidDigits, InvalidWindow,
        UnsupportedAlgorithm: If the configuration is malformed. A wrong or
        malformed token never raises.
    """
    key = decode_secret(secret)
    validate_counter(counter)
    validate_digits(digits)
    validate_window(window)
    algorithm = Algorithm.parse(algorithm)
    provider = hmac_provider or compute_hmac

    try:
        check_token(token, digits)
    except InvalidToken as e:
        logger.debug("Rejecting malformed HOTP token: %s", e)
        return NO_MATCH

    last = min(counter + window, MAX_COUNTER)
    for current in range(counter, last + 1):
        if tokens_equal(token, generate_code(key, current, digits, algorithm, provider)):
            delta = current - counter
            logger.debug("HOTP token matched at delta %d", delta)
            return VerificationResult(True, delta)

    logger.debug("HOTP token did not match within window %d", window)
    return NO_MATCH


def truncate(digest: bytes) -> int:
    """
    Apply RFC 4226 dynamic truncation to an HMAC digest.

    The low nibble of the last byte selects an offset; the four bytes at that
    offset are read big-endian with the top bit cleared, giving a 31-bit value.

    Raises:
        TruncationOutOfRange: If the digest has fewer than offset + 4 bytes.
    """
    if not digest:
        raise TruncationOutOfRange("Cannot truncate an empty digest")
    offset = digest[-1] & 0x0F
    if offset + 4 > len(digest):
        raise TruncationOutOfRange(
            f"Truncation offset {offset} out of range for a {len(digest)}-byte digest"
        )
    return (
        ((digest[offset] & 0x7F) << 24)
        | ((digest[offset + 1] & 0xFF) << 16)
        | ((digest[offset + 2] & 0xFF) << 8)
        | (digest[offset + 3] & 0xFF)
    )


def counter_to_bytes(counter: int) -> bytes:
    """Encode a counter as the 8-byte big-endian HMAC message."""
    return counter.to_bytes(8, byteorder="big")


def decode_secret(secret: str) -> bytes:
    """
    Decode an OTP secret from Base32.

    Raises:
        InvalidSecret: If the secret is empty or contains no Base32 data.
    """
    if not secret:
        raise InvalidSecret("Secret must not be empty")
    if not isinstance(secret, str):
        raise InvalidSecret(f"Secret must be a Base32 string, got {type(secret).__name__}")
    key = base32.decode(secret)
    if not key:
        raise InvalidSecret("Secret does not decode to any key bytes")
    return key


def validate_counter(counter: int) -> None:
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise InvalidCounter(f"Counter must be an integer, got {counter!r}")
    if counter < 0:
        raise InvalidCounter(f"Counter must not be negative, got {counter}")
    if counter > MAX_COUNTER:
        raise InvalidCounter(f"Counter {counter} does not fit in 64 bits")


def validate_digits(digits: int) -> None:
    if (
        isinstance(digits, bool)
        or not isinstance(digits, int)
        or not MIN_DIGITS <= digits <= MAX_DIGITS
    ):
        raise InvalidDigits(
            f"Digits must be an integer between {MIN_DIGITS} and {MAX_DIGITS}, got {digits!r}"
        )


def validate_window(window: int) -> None:
    if isinstance(window, bool) or not isinstance(window, int) or window < 0:
        raise InvalidWindow(f"Window must be a non-negative integer, got {window!r}")


def check_token(token: str, digits: int) -> None:
    """
    Check that a token is a string of exactly ``digits`` ASCII digits.

    Raises:
        InvalidToken: If it is not.
    """
    if not isinstance(token, str):
        raise InvalidToken(f"Token must be a string, got {type(token).__name__}")
    if len(token) != digits or not (token.isascii() and token.isdigit()):
        raise InvalidToken(f"Token must be {digits} decimal digits")


def tokens_equal(supplied: str, expected: str) -> bool:
    """Compare two codes in constant time."""
    return constant_time.bytes_eq(supplied.encode("ascii"), expected.encode("ascii"))


def generate_code(
    key: bytes,
    counter: int,
    digits: int,
    algorithm: Algorithm,
    provider: HmacProvider,
) -> str:
    digest = provider(algorithm, key, counter_to_bytes(counter))
    binary = truncate(bytes(digest))

    # Generate code: binary % 10^digits, zero-padded
    code = binary % (10**digits)
    return f"{code:0{digits}d}"
