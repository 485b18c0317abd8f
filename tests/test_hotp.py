"""Tests for HOTP generation and verification."""

import pytest

from notp import base32
from notp.algorithms import Algorithm
from notp.exceptions import (
    InvalidCounter,
    InvalidDigits,
    InvalidSecret,
    InvalidWindow,
    TruncationOutOfRange,
    UnsupportedAlgorithm,
)
from notp.hotp import counter_to_bytes, generate, truncate, verify


SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"  # Base32 encoded "12345678901234567890"

# RFC 4226 test vectors (Appendix D)
RFC4226_TEST_VECTORS = [
    # (counter, expected_code)
    (0, "755224"),
    (1, "287082"),
    (2, "359152"),
    (3, "969429"),
    (4, "338314"),
    (5, "254676"),
    (6, "287922"),
    (7, "162583"),
    (8, "399871"),
    (9, "520489"),
]

# RFC 4226 Section 5.4 example digest
EXAMPLE_DIGEST = bytes.fromhex("1f8698690e02ca16618550ef7f19da8e945b555a")


def test_rfc4226_test_vectors():
    """Test HOTP generation against RFC 4226 test vectors."""
    for counter, expected_code in RFC4226_TEST_VECTORS:
        code = generate(SECRET, counter, digits=6)
        assert code == expected_code, f"Counter {counter}: expected {expected_code}, got {code}"


def test_static_vector():
    """Test a fixed secret/counter pair with a 32-character secret."""
    assert generate("ABCDEFGHIJKLMNOPQRSTUVWXYZ234567", 58494555, 6, "SHA1") == "870526"


def test_different_secret_gives_different_code():
    """Test that changing the secret changes the code."""
    other = base32.encode(b"another shared secret")
    assert generate(other, 58494555, 6) != "870526"


def test_hotp_different_digits():
    """Test HOTP generation with every supported digit count."""
    for digits in range(6, 11):
        code = generate(SECRET, 0, digits=digits)
        assert len(code) == digits
        assert code.isdigit()

    # 6-digit code should be a suffix of 7-digit code
    assert generate(SECRET, 0, digits=7).endswith(generate(SECRET, 0, digits=6))


def test_leading_zeros_are_kept():
    """Test zero-padding using the RFC 6238 vector for T = 1111111109."""
    # 1111111109 // 30 == 37037036
    assert generate(SECRET, 37037036, digits=8) == "07081804"


def test_secret_is_case_insensitive():
    """Test that lower-case and padded secrets produce the same code."""
    assert generate(SECRET.lower(), 0) == "755224"
    assert generate(base32.encode(b"12345678901234567890"), 0) == "755224"


def test_hotp_counter_increment():
    """Test that different counters produce different codes."""
    code_0 = generate(SECRET, 0, digits=6)
    code_1 = generate(SECRET, 1, digits=6)
    code_2 = generate(SECRET, 2, digits=6)

    assert code_0 != code_1
    assert code_1 != code_2
    assert code_0 != code_2


def test_algorithm_separation(available_algorithms):
    """Test that different algorithms give different codes for the same input."""
    secrets = [SECRET, "JBSWY3DPEHPK3PXP", "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"]
    codes_by_secret = [
        {generate(secret, 42, algorithm=algorithm) for algorithm in available_algorithms}
        for secret in secrets
    ]
    assert any(len(codes) > 1 for codes in codes_by_secret)


def test_counter_to_bytes_is_big_endian():
    """Test the 8-byte big-endian counter encoding."""
    assert counter_to_bytes(0) == b"\x00" * 8
    assert counter_to_bytes(1) == b"\x00" * 7 + b"\x01"
    assert counter_to_bytes(0x0102030405060708) == bytes([1, 2, 3, 4, 5, 6, 7, 8])
    assert counter_to_bytes(2**64 - 1) == b"\xff" * 8


def test_truncate_rfc4226_example():
    """Test dynamic truncation with the RFC 4226 Section 5.4 example."""
    assert truncate(EXAMPLE_DIGEST) == 0x50EF7F19


def test_truncate_masks_top_bit():
    """Test that the most significant bit of the selected bytes is cleared."""
    digest = b"\xff\xff\xff\xff" + b"\x00" * 15 + b"\x00"
    assert truncate(digest) == 0x7FFFFFFF


def test_custom_hmac_provider():
    """Test that a custom provider's digest is used for truncation."""
    calls = []

    def provider(algorithm, key, message):
        calls.append((algorithm, key, message))
        return EXAMPLE_DIGEST

    assert generate(SECRET, 7, hmac_provider=provider) == "872921"
    assert calls == [(Algorithm.SHA1, b"12345678901234567890", counter_to_bytes(7))]


def test_short_digest_raises_truncation_error():
    """Test that a provider returning too few bytes is reported."""

    def provider(algorithm, key, message):
        return b"\x00" * 7 + b"\x0f"

    with pytest.raises(TruncationOutOfRange, match="out of range"):
        generate(SECRET, 0, hmac_provider=provider)

    with pytest.raises(TruncationOutOfRange):
        truncate(b"")


def test_empty_secret():
    """Test that an empty secret raises InvalidSecret."""
    with pytest.raises(InvalidSecret, match="must not be empty"):
        generate("", 0)


def test_secret_without_key_bytes():
    """Test that a secret with no decodable bytes raises InvalidSecret."""
    with pytest.raises(InvalidSecret):
        generate("====", 0)

    with pytest.raises(InvalidSecret):
        generate("A", 0)


def test_invalid_counter():
    """Test that negative or oversized counters raise InvalidCounter."""
    with pytest.raises(InvalidCounter, match="negative"):
        generate(SECRET, -1)

    with pytest.raises(InvalidCounter, match="64 bits"):
        generate(SECRET, 2**64)

    with pytest.raises(InvalidCounter):
        generate(SECRET, 1.5)


def test_invalid_digits():
    """Test that digit counts outside [6, 10] raise InvalidDigits."""
    for digits in (5, 11, 12, 0, -6):
        with pytest.raises(InvalidDigits):
            generate(SECRET, 0, digits=digits)


def test_unsupported_algorithm():
    """Test that an unknown algorithm raises UnsupportedAlgorithm."""
    with pytest.raises(UnsupportedAlgorithm, match="md5"):
        generate(SECRET, 0, algorithm="md5")


def test_verify_exact_counter():
    """Test that a code for the expected counter verifies with delta 0."""
    result = verify("755224", SECRET, 0)
    assert result.success is True
    assert result.delta == 0
    assert result


def test_verify_window_is_forward_only():
    """Test that verification looks ahead but never behind."""
    counter = 10
    for i in range(6):
        token = generate(SECRET, counter + i)
        result = verify(token, SECRET, counter, window=5)
        assert result.success
        assert result.delta == i

    behind = generate(SECRET, counter - 1)
    assert verify(behind, SECRET, counter, window=5) == (False, None)

    beyond = generate(SECRET, counter + 6)
    assert verify(beyond, SECRET, counter, window=5) == (False, None)


def test_verify_default_window_is_zero():
    """Test that only the exact counter matches by default."""
    assert not verify("287082", SECRET, 0)
    assert verify("287082", SECRET, 0, window=1).delta == 1


def test_verify_stops_at_max_counter():
    """Test that the window is clipped at the largest 64-bit counter."""
    last = 2**64 - 1
    token = generate(SECRET, last)
    assert verify(token, SECRET, last, window=3) == (True, 0)


def test_verify_malformed_tokens_do_not_raise():
    """Test that malformed tokens are treated as non-matches."""
    for token in ("", "75522", "7552240", "75522a", "７５５２２４", 755224, None):
        assert verify(token, SECRET, 0, window=2) == (False, None)


def test_verify_rejects_bad_configuration():
    """Test that malformed configuration raises during verification."""
    with pytest.raises(InvalidWindow):
        verify("755224", SECRET, 0, window=-1)

    with pytest.raises(UnsupportedAlgorithm):
        verify("755224", SECRET, 0, algorithm="md5")

    with pytest.raises(InvalidSecret):
        verify("755224", "", 0)

    with pytest.raises(InvalidDigits):
        verify("755224", SECRET, 0, digits=12)


def test_verify_reports_smallest_matching_offset():
    """Test that the first counter in the window wins when several match."""

    def provider(algorithm, key, message):
        return EXAMPLE_DIGEST

    assert verify("872921", SECRET, 10, window=3, hmac_provider=provider) == (True, 0)
