"""RFC 4648 Base32 codec for OTP secrets."""

import base64
import binascii

from notp.exceptions import Base32Error


ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_INDEX = {char: value for value, char in enumerate(ALPHABET)}


def encode(data: bytes) -> str:
    """
    Encode bytes as padded Base32 text.

    Args:
        data: Bytes to encode.

    Returns:
        Upper-case Base32 string padded with ``=`` to a multiple of 8
        characters. Empty input gives an empty string.
    """
    return base64.b32encode(bytes(data)).decode("ascii")


def decode(text: str, strict: bool = False) -> bytes:
    """
    Decode Base32 text into bytes.

    The default mode is lenient, matching what users type into
    authenticator apps: trailing padding is removed, case is ignored,
    characters outside the alphabet are skipped and leftover bits that do
    not make a whole byte are dropped. It never fails.

    Args:
        text: Base32 encoded string.
        strict: Decode per RFC 4648 instead, rejecting invalid characters.
            Missing padding is still tolerated.

    Returns:
        Decoded bytes.

    Raises:
        Base32Error: In strict mode, if the text is not valid Base32.
    """
    if strict:
        return _decode_strict(text)

    cleaned = text.rstrip("=").upper()
    output = bytearray()
    buffer = 0
    bits = 0
    for char in cleaned:
        value = _INDEX.get(char)
        if value is None:
            continue
        buffer = ((buffer << 5) | value) & 0xFFF
        bits += 5
        if bits >= 8:
            bits -= 8
            output.append((buffer >> bits) & 0xFF)
    return bytes(output)


def _decode_strict(text: str) -> bytes:
    text = text.strip()
    text += "=" * (-len(text) % 8)
    try:
        return base64.b32decode(text, casefold=True)
    except binascii.Error as e:
        raise Base32Error(f"Invalid Base32 text: {e}") from e
