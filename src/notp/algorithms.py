"""HMAC algorithm selection and the default HMAC provider."""

from enum import Enum
from typing import Callable, Union

from cryptography.exceptions import UnsupportedAlgorithm as BackendUnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac

from notp.exceptions import UnsupportedAlgorithm


class Algorithm(str, Enum):
    """Hash functions an OTP may be computed with."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"
    SM3 = "SM3"

    @classmethod
    def parse(cls, value: Union["Algorithm", str]) -> "Algorithm":
        """
        Resolve an algorithm tag.

        Args:
            value: An ``Algorithm`` member or a case-insensitive tag such as
                ``"sha256"``.

        Returns:
            The matching ``Algorithm``.

        Raises:
            UnsupportedAlgorithm: If the tag is not one of the known algorithms.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise UnsupportedAlgorithm(f"Unsupported algorithm: {value!r}")

    @property
    def digest_size(self) -> int:
        """Length in bytes of an HMAC digest for this algorithm."""
        return _DIGEST_SIZES[self]

    def hash(self) -> hashes.HashAlgorithm:
        """Return a fresh ``cryptography`` hash instance for this algorithm."""
        return _HASHES[self]()


_DIGEST_SIZES = {
    Algorithm.SHA1: 20,
    Algorithm.SHA256: 32,
    Algorithm.SHA512: 64,
    Algorithm.SM3: 32,
}

_HASHES = {
    Algorithm.SHA1: hashes.SHA1,
    Algorithm.SHA256: hashes.SHA256,
    Algorithm.SHA512: hashes.SHA512,
    Algorithm.SM3: hashes.SM3,
}


# (algorithm, key, message) -> digest
HmacProvider = Callable[[Algorithm, bytes, bytes], bytes]


def compute_hmac(algorithm: Algorithm, key: bytes, message: bytes) -> bytes:
    """
    Compute HMAC(key, message) with the given algorithm.

    Args:
        algorithm: Hash function to use.
        key: Raw secret bytes.
        message: Message bytes (the encoded counter for OTPs).

    Returns:
        The HMAC digest, ``algorithm.digest_size`` bytes long.

    Raises:
        UnsupportedAlgorithm: If the algorithm is unknown or the linked crypto
            backend does not implement it.
    """
    algorithm = Algorithm.parse(algorithm)
    try:
        mac = hmac.HMAC(key, algorithm.hash())
    except BackendUnsupportedAlgorithm as e:
        raise UnsupportedAlgorithm(
            f"HMAC-{algorithm.value} is not available in this crypto backend"
        ) from e
    mac.update(message)
    return mac.finalize()
