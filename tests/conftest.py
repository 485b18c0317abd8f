"""Shared fixtures for notp tests."""

import pytest

from notp.algorithms import Algorithm, compute_hmac
from notp.exceptions import UnsupportedAlgorithm


def backend_supports(algorithm: Algorithm) -> bool:
    try:
        compute_hmac(algorithm, b"key", b"message")
    except UnsupportedAlgorithm:
        return False
    return True


@pytest.fixture
def available_algorithms():
    """Algorithms the linked crypto backend can actually compute."""
    return [algorithm for algorithm in Algorithm if backend_supports(algorithm)]
