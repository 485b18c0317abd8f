"""Stateful HOTP and TOTP tokens.

A token holds the parameters of one OTP credential and validates them on
construction and on every assignment. Tokens are not thread-safe: keep one
instance per credential or serialize access externally.
"""

from typing import Any, Dict, Optional, Union

from notp import hotp, totp
from notp.algorithms import Algorithm
from notp.defaults import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_HOTP_WINDOW,
    DEFAULT_PERIOD,
    DEFAULT_TOTP_WINDOW,
)
from notp.exceptions import InvalidCounter
from notp.hotp import VerificationResult


class _Token:
    """Secret, digits and algorithm shared by both token kinds."""

    def __init__(
        self,
        secret: str,
        digits: int = DEFAULT_DIGITS,
        algorithm: Union[Algorithm, str] = DEFAULT_ALGORITHM,
    ):
        self.secret = secret
        self.digits = digits
        self.algorithm = algorithm

    @property
    def secret(self) -> str:
        return self._secret

    @secret.setter
    def secret(self, value: str) -> None:
        hotp.decode_secret(value)
        self._secret = value

    @property
    def digits(self) -> int:
        return self._digits

    @digits.setter
    def digits(self, value: int) -> None:
        hotp.validate_digits(value)
        self._digits = value

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @algorithm.setter
    def algorithm(self, value: Union[Algorithm, str]) -> None:
        self._algorithm = Algorithm.parse(value)


class HotpToken(_Token):
    """
    Counter-based token.

    The counter only moves when :meth:`advance` is called; generating or
    verifying a code never changes it.
    """

    def __init__(
        self,
        secret: str,
        counter: int = 0,
        digits: int = DEFAULT_DIGITS,
        algorithm: Union[Algorithm, str] = DEFAULT_ALGORITHM,
    ):
        """
        Initialize an HOTP token.

        Args:
            secret: The shared secret, Base32 encoded.
            counter: Current counter value.
            digits: Number of digits in the code.
            algorithm: HMAC hash function tag.

        Raises:
            InvalidSecret, InvalidCounter, InvalidDigits, UnsupportedAlgorithm:
                If a parameter is invalid.
        """
        super().__init__(secret, digits, algorithm)
        self.counter = counter

    @property
    def counter(self) -> int:
        return self._counter

    @counter.setter
    def counter(self, value: int) -> None:
        hotp.validate_counter(value)
        self._counter = value

    def generate(self) -> str:
        """Return the code for the current counter."""
        return hotp.generate(self.secret, self.counter, self.digits, self.algorithm)

    def verify(self, token: str, window: int = DEFAULT_HOTP_WINDOW) -> VerificationResult:
        """Verify a code against the current counter and ``window`` counters after it."""
        return hotp.verify(
            token,
            self.secret,
            self.counter,
            digits=self.digits,
            algorithm=self.algorithm,
            window=window,
        )

    def advance(self, steps: int = 1) -> int:
        """
        Move the counter forward.

        Args:
            steps: How far to move (default: 1). Callers that accepted a code
                at ``delta`` usually advance by ``delta + 1``.

        Returns:
            The new counter value.

        Raises:
            InvalidCounter: If steps is negative or the counter would overflow.
        """
        if isinstance(steps, bool) or not isinstance(steps, int) or steps < 0:
            raise InvalidCounter(f"Steps must be a non-negative integer, got {steps!r}")
        self.counter = self.counter + steps
        return self.counter

    def configuration(self) -> Dict[str, Any]:
        return {
            "secret": self.secret,
            "counter": self.counter,
            "digits": self.digits,
            "algorithm": self.algorithm.value,
        }

    def __repr__(self) -> str:
        return (
            f"HotpToken(counter={self.counter}, digits={self.digits}, "
            f"algorithm={self.algorithm.value})"
        )


class TotpToken(_Token):
    """
    Time-based token.

    ``timestamp`` pins the token to a fixed instant in Unix milliseconds;
    leave it as None to follow the system clock.
    """

    def __init__(
        self,
        secret: str,
        period: int = DEFAULT_PERIOD,
        digits: int = DEFAULT_DIGITS,
        algorithm: Union[Algorithm, str] = DEFAULT_ALGORITHM,
        timestamp: Optional[int] = None,
    ):
        super().__init__(secret, digits, algorithm)
        self.period = period
        self.timestamp = timestamp

    @property
    def period(self) -> int:
        return self._period

    @period.setter
    def period(self, value: int) -> None:
        totp.validate_period(value)
        self._period = value

    @property
    def timestamp(self) -> Optional[int]:
        return self._timestamp

    @timestamp.setter
    def timestamp(self, value: Optional[int]) -> None:
        if value is not None:
            totp.validate_timestamp(value)
        self._timestamp = value

    def _now(self) -> int:
        return totp.now_ms() if self.timestamp is None else self.timestamp

    def time_step(self) -> int:
        return totp.time_step(self._now(), self.period)

    def time_remaining(self) -> float:
        """Seconds until the current code expires."""
        return totp.time_remaining(self._now(), self.period)

    def generate(self) -> str:
        """Return the code for the token's current time."""
        return totp.generate(
            self.secret,
            period=self.period,
            digits=self.digits,
            timestamp=self._now(),
            algorithm=self.algorithm,
        )

    def verify(self, token: str, window: int = DEFAULT_TOTP_WINDOW) -> VerificationResult:
        """Verify a code allowing ``window`` time steps of drift in either direction."""
        return totp.verify(
            token,
            self.secret,
            period=self.period,
            digits=self.digits,
            window=window,
            timestamp=self._now(),
            algorithm=self.algorithm,
        )

    def configuration(self) -> Dict[str, Any]:
        return {
            "secret": self.secret,
            "period": self.period,
            "digits": self.digits,
            "algorithm": self.algorithm.value,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:
        return (
            f"TotpToken(period={self.period}, digits={self.digits}, "
            f"algorithm={self.algorithm.value}, timestamp={self.timestamp})"
        )
