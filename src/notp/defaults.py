"""Default OTP parameters shared by the engines, the token wrappers and the CLI."""

DEFAULT_ALGORITHM = "SHA1"
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
DEFAULT_HOTP_WINDOW = 0
DEFAULT_TOTP_WINDOW = 1

MIN_DIGITS = 6
MAX_DIGITS = 10

# Counters are encoded as 8 unsigned big-endian bytes.
MAX_COUNTER = 2**64 - 1
