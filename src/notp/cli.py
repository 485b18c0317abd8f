"""Command-line interface for notp."""

import argparse
import logging
import sys
from typing import List, Optional

from notp import base32
from notp.algorithms import Algorithm
from notp.defaults import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_HOTP_WINDOW,
    DEFAULT_PERIOD,
    DEFAULT_TOTP_WINDOW,
    MAX_DIGITS,
    MIN_DIGITS,
)
from notp.exceptions import OTPError
from notp.token import HotpToken, TotpToken


logger = logging.getLogger(__name__)


def hotp_command(args: argparse.Namespace) -> int:
    """Handle the hotp command."""
    try:
        token = HotpToken(
            args.secret,
            counter=args.counter,
            digits=args.digits,
            algorithm=args.algorithm,
        )
        print(token.generate())
        return 0
    except OTPError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


def totp_command(args: argparse.Namespace) -> int:
    """Handle the totp command."""
    try:
        token = TotpToken(
            args.secret,
            period=args.period,
            digits=args.digits,
            algorithm=args.algorithm,
            timestamp=args.timestamp,
        )
        print(token.generate())
        print(f"  Valid for {token.time_remaining():.0f}s", file=sys.stderr)
        return 0
    except OTPError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1


def verify_hotp_command(args: argparse.Namespace) -> int:
    """Handle the verify-hotp command."""
    try:
        token = HotpToken(
            args.secret,
            counter=args.counter,
            digits=args.digits,
            algorithm=args.algorithm,
        )
        result = token.verify(args.token, window=args.window)
    except OTPError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    return _report(result.success, result.delta)


def verify_totp_command(args: argparse.Namespace) -> int:
    """Handle the verify-totp command."""
    try:
        token = TotpToken(
            args.secret,
            period=args.period,
            digits=args.digits,
            algorithm=args.algorithm,
            timestamp=args.timestamp,
        )
        result = token.verify(args.token, window=args.window)
    except OTPError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    return _report(result.success, result.delta)


def encode_command(args: argparse.Namespace) -> int:
    """Handle the encode command."""
    print(base32.encode(args.text.encode("utf-8")))
    return 0


def decode_command(args: argparse.Namespace) -> int:
    """Handle the decode command."""
    try:
        data = base32.decode(args.secret, strict=args.strict)
    except OTPError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    print(data.hex())
    return 0


def _report(success: bool, delta: Optional[int]) -> int:
    if success:
        print(f"✓ Valid (delta: {delta:+d})")
        return 0
    print("✗ Invalid code")
    return 1


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--digits",
        "-d",
        type=int,
        default=DEFAULT_DIGITS,
        choices=range(MIN_DIGITS, MAX_DIGITS + 1),
        metavar="DIGITS",
        help=f"Number of digits in the code (default: {DEFAULT_DIGITS})",
    )
    parser.add_argument(
        "--algorithm",
        "-a",
        default=DEFAULT_ALGORITHM,
        type=str.upper,
        choices=[algorithm.value for algorithm in Algorithm],
        help=f"HMAC hash function (default: {DEFAULT_ALGORITHM})",
    )


def _add_time_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--period",
        "-p",
        type=int,
        default=DEFAULT_PERIOD,
        help=f"Time step in seconds (default: {DEFAULT_PERIOD})",
    )
    parser.add_argument(
        "--timestamp",
        "-t",
        type=int,
        default=None,
        help="Unix time in milliseconds (default: now)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notp",
        description="HOTP/TOTP one-time password generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # HOTP command
    hotp_parser = subparsers.add_parser(
        "hotp",
        help="Generate a counter-based code",
    )
    hotp_parser.add_argument("secret", help="Base32 secret")
    hotp_parser.add_argument(
        "--counter",
        "-c",
        type=int,
        required=True,
        help="Counter value",
    )
    _add_common_options(hotp_parser)
    hotp_parser.set_defaults(handler=hotp_command)

    # TOTP command
    totp_parser = subparsers.add_parser(
        "totp",
        aliases=["now"],
        help="Generate a time-based code",
    )
    totp_parser.add_argument("secret", help="Base32 secret")
    _add_common_options(totp_parser)
    _add_time_options(totp_parser)
    totp_parser.set_defaults(handler=totp_command)

    # Verify commands
    verify_hotp_parser = subparsers.add_parser(
        "verify-hotp",
        help="Verify a counter-based code",
    )
    verify_hotp_parser.add_argument("token", help="Code to verify")
    verify_hotp_parser.add_argument("secret", help="Base32 secret")
    verify_hotp_parser.add_argument(
        "--counter",
        "-c",
        type=int,
        required=True,
        help="Next expected counter value",
    )
    verify_hotp_parser.add_argument(
        "--window",
        "-w",
        type=int,
        default=DEFAULT_HOTP_WINDOW,
        help=f"Counters to look ahead (default: {DEFAULT_HOTP_WINDOW})",
    )
    _add_common_options(verify_hotp_parser)
    verify_hotp_parser.set_defaults(handler=verify_hotp_command)

    verify_totp_parser = subparsers.add_parser(
        "verify-totp",
        aliases=["verify"],
        help="Verify a time-based code",
    )
    verify_totp_parser.add_argument("token", help="Code to verify")
    verify_totp_parser.add_argument("secret", help="Base32 secret")
    verify_totp_parser.add_argument(
        "--window",
        "-w",
        type=int,
        default=DEFAULT_TOTP_WINDOW,
        help=f"Accepted drift in time steps (default: {DEFAULT_TOTP_WINDOW})",
    )
    _add_common_options(verify_totp_parser)
    _add_time_options(verify_totp_parser)
    verify_totp_parser.set_defaults(handler=verify_totp_command)

    # Base32 commands
    encode_parser = subparsers.add_parser(
        "encode",
        help="Base32-encode UTF-8 text",
    )
    encode_parser.add_argument("text", help="Text to encode")
    encode_parser.set_defaults(handler=encode_command)

    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode a Base32 secret and print it as hex",
    )
    decode_parser.add_argument("secret", help="Base32 secret")
    decode_parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject characters outside the Base32 alphabet",
    )
    decode_parser.set_defaults(handler=decode_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )

    if not args.command:
        parser.print_help()
        return 1

    logger.debug("Running %s command", args.command)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
