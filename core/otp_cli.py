#!/usr/bin/env python3
"""
otp_cli.py: CLI wrapper around the OTP core.

Subcommands:
- code  : print the TOTP code for a secret or otpauth URI (once)
- watch : show the TOTP code in real time, with a countdown
- uri   : build an otpauth:// URI (for a QR code generator)
- parse : show the fields of an otpauth:// URI

INPUT is either a Base32 secret ("JBSW Y3DP EHPK 3PXP") or a full
otpauth://totp/... URI; --algorithm/--digits/--period only apply to a
bare secret, a URI carries its own.
"""

import argparse
import logging
import sys
import time

from .errors import OtpError
from .otp_core import DEFAULT_ALGORITHM, DEFAULT_DIGITS, DEFAULT_TIME_STEP, OtpConfig, compute_code, time_window
from .otp_uri import build, parse, parse_input

logger = logging.getLogger(__name__)


def _config_from_args(args) -> OtpConfig:
    return parse_input(args.input, {
        "algorithm": args.algorithm,
        "digits": args.digits,
        "period": args.period,
    })


def _now_ms() -> int:
    return int(time.time() * 1000)


# --- CLI command handlers ---
def cmd_code(args):
    cfg = _config_from_args(args)
    timestamp_ms = int(args.at * 1000) if args.at is not None else _now_ms()
    logger.debug("secret=%s... algorithm=%s digits=%s period=%s t=%sms",
                 str(cfg.secret)[:4], cfg.algorithm, cfg.digits, cfg.period, timestamp_ms)
    code = compute_code(cfg, timestamp_ms)
    _, remaining = time_window(timestamp_ms, cfg.period)
    print(f"{code}  (valid ~{remaining:2d}s)")


def cmd_watch(args):
    cfg = _config_from_args(args)
    print(f"Press Ctrl+C to quit. Generating {cfg.digits}-digit TOTP every {cfg.period}s...\n")
    last_code = None
    try:
        while True:
            now = _now_ms()
            code = compute_code(cfg, now)
            _, remaining = time_window(now, cfg.period)
            if code != last_code:
                print(f"TOTP ({cfg.digits}d): {code}  (valid ~{remaining:2d}s)")
                last_code = code
            else:
                print(f".. {remaining:2d}s left", end='\r', flush=True)
            time.sleep(args.interval)
    except KeyboardInterrupt:
        print("\nBye.")


def cmd_uri(args):
    cfg = OtpConfig(
        secret=args.secret,
        algorithm=args.algorithm,
        digits=args.digits,
        period=args.period,
        label=args.label,
        issuer=args.issuer,
    )
    print(build(cfg))


def cmd_parse(args):
    cfg = parse(args.uri)
    for key, value in cfg.to_dict().items():
        print(f"{key:<10} {value}")


def cmd_help(args):
    print("'otp-cli -h' for help.")


# --- Argparse builder ---
def _add_code_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("input", help="Base32 secret or otpauth://totp/ URI")
    p.add_argument("--algorithm", default=None, help="SHA1 | SHA256 | SHA512 (bare secret only)")
    p.add_argument("--digits", type=int, default=None, help="Number of OTP digits (bare secret only)")
    p.add_argument("--period", type=int, default=None, help="TOTP time step in seconds (bare secret only)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="otp-cli", description="TOTP code generator and otpauth URI tool")
    p.add_argument("--verbose", action="store_true", help="Verbose (debug) logging")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # code
    pc = sub.add_parser("code", help="Print the current TOTP code once")
    _add_code_options(pc)
    pc.add_argument("--at", type=float, default=None, help="Unix time in seconds instead of now")
    pc.set_defaults(func=cmd_code)

    # watch
    pw = sub.add_parser("watch", help="Show TOTP code in real time")
    _add_code_options(pw)
    pw.add_argument("--interval", type=float, default=1.0, help="Refresh interval (seconds)")
    pw.set_defaults(func=cmd_watch)

    # uri
    pu = sub.add_parser("uri", help="Build an otpauth:// URI")
    pu.add_argument("--secret", required=True, help="Base32 secret")
    pu.add_argument("--label", default="", help="Account label")
    pu.add_argument("--issuer", default="", help="Issuer label")
    pu.add_argument("--algorithm", default=DEFAULT_ALGORITHM.value)
    pu.add_argument("--digits", type=int, default=DEFAULT_DIGITS)
    pu.add_argument("--period", type=int, default=DEFAULT_TIME_STEP)
    pu.set_defaults(func=cmd_uri)

    # parse
    pp = sub.add_parser("parse", help="Show the fields of an otpauth:// URI")
    pp.add_argument("uri")
    pp.set_defaults(func=cmd_parse)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )
    try:
        args.func(args)
    except OtpError as e:
        logger.debug("command %s failed: %r", args.cmd, e)
        print(f"[!] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
