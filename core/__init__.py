"""
core package
============

TOTP engine (RFC 4226 & RFC 6238) plus the otpauth:// URI format used to
move secrets between authenticator apps.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC(key=secret, msg=counter)) mod 10^digits

- TOTP (Time-based One-Time Password):
  HOTP with counter = floor(unix_ms / 1000 / period)
  → default period = 30 s, 6 digits, SHA-1 (SHA-256 / SHA-512 supported).

- Dynamic Truncation:
  offset = last byte & 0x0F, take 4 bytes from offset, clear the top bit.

──────────────────────────────────────────────
Modules
──────────────────────────────────────────────
- base32   : lenient RFC 4648 decoder / encoder for secrets
- otp_core : OtpConfig, Algorithm, hotp / compute_code / time_window
- otp_uri  : parse / build / parse_input for otpauth://totp/ URIs
- errors   : OtpError and its subclasses
- otp_cli  : command-line front end (`otp-cli`)

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from core import parse, compute_code, time_window, build
>>> cfg = parse("otpauth://totp/ACME:alice?secret=JBSWY3DPEHPK3PXP&issuer=ACME")
>>> code = compute_code(cfg, 59_000)        # 6-digit string
>>> time_window(59_000, cfg.period)
(29, 1)
>>> build(cfg)
'otpauth://totp/ACME:alice?secret=JBSWY3DPEHPK3PXP&issuer=ACME&algorithm=SHA1&digits=6&period=30'
"""
from .errors import (
    OtpError,
    InvalidCharacter,
    MissingSecret,
    UnsupportedAlgorithm,
    UnsupportedType,
    MalformedUri,
    InvalidNumericParameter,
)
from .otp_core import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_TIME_STEP,
    Algorithm,
    OtpConfig,
    compute_code,
    counter_at,
    dynamic_truncate,
    hmac_digest,
    hotp,
    int_to_bytes,
    time_window,
    totp,
)
from .otp_uri import build, parse, parse_input

__all__ = [
    "OtpError",
    "InvalidCharacter",
    "MissingSecret",
    "UnsupportedAlgorithm",
    "UnsupportedType",
    "MalformedUri",
    "InvalidNumericParameter",
    "DEFAULT_ALGORITHM",
    "DEFAULT_DIGITS",
    "DEFAULT_TIME_STEP",
    "Algorithm",
    "OtpConfig",
    "compute_code",
    "counter_at",
    "dynamic_truncate",
    "hmac_digest",
    "hotp",
    "int_to_bytes",
    "time_window",
    "totp",
    "build",
    "parse",
    "parse_input",
]
