#!/usr/bin/env python3
"""
otp_core.py: Core library for TOTP / HOTP (RFC 4226 / RFC 6238).

Goals:
- Pure functions only: same (config, timestamp) in, same code out.
- No I/O or logging. The CLI and the Flask backend own the clock,
  the terminal and the network.
- The keyed-hash step is injectable (`digest=`), the default one is the
  stdlib hmac/hashlib pair.

Progress indicator for callers:
    A code is valid for the whole time step that contains `timestamp_ms`.
    `time_window(timestamp_ms, period)` returns `(elapsed, remaining)` with
        elapsed   = floor(timestamp_ms / 1000) mod period
        remaining = period - elapsed
    which is what a countdown bar needs. `compute_code` itself does not
    return it: recompute it from the same timestamp / period you passed in.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple, Union
import hashlib
import hmac
import math
import struct
import time

from . import base32
from .errors import InvalidNumericParameter, MissingSecret, UnsupportedAlgorithm

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # standard: 6 digits
DEFAULT_TIME_STEP = 30      # TOTP step (seconds)
MAX_COUNTER = 2 ** 64 - 1   # 8-byte unsigned moving factor


class Algorithm(str, Enum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @classmethod
    def from_name(cls, name) -> "Algorithm":
        """
        Resolve an algorithm name, case-insensitively.

        Accepts the otpauth spelling ("SHA1", "sha256") and the WebCrypto
        spelling ("SHA-1", "SHA-512") that browser-based apps emit.

        Raises:
            UnsupportedAlgorithm: for anything else (MD5, "", None, ...)
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise UnsupportedAlgorithm(name)
        key = name.strip().upper().replace("-", "")
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedAlgorithm(name) from None

    @property
    def hash_name(self) -> str:
        """hashlib name ("sha1", "sha256", "sha512")."""
        return self.value.lower()


DEFAULT_ALGORITHM = Algorithm.SHA1

# Keyed-hash capability: (algorithm, key, message) -> mac bytes
DigestFunc = Callable[[Algorithm, bytes, bytes], bytes]


@dataclass(frozen=True)
class OtpConfig:
    """
    Everything needed to compute a code, plus display-only metadata.

    Fields:
        secret: Base32 text (as typed / found in a URI) or raw key bytes
        algorithm: Algorithm member or a name accepted by Algorithm.from_name
        digits: code length, any positive integer (6–10 in practice)
        period: time step in seconds
        label: account name, display only
        issuer: provider name, display only
    """

    secret: Union[str, bytes]
    algorithm: Union[Algorithm, str] = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_TIME_STEP
    label: str = ""
    issuer: str = ""

    def key_bytes(self) -> bytes:
        """
        Raw HMAC key for this config.

        Raises:
            InvalidCharacter: secret text is not Base32
            MissingSecret: secret decodes to nothing
        """
        if isinstance(self.secret, (bytes, bytearray)):
            key = bytes(self.secret)
        else:
            key = base32.decode(self.secret or "")
        if not key:
            raise MissingSecret()
        return key

    def to_dict(self) -> dict:
        """JSON-friendly view; raw-byte secrets are re-encoded as Base32."""
        secret = self.secret
        if isinstance(secret, (bytes, bytearray)):
            secret = base32.encode(bytes(secret))
        return {
            "secret": secret,
            "algorithm": Algorithm.from_name(self.algorithm).value,
            "digits": self.digits,
            "period": self.period,
            "label": self.label,
            "issuer": self.issuer,
        }


# --- RFC helpers -----------------------------------------------------------
def hmac_digest(algorithm: Algorithm, key: bytes, message: bytes) -> bytes:
    """Default keyed-hash primitive (stdlib hmac)."""
    return hmac.new(key, message, getattr(hashlib, algorithm.hash_name)).digest()


def int_to_bytes(i: int) -> bytes:
    """
    Counter -> 8-byte big-endian message, as RFC 4226 requires.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'
    """
    return struct.pack(">Q", i)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation.

    - offset = last_byte & 0x0F
    - take 4 bytes from offset, clear the MSB of the first one (0x7F)
    - return the 31-bit unsigned integer

    Works for every supported digest (20/32/64 bytes): the largest offset is
    15, so offset + 3 always stays inside a 20-byte SHA-1 mac.
    """
    offset = hmac_digest[-1] & 0x0F
    code = (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )
    return code


def require_positive_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidNumericParameter(name, value)
    return value


def _check_timestamp(timestamp_ms) -> None:
    if isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, (int, float)):
        raise InvalidNumericParameter("timestamp_ms", timestamp_ms)
    if isinstance(timestamp_ms, float) and not math.isfinite(timestamp_ms):
        raise InvalidNumericParameter("timestamp_ms", timestamp_ms)
    if timestamp_ms < 0:
        raise InvalidNumericParameter("timestamp_ms", timestamp_ms)


def counter_at(timestamp_ms: Union[int, float], period: int = DEFAULT_TIME_STEP) -> int:
    """
    TOTP moving factor: floor(timestamp_ms / 1000 / period).

    Raises:
        InvalidNumericParameter: negative / non-finite timestamp, non-positive
            period, or a counter that does not fit in 8 bytes
    """
    period = require_positive_int("period", period)
    _check_timestamp(timestamp_ms)
    counter = int(timestamp_ms // 1000 // period)
    if counter > MAX_COUNTER:
        raise InvalidNumericParameter("timestamp_ms", timestamp_ms)
    return counter


def time_window(timestamp_ms: Union[int, float], period: int = DEFAULT_TIME_STEP) -> Tuple[int, int]:
    """
    (elapsed, remaining) seconds of the time step containing timestamp_ms.

    elapsed is in [0, period), remaining in (0, period].
    """
    period = require_positive_int("period", period)
    _check_timestamp(timestamp_ms)
    now = int(timestamp_ms // 1000)
    elapsed = now % period
    return elapsed, period - elapsed


def hotp(
    secret: Union[str, bytes],
    counter: int,
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[Algorithm, str] = DEFAULT_ALGORITHM,
    digest: DigestFunc = hmac_digest,
) -> str:
    """
    HOTP code per RFC 4226.

    Steps:
    1. Base32-decode secret -> raw key bytes (bytes are used as-is)
    2. Message = 8-byte counter (big-endian)
    3. HMAC(algorithm, key, message)
    4. Dynamic truncate -> dbc
    5. otp = dbc % 10^digits
    6. Zero-pad to exactly `digits` characters

    Raises:
        MissingSecret, InvalidCharacter, UnsupportedAlgorithm,
        InvalidNumericParameter (digits < 1 or negative counter)
    """
    algo = Algorithm.from_name(algorithm)
    digits = require_positive_int("digits", digits)
    if not 0 <= counter <= MAX_COUNTER:
        raise InvalidNumericParameter("counter", counter)
    key = OtpConfig(secret=secret).key_bytes()

    mac = digest(algo, key, int_to_bytes(counter))
    dbc = dynamic_truncate(mac)
    return str(dbc % (10 ** digits)).zfill(digits)


def compute_code(config: OtpConfig, timestamp_ms: Union[int, float], digest: DigestFunc = hmac_digest) -> str:
    """
    TOTP code per RFC 6238 for an explicit point in time.

    Arguments:
        config: OtpConfig (secret, algorithm, digits, period)
        timestamp_ms: Unix time in milliseconds, supplied by the caller
        digest: keyed-hash capability, defaults to stdlib HMAC

    Returns:
        str: decimal code, left-zero-padded to config.digits

    Raises:
        MissingSecret: secret decodes to an empty key
        InvalidCharacter: secret is not valid Base32
        UnsupportedAlgorithm: algorithm is not SHA1/SHA256/SHA512
        InvalidNumericParameter: digits/period < 1, negative timestamp
    """
    algo = Algorithm.from_name(config.algorithm)
    digits = require_positive_int("digits", config.digits)
    counter = counter_at(timestamp_ms, config.period)
    return hotp(config.key_bytes(), counter, digits, algo, digest)


def totp(config: OtpConfig, timestamp_ms: Optional[int] = None) -> Tuple[str, int]:
    """
    Current TOTP code and seconds left in its time step.

    Reads the wall clock when timestamp_ms is None; everything else is
    delegated to compute_code / time_window.
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    code = compute_code(config, timestamp_ms)
    _, remaining = time_window(timestamp_ms, config.period)
    return code, remaining
