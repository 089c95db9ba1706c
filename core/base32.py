"""
base32.py: RFC 4648 Base32 codec used for OTP shared secrets.

The decoder is deliberately lenient, like most authenticator apps:
- whitespace anywhere is ignored, lowercase is accepted
- trailing '=' padding is optional
- leftover bits (< 8) at the end are dropped instead of being validated
"""

import re

from .errors import InvalidCharacter

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_VALUES = {c: i for i, c in enumerate(ALPHABET)}
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Canonical secret text: whitespace removed, uppercased, padding stripped.

    No alphabet check here: the result is what gets written into an
    otpauth URI, validation happens when the secret is decoded.
    """
    return _WHITESPACE.sub("", text).upper().rstrip("=")


def decode(text: str) -> bytes:
    """
    Decode a Base32 string into raw bytes.

    Steps:
    1. Normalize (strip whitespace, uppercase, strip trailing '=')
    2. Empty input -> b"" (callers needing a key must check themselves)
    3. Accumulate 5 bits per symbol, emit one byte per 8 bits (MSB first)
    4. Drop any incomplete trailing bits

    Raises:
        InvalidCharacter: first symbol (left to right) outside A-Z2-7
    """
    clean = normalize(text)
    out = bytearray()
    buffer = 0
    bits = 0
    for pos, char in enumerate(clean):
        value = _VALUES.get(char)
        if value is None:
            raise InvalidCharacter(char, pos)
        buffer = ((buffer << 5) | value) & 0xFFF
        bits += 5
        if bits >= 8:
            bits -= 8
            out.append((buffer >> bits) & 0xFF)
    return bytes(out)


def encode(data: bytes, padding: bool = False) -> str:
    """
    Encode raw bytes as Base32 (uppercase).

    Arguments:
        data: bytes to encode
        padding: append '=' up to a multiple of 8 symbols (RFC 4648 form)
    """
    out = []
    buffer = 0
    bits = 0
    for byte in data:
        buffer = ((buffer << 8) | byte) & 0xFFFF
        bits += 8
        while bits >= 5:
            bits -= 5
            out.append(ALPHABET[(buffer >> bits) & 0x1F])
    if bits:
        out.append(ALPHABET[(buffer << (5 - bits)) & 0x1F])
    if padding and len(out) % 8:
        out.extend("=" * (8 - len(out) % 8))
    return "".join(out)
