"""
errors.py: Error taxonomy for the OTP core.

Every error is local, synchronous and deterministic: it means the caller
handed in invalid data, so none of them is worth retrying. They all derive
from ValueError, so callers that only care about "bad input" can catch that.
"""


class OtpError(ValueError):
    """Base class for all OTP core errors."""


class InvalidCharacter(OtpError):
    """A symbol outside the RFC 4648 Base32 alphabet was found."""

    def __init__(self, char: str, position: int = -1):
        self.char = char
        self.position = position
        super().__init__(f"Invalid Base32 character: {char!r}")


class MissingSecret(OtpError):
    """The secret is absent or empty after decoding / normalization."""

    def __init__(self, message: str = "Missing secret"):
        super().__init__(message)


class UnsupportedAlgorithm(OtpError):
    """Hash name other than SHA1 / SHA256 / SHA512."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unsupported algorithm: {name!r}")


class UnsupportedType(OtpError):
    """otpauth URI type other than totp (e.g. hotp)."""

    def __init__(self, otp_type: str):
        self.otp_type = otp_type
        super().__init__(f"Unsupported otpauth type: {otp_type!r} (only totp is supported)")


class MalformedUri(OtpError):
    """URI that is not otpauth:// or cannot be parsed at all."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Malformed otpauth URI: {detail}")


class InvalidNumericParameter(OtpError):
    """digits / period (or a timestamp) is not a positive integer."""

    def __init__(self, name: str, value):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for {name}: {value!r} (expected a positive integer)")
