"""
otp_uri.py: otpauth:// URI parsing and building.

    otpauth://totp/{issuer}:{account}?secret=...&issuer=...&algorithm=...&digits=...&period=...

parse() turns such a URI into an OtpConfig, build() turns an OtpConfig
back into the canonical URI (what a QR code renderer consumes).
Only the totp type is supported.
"""

from typing import Optional
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlsplit

from . import base32
from .errors import InvalidNumericParameter, MalformedUri, MissingSecret, UnsupportedType
from .otp_core import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_TIME_STEP,
    Algorithm,
    OtpConfig,
    require_positive_int,
)

SCHEME = "otpauth"
OTP_TYPE = "totp"
DEFAULT_ISSUER = "2FA"
DEFAULT_ACCOUNT = "Account"

# Same set encodeURIComponent leaves alone
_COMPONENT_SAFE = "-_.!~*'()"


def _encode_component(text: str) -> str:
    return quote(text, safe=_COMPONENT_SAFE)


def _parse_positive_int(name: str, raw: Optional[str], default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise InvalidNumericParameter(name, raw) from None
    if value < 1:
        raise InvalidNumericParameter(name, raw)
    return value


def parse(uri_text: str) -> OtpConfig:
    """
    Parse an otpauth://totp/ URI.

    - path "Issuer:account" -> issuer + label, "account" -> label only
    - query issuer (when non-empty) overrides the path issuer
    - algorithm defaults to SHA1, digits to 6, period to 30 (absent or empty)

    Raises:
        MalformedUri: not an otpauth URI / unparsable structure
        UnsupportedType: type other than totp (e.g. hotp)
        MissingSecret: no (or empty) secret parameter
        UnsupportedAlgorithm: algorithm other than SHA1/SHA256/SHA512
        InvalidNumericParameter: digits / period not a positive integer
    """
    if not isinstance(uri_text, str):
        raise MalformedUri(f"expected a string, got {type(uri_text).__name__}")
    try:
        parts = urlsplit(uri_text.strip())
        otp_type = parts.netloc
        query = parse_qsl(parts.query, keep_blank_values=True)
    except ValueError as e:
        raise MalformedUri(str(e)) from e

    if parts.scheme.lower() != SCHEME:
        raise MalformedUri(f"scheme must be {SCHEME}://, got {parts.scheme + '://' if parts.scheme else 'none'}")
    if otp_type.lower() != OTP_TYPE:
        raise UnsupportedType(otp_type)

    # first occurrence wins, like URLSearchParams.get
    params = {}
    for key, value in query:
        params.setdefault(key, value)
    issuer = params.get("issuer", "")

    path = parts.path[1:] if parts.path.startswith("/") else parts.path
    try:
        label_raw = unquote(path, errors="strict")
    except UnicodeDecodeError as e:
        raise MalformedUri(str(e)) from e
    if issuer and label_raw.startswith(issuer + ":"):
        # issuer may itself contain ':'
        path_issuer, account = issuer, label_raw[len(issuer) + 1:]
    else:
        path_issuer, sep, account = label_raw.partition(":")
        if not sep:
            path_issuer, account = "", label_raw

    secret = params.get("secret", "")
    if not secret:
        raise MissingSecret("Missing secret parameter in otpauth URI")

    algorithm = (params.get("algorithm") or "").strip()
    return OtpConfig(
        secret=secret,
        algorithm=Algorithm.from_name(algorithm) if algorithm else DEFAULT_ALGORITHM,
        digits=_parse_positive_int("digits", params.get("digits"), DEFAULT_DIGITS),
        period=_parse_positive_int("period", params.get("period"), DEFAULT_TIME_STEP),
        label=account,
        issuer=issuer or path_issuer,
    )


def build(config: OtpConfig) -> str:
    """
    Build the canonical otpauth://totp/ URI for a config.

    Label / issuer reconciliation:
    - both are trimmed
    - issuer set, account empty -> account = "Account"
    - both empty -> issuer = "2FA", account = "Account"
    so the path never ends up with a dangling ':' or empty.

    Query order: secret, issuer (if any), algorithm, digits, period.

    Raises:
        MissingSecret: secret is empty after normalization
        UnsupportedAlgorithm: algorithm is not supported
        InvalidNumericParameter: digits / period not a positive integer
    """
    secret = config.secret
    if isinstance(secret, (bytes, bytearray)):
        secret = base32.encode(bytes(secret))
    secret = base32.normalize(secret or "")
    if not secret:
        raise MissingSecret()

    issuer = (config.issuer or "").strip()
    account = (config.label or "").strip()
    if issuer and not account:
        account = DEFAULT_ACCOUNT
    if not issuer and not account:
        issuer, account = DEFAULT_ISSUER, DEFAULT_ACCOUNT

    if issuer:
        path = f"{_encode_component(issuer)}:{_encode_component(account)}"
    else:
        path = _encode_component(account)

    query = [("secret", secret)]
    if issuer:
        query.append(("issuer", issuer))
    query += [
        ("algorithm", Algorithm.from_name(config.algorithm).value),
        ("digits", str(require_positive_int("digits", config.digits))),
        ("period", str(require_positive_int("period", config.period))),
    ]
    return f"{SCHEME}://{OTP_TYPE}/{path}?{urlencode(query, quote_via=quote, safe=_COMPONENT_SAFE)}"


def parse_input(text: str, defaults: Optional[dict] = None) -> OtpConfig:
    """
    Accept whatever a user pastes: a full otpauth URI or a bare Base32 secret.

    For a bare secret the remaining fields come from `defaults`
    (keys: algorithm, digits, period, label, issuer).

    Raises:
        MissingSecret: empty input
        (plus everything parse() raises for URIs)
    """
    d = {
        "algorithm": DEFAULT_ALGORITHM,
        "digits": DEFAULT_DIGITS,
        "period": DEFAULT_TIME_STEP,
        "label": "",
        "issuer": "",
    }
    d.update({k: v for k, v in (defaults or {}).items() if v is not None})

    t = (text or "").strip()
    if t.lower().startswith(SCHEME + "://"):
        return parse(t)
    if not t:
        raise MissingSecret()
    return OtpConfig(
        secret=t,
        algorithm=Algorithm.from_name(d["algorithm"]),
        digits=d["digits"],
        period=d["period"],
        label=d["label"],
        issuer=d["issuer"],
    )
