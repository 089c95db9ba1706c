"""
OTP BACKEND API ROUTES - FLASK BLUEPRINT

JSON endpoints around the OTP core. Nothing is stored server side: every
request carries the secret / URI it works on.

USAGE:
- Server runs at: http://localhost:5000
- Call with curl, Postman, or a browser front end

EXAMPLES:
curl -X POST http://localhost:5000/code -H "Content-Type: application/json" -d '{"input": "JBSWY3DPEHPK3PXP"}'
curl -X POST http://localhost:5000/parse -H "Content-Type: application/json" -d '{"uri": "otpauth://totp/ACME:alice?secret=JBSWY3DPEHPK3PXP"}'
curl -X POST http://localhost:5000/uri -H "Content-Type: application/json" -d '{"secret": "JBSWY3DPEHPK3PXP", "issuer": "ACME"}'
"""

import logging
import time

from flask import Blueprint, jsonify, request

from core.errors import OtpError
from core.otp_core import DEFAULT_ALGORITHM, DEFAULT_DIGITS, DEFAULT_TIME_STEP, OtpConfig, compute_code, time_window
from core.otp_uri import build, parse, parse_input

logger = logging.getLogger(__name__)

otp_bp = Blueprint('otp', __name__)


class BadRequest(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("JSON object body is required")
    return data


def _require(data: dict, field: str) -> str:
    value = data.get(field)
    if value is None or value == "":
        raise BadRequest(f"{field} is required")
    if not isinstance(value, str):
        raise BadRequest(f"{field} must be a string")
    return value


@otp_bp.errorhandler(OtpError)
def handle_otp_error(e):
    logger.info("Rejected OTP request: %s", e)
    return jsonify({"error": str(e), "type": type(e).__name__}), 400


@otp_bp.errorhandler(BadRequest)
def handle_bad_request(e):
    return jsonify({"error": e.message, "type": "BadRequest"}), 400


@otp_bp.route('/code', methods=['POST'])
def get_code():
    """
    CURRENT TOTP CODE

      curl -X POST http://localhost:5000/code -H "Content-Type: application/json" -d '{"input": "JBSWY3DPEHPK3PXP"}'

    Input (JSON body):
      {
        "input": "...",            # REQUIRED - Base32 secret or otpauth URI
        "algorithm": "SHA1",       # bare secret only
        "digits": 6,               # bare secret only
        "period": 30,              # bare secret only
        "timestamp_ms": 59000      # optional, defaults to now
      }

    Output:
      {"code": "...", "digits": 6, "period": 30, "elapsed": 29, "remaining": 1}
    """
    data = _json_body()
    cfg = parse_input(_require(data, "input"), {
        "algorithm": data.get("algorithm"),
        "digits": data.get("digits"),
        "period": data.get("period"),
    })
    timestamp_ms = data.get("timestamp_ms")
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    elif isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, (int, float)):
        raise BadRequest("timestamp_ms must be a number")

    code = compute_code(cfg, timestamp_ms)
    elapsed, remaining = time_window(timestamp_ms, cfg.period)
    return jsonify({
        "code": code,
        "digits": cfg.digits,
        "period": cfg.period,
        "elapsed": elapsed,
        "remaining": remaining,
    })


@otp_bp.route('/parse', methods=['POST'])
def parse_uri():
    """
    PARSE AN otpauth URI

      curl -X POST http://localhost:5000/parse -H "Content-Type: application/json" -d '{"uri": "otpauth://totp/ACME:alice?secret=JBSWY3DPEHPK3PXP"}'

    Output:
      {"secret": "...", "algorithm": "SHA1", "digits": 6, "period": 30, "label": "alice", "issuer": "ACME"}
    """
    data = _json_body()
    cfg = parse(_require(data, "uri"))
    return jsonify(cfg.to_dict())


@otp_bp.route('/uri', methods=['POST'])
def build_uri():
    """
    BUILD AN otpauth URI (feed it to a QR code generator)

      curl -X POST http://localhost:5000/uri -H "Content-Type: application/json" -d '{"secret": "JBSWY3DPEHPK3PXP", "label": "alice", "issuer": "ACME"}'

    Output:
      {"uri": "otpauth://totp/ACME:alice?secret=...&issuer=ACME&algorithm=SHA1&digits=6&period=30"}
    """
    data = _json_body()
    cfg = OtpConfig(
        secret=_require(data, "secret"),
        algorithm=data.get("algorithm") or DEFAULT_ALGORITHM,
        digits=data.get("digits", DEFAULT_DIGITS),
        period=data.get("period", DEFAULT_TIME_STEP),
        label=str(data.get("label") or ""),
        issuer=str(data.get("issuer") or ""),
    )
    uri = build(cfg)
    logger.debug("Built otpauth URI for issuer=%r label=%r", cfg.issuer, cfg.label)
    return jsonify({"uri": uri})
