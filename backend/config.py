"""
Server configuration, read from the environment.

    OTP_HOST          listen address   (default 0.0.0.0)
    OTP_PORT          listen port      (default 5000)
    OTP_DEBUG         "1"/"true" enables Flask debug mode
    OTP_CORS_ORIGINS  comma separated origins allowed by CORS (default "*")
"""

import os


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    HOST = os.environ.get("OTP_HOST", "0.0.0.0")
    PORT = int(os.environ.get("OTP_PORT", "5000"))
    DEBUG = _env_flag("OTP_DEBUG")
    CORS_ORIGINS = [o.strip() for o in os.environ.get("OTP_CORS_ORIGINS", "*").split(",") if o.strip()]
