"""
BACKEND PACKAGE

JSON HTTP API (Flask) around the OTP core.
"""

from .app import create_app

__all__ = ['create_app']
