"""Utility functions package.

Broker helpers that depend on the database (``db_auth_wrapper``) are imported
from their modules directly.
"""

from .logger import get_logger
from .cors_response import (
    cors_response_on_call,
    preflight_response,
    add_cors_headers,
    create_text_response,
)
from .https_errors import to_https_error
from .webhook_auth import resolve_webhook_auth

__all__ = [
    "get_logger",
    "cors_response_on_call",
    "preflight_response",
    "add_cors_headers",
    "create_text_response",
    "to_https_error",
    "resolve_webhook_auth",
]
