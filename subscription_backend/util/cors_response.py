"""CORS response utility for HTTP functions."""

from typing import Optional, List
from flask import Response
from firebase_functions import https_fn


def cors_response_on_call(raw_request) -> Optional[tuple]:
    """Handle CORS for callable functions.

    Args:
        raw_request: Raw HTTP request object

    Returns:
        CORS response for OPTIONS request, None otherwise
    """
    if raw_request is not None and raw_request.method == "OPTIONS":
        headers = {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type, Authorization",
            "Access-Control-Max-Age": "3600",
        }
        return ("", 204, headers)
    return None


def preflight_response(req: https_fn.Request, allowed_methods: Optional[List[str]] = None) -> Optional[Response]:
    """Answer CORS preflight requests for HTTP functions.

    Args:
        req: Firebase HTTP request object
        allowed_methods: List of allowed HTTP methods

    Returns:
        204 response for OPTIONS requests, None otherwise
    """
    if req.method != "OPTIONS":
        return None

    methods = allowed_methods or ["GET", "POST", "OPTIONS"]
    response = Response("", status=204)
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = ", ".join(methods)
    response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
    response.headers["Access-Control-Max-Age"] = "3600"
    return response


def add_cors_headers(response: Response) -> Response:
    """Add CORS headers to a response.

    Args:
        response: Flask response object

    Returns:
        Response with CORS headers added
    """
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
    return response


def create_text_response(body: str, status: int = 200) -> Response:
    """Create a plain-text response with CORS headers."""
    response = Response(body, status=status, mimetype="text/plain")
    return add_cors_headers(response)

