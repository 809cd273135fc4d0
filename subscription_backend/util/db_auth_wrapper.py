"""Caller authentication for callable functions."""

from typing import Optional
from firebase_functions import https_fn
from subscription_backend.apis.Db import Db
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


def get_caller_uid(req: https_fn.CallableRequest) -> Optional[str]:
    """Return the caller's uid, or None for an anonymous call.

    In development/emulator runs a ``User-Id`` header stands in for the auth
    token so tests can act as a given user.
    """
    if req.auth is not None and req.auth.uid:
        return req.auth.uid

    if Db.is_development():
        raw_request = getattr(req, "raw_request", None)
        if raw_request is not None and raw_request.headers:
            user_id = raw_request.headers.get("User-Id")
            if user_id:
                return user_id

    return None


def db_auth_wrapper(req: https_fn.CallableRequest) -> str:
    """Wrapper for authenticating Firebase callable requests.

    Args:
        req: Firebase callable request object

    Returns:
        Authenticated user ID

    Raises:
        HttpsError: UNAUTHENTICATED if the request carries no caller identity
    """
    uid = get_caller_uid(req)

    if not uid:
        logger.warning("Unauthenticated request")
        raise https_fn.HttpsError(
            https_fn.FunctionsErrorCode.UNAUTHENTICATED,
            "User not authenticated"
        )

    return uid
