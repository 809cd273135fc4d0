"""Subscription expiry check callable function."""

from typing import Any, Dict, Optional
from firebase_functions import https_fn, options
from subscription_backend.apis.Db import Db
from subscription_backend.exceptions import UnauthenticatedError
from subscription_backend.models.function_types import SubscriptionStatusResponse
from subscription_backend.services.subscription_service import SubscriptionService
from subscription_backend.util.cors_response import cors_response_on_call
from subscription_backend.util.db_auth_wrapper import get_caller_uid
from subscription_backend.util.https_errors import to_https_error
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


def handle_check_subscription_expiry(
    caller_uid: Optional[str],
    data: Optional[Dict[str, Any]],
    db: Optional[Db] = None,
) -> SubscriptionStatusResponse:
    """Check one user's subscription, revoking Pro access if it has lapsed.

    The authenticated caller is checked when present; otherwise ``data.uid``
    names the user.

    Raises:
        UnauthenticatedError: If neither an auth uid nor ``data.uid`` is given
    """
    data = data if isinstance(data, dict) else {}
    uid = caller_uid or data.get("uid")
    if not uid or not isinstance(uid, str):
        raise UnauthenticatedError()

    return SubscriptionService(db).check(uid)


@https_fn.on_call(
    cors=options.CorsOptions(cors_origins=["*"]),
    ingress=options.IngressSetting.ALLOW_ALL,
)
def check_subscription_expiry(req: https_fn.CallableRequest) -> SubscriptionStatusResponse:
    """Check and update a user's subscription status.

    Args:
        req: Firebase callable request, optionally carrying CheckSubscriptionRequest data

    Returns:
        SubscriptionStatusResponse describing lifetime, active, expired or not_found
    """
    options_response = cors_response_on_call(req.raw_request)
    if options_response:
        return options_response

    try:
        return handle_check_subscription_expiry(get_caller_uid(req), req.data)
    except https_fn.HttpsError:
        raise
    except Exception as e:
        logger.error(f"Error checking subscription expiry: {e}")
        raise to_https_error(e, "Failed to check subscription")
