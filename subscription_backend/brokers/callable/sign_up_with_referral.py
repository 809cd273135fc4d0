"""Sign up with referral callable function."""

from typing import Any, Dict, Optional
from firebase_functions import https_fn, options
from subscription_backend.apis.Db import Db
from subscription_backend.apis.Identity import Identity
from subscription_backend.config.loader import get_referral_policy
from subscription_backend.models.function_types import SignUpResponse
from subscription_backend.services.signup_service import SignupService
from subscription_backend.util.cors_response import cors_response_on_call
from subscription_backend.util.https_errors import to_https_error
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


def handle_sign_up_with_referral(
    data: Optional[Dict[str, Any]],
    db: Optional[Db] = None,
    identity: Optional[Identity] = None,
) -> SignUpResponse:
    """Create an account and profile, applying ``data.referralCode`` if valid."""
    data = data if isinstance(data, dict) else {}
    service = SignupService(db, identity, get_referral_policy())
    return service.sign_up(
        data.get("email"),
        data.get("password"),
        data.get("displayName"),
        data.get("referralCode"),
    )


@https_fn.on_call(
    cors=options.CorsOptions(cors_origins=["*"]),
    ingress=options.IngressSetting.ALLOW_ALL,
)
def sign_up_with_referral(req: https_fn.CallableRequest) -> SignUpResponse:
    """Sign up a new user, optionally with a referral code.

    Args:
        req: Firebase callable request containing SignUpRequest data

    Returns:
        SignUpResponse with success status, uid and email
    """
    options_response = cors_response_on_call(req.raw_request)
    if options_response:
        return options_response

    try:
        return handle_sign_up_with_referral(req.data)
    except https_fn.HttpsError:
        raise
    except Exception as e:
        raise to_https_error(e, "Sign up failed")
