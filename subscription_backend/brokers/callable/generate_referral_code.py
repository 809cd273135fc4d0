"""Referral code generation callable function."""

from typing import Optional
from firebase_functions import https_fn, options
from subscription_backend.apis.Db import Db
from subscription_backend.config.loader import get_code_policy
from subscription_backend.models.function_types import ReferralCodeResponse
from subscription_backend.services.referral_code_service import ReferralCodeService
from subscription_backend.util.cors_response import cors_response_on_call
from subscription_backend.util.db_auth_wrapper import db_auth_wrapper
from subscription_backend.util.https_errors import to_https_error
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


def handle_generate_referral_code(uid: str, db: Optional[Db] = None) -> ReferralCodeResponse:
    """Return the caller's referral code, creating it on first use."""
    code = ReferralCodeService(db, get_code_policy()).get_or_create(uid)
    return {"code": code}


@https_fn.on_call(
    cors=options.CorsOptions(cors_origins=["*"]),
    ingress=options.IngressSetting.ALLOW_ALL,
)
def generate_referral_code(req: https_fn.CallableRequest) -> ReferralCodeResponse:
    """Generate a unique referral code for the authenticated user.

    Args:
        req: Firebase callable request; requires auth

    Returns:
        ReferralCodeResponse with the user's code
    """
    options_response = cors_response_on_call(req.raw_request)
    if options_response:
        return options_response

    try:
        uid = db_auth_wrapper(req)
        return handle_generate_referral_code(uid)
    except https_fn.HttpsError:
        raise
    except Exception as e:
        logger.error(f"Error generating referral code: {e}")
        raise to_https_error(e, "Failed to generate referral code")
