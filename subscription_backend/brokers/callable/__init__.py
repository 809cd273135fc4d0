"""Callable brokers package."""

from .get_server_time import get_server_time
from .check_subscription_expiry import check_subscription_expiry
from .sign_up_with_referral import sign_up_with_referral
from .generate_referral_code import generate_referral_code

__all__ = [
    "get_server_time",
    "check_subscription_expiry",
    "sign_up_with_referral",
    "generate_referral_code",
]
