"""Models package initialization."""

from .firestore_types import BaseDoc, UserDoc
from .function_types import (
    ServerTimeResponse,
    CheckSubscriptionRequest,
    SubscriptionStatusResponse,
    SignUpRequest,
    SignUpResponse,
    ReferralCodeResponse,
    SweepResult,
    RevenueCatEntitlement,
    RevenueCatEvent,
)
from .util_types import SubscriptionStatus, WebhookAuthMode, ReferralPolicy, CodePolicy

__all__ = [
    # Firestore types
    "BaseDoc",
    "UserDoc",
    # Function types
    "ServerTimeResponse",
    "CheckSubscriptionRequest",
    "SubscriptionStatusResponse",
    "SignUpRequest",
    "SignUpResponse",
    "ReferralCodeResponse",
    "SweepResult",
    "RevenueCatEntitlement",
    "RevenueCatEvent",
    # Utility types
    "SubscriptionStatus",
    "WebhookAuthMode",
    "ReferralPolicy",
    "CodePolicy",
]
