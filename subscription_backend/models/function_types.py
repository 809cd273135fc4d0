"""Function request and response type definitions."""

from typing import Optional, Dict, Any, TypedDict
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServerTimeResponse(TypedDict):
    """Response structure for get_server_time."""
    serverTime: str
    timestamp: int


class CheckSubscriptionRequest(TypedDict, total=False):
    """Request structure for check_subscription_expiry."""
    uid: Optional[str]


class SubscriptionStatusResponse(TypedDict, total=False):
    """Response structure for check_subscription_expiry."""
    status: str
    isPro: bool
    expiredAt: str
    expiresAt: str


class SignUpRequest(TypedDict, total=False):
    """Request structure for sign_up_with_referral."""
    email: str
    password: str
    displayName: str
    referralCode: Optional[str]


class SignUpResponse(TypedDict):
    """Response structure for sign_up_with_referral."""
    success: bool
    uid: str
    email: str


class ReferralCodeResponse(TypedDict):
    """Response structure for generate_referral_code."""
    code: str


class SweepResult(TypedDict, total=False):
    """Result of one expiry sweep run."""
    success: bool
    revokedCount: int
    error: str


class RevenueCatEntitlement(BaseModel):
    """Single entitlement entry of a billing event."""

    model_config = ConfigDict(extra="ignore")

    expires_date: Optional[str] = None


class RevenueCatEvent(BaseModel):
    """Billing provider webhook event.

    Only the fields used for entitlement sync are modelled; everything else the
    provider sends is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    app_user_id: Optional[str] = None
    entitlements: Dict[str, Optional[RevenueCatEntitlement]] = Field(default_factory=dict)

    @field_validator("entitlements", mode="before")
    @classmethod
    def _null_entitlements_are_empty(cls, value):
        return {} if value is None else value

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> "RevenueCatEvent":
        """Parse a webhook body, accepting both flat and ``{"event": {...}}`` shapes."""
        if isinstance(body, dict) and isinstance(body.get("event"), dict):
            body = body["event"]
        return cls.model_validate(body)
