"""Firestore document type definitions using Pydantic."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator


class BaseDoc(BaseModel):
    """Base document type for all Firestore documents."""

    model_config = ConfigDict(extra="ignore")

    createdAt: Optional[datetime] = None
    lastUpdatedAt: Optional[datetime] = None


class UserDoc(BaseDoc):
    """User profile document stored at users/{uid}.

    A null ``subscriptionExpiry`` means no expiry (lifetime), which only grants
    access together with ``isPro``. Referral counters are absent on documents
    that predate the referral program and read as zero.
    """

    uid: Optional[str] = None
    email: Optional[str] = None
    displayName: Optional[str] = None

    # Entitlement
    isPro: bool = False
    subscriptionExpiry: Optional[datetime] = None
    expiredAt: Optional[datetime] = None
    lastVerified: Optional[datetime] = None
    lastWebhookEvent: Optional[str] = None

    # Own referral code
    referralCode: Optional[str] = None

    # Redeemed at signup, write-once
    appliedReferralCode: Optional[str] = None
    referredBy: Optional[str] = None
    referralAppliedAt: Optional[datetime] = None

    # Referrer counters
    referrals: int = 0
    totalReferrals: int = 0
    referralRewards: int = 0

    @field_validator("referrals", "totalReferrals", "referralRewards", mode="before")
    @classmethod
    def _missing_counter_is_zero(cls, value):
        return 0 if value is None else value

    @field_validator("isPro", mode="before")
    @classmethod
    def _missing_flag_is_false(cls, value):
        return False if value is None else value
