"""Utility type definitions."""

import string
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class SubscriptionStatus(str, Enum):
    """Result of evaluating a subscription record against the server clock."""
    LIFETIME = "lifetime"
    ACTIVE = "active"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"


class WebhookAuthMode(str, Enum):
    """Outcome of checking the billing webhook authorization header."""
    VERIFIED = "verified"
    SECRET_MISSING = "secret_missing"
    UNAUTHORIZED = "unauthorized"


class ReferralPolicy(BaseModel):
    """Referral reward constants."""

    model_config = ConfigDict(frozen=True)

    reward_threshold: int = Field(default=3, gt=0)
    reward_days: int = Field(default=7, gt=0)
    max_rewards: int = Field(default=12, ge=0)
    trial_days: int = Field(default=3, gt=0)


class CodePolicy(BaseModel):
    """Referral code shape and the bound on collision retries."""

    model_config = ConfigDict(frozen=True)

    length: int = Field(default=8, gt=0)
    max_attempts: int = Field(default=10, gt=0)
    alphabet: str = string.ascii_uppercase + string.digits
