"""Subscription expiry evaluation against the server clock."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from subscription_backend.models.util_types import SubscriptionStatus
from subscription_backend.util import time_utils


@dataclass(frozen=True)
class ExpiryEvaluation:
    """Status of a subscription record plus the write it requires, if any."""

    status: SubscriptionStatus
    mutation: Optional[Dict[str, Any]] = None


def evaluate_expiry(now: datetime, expiry: Optional[datetime], is_pro: bool) -> ExpiryEvaluation:
    """Map (now, expiry, isPro) to a status.

    A null expiry is reported as LIFETIME and never mutated, even when the user
    is not Pro; the status is informational and grants nothing by itself.
    A past expiry is EXPIRED and carries the revoke mutation stamped with
    ``now``. Anything else is ACTIVE.
    """
    if expiry is None:
        return ExpiryEvaluation(SubscriptionStatus.LIFETIME)

    if time_utils.ensure_utc(expiry) < time_utils.ensure_utc(now):
        return ExpiryEvaluation(
            SubscriptionStatus.EXPIRED,
            {"isPro": False, "expiredAt": now},
        )

    return ExpiryEvaluation(SubscriptionStatus.ACTIVE)
