"""
Referral reward accrual.

Pure state transitions applied inside the signup transaction: given the
referrer's current counters, compute the referrer update and the trial grant
for the new user. Nothing here reads or writes Firestore.

Every referral increments ``totalReferrals`` and the rolling ``referrals``
counter. When the rolling counter reaches the reward threshold it resets to
zero, and the referrer earns reward days unless ``referralRewards`` already
hit the cap. Rewards extend from the later of the current expiry and now, so
they never shorten access and never revive a date in the past.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from subscription_backend.models.firestore_types import UserDoc
from subscription_backend.models.util_types import ReferralPolicy
from subscription_backend.util import time_utils


@dataclass(frozen=True)
class ReferralOutcome:
    """Writes produced by one applied referral."""

    referee_grant: Dict[str, Any]
    referrer_update: Dict[str, Any]
    reward_granted: bool = False
    cap_reached: bool = False
    reward_number: Optional[int] = None
    # Referrer expiry after the update; None when unchanged or lifetime
    referrer_expiry: Optional[datetime] = field(default=None)


def normalize_referral_code(code: Any) -> Optional[str]:
    """Trim and uppercase a submitted code; blank or non-string input yields None."""
    if not isinstance(code, str):
        return None
    normalized = code.strip().upper()
    return normalized or None


def is_lifetime(doc: UserDoc) -> bool:
    """Pro access with no expiry date."""
    return doc.isPro and doc.subscriptionExpiry is None


def referee_grant(code: str, referrer_id: str, now: datetime, policy: ReferralPolicy) -> Dict[str, Any]:
    """Fields granted to a new user who redeemed ``code`` at signup."""
    return {
        "appliedReferralCode": code,
        "referredBy": referrer_id,
        "isPro": True,
        "subscriptionExpiry": time_utils.add_days(now, policy.trial_days),
    }


def accrue_referral(referrer: UserDoc, now: datetime, policy: ReferralPolicy) -> ReferralOutcome:
    """Compute the referrer's counters and reward after one more referral.

    The returned ``referee_grant`` is empty; use ``apply_referral`` for the
    complete pair.
    """
    rolling = referrer.referrals + 1
    update: Dict[str, Any] = {
        "referrals": rolling,
        "totalReferrals": referrer.totalReferrals + 1,
    }

    if rolling < policy.reward_threshold:
        return ReferralOutcome(referee_grant={}, referrer_update=update)

    # Threshold reached: the rolling counter resets whether or not a reward is paid
    update["referrals"] = 0

    if referrer.referralRewards >= policy.max_rewards:
        return ReferralOutcome(referee_grant={}, referrer_update=update, cap_reached=True)

    reward_number = referrer.referralRewards + 1
    update["referralRewards"] = reward_number

    new_expiry = None
    if not is_lifetime(referrer):
        new_expiry = time_utils.add_days(
            time_utils.latest(referrer.subscriptionExpiry, now),
            policy.reward_days,
        )
        update["subscriptionExpiry"] = new_expiry
        update["isPro"] = True

    return ReferralOutcome(
        referee_grant={},
        referrer_update=update,
        reward_granted=True,
        reward_number=reward_number,
        referrer_expiry=new_expiry,
    )


def apply_referral(
    referrer_id: str,
    referrer: UserDoc,
    code: str,
    now: datetime,
    policy: Optional[ReferralPolicy] = None,
) -> ReferralOutcome:
    """Compute both sides of a referral: the referee trial and the referrer update."""
    policy = policy or ReferralPolicy()
    accrued = accrue_referral(referrer, now, policy)
    return ReferralOutcome(
        referee_grant=referee_grant(code, referrer_id, now, policy),
        referrer_update=accrued.referrer_update,
        reward_granted=accrued.reward_granted,
        cap_reached=accrued.cap_reached,
        reward_number=accrued.reward_number,
        referrer_expiry=accrued.referrer_expiry,
    )
