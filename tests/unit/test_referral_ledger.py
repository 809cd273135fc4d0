"""Tests for referral reward accrual."""

from datetime import datetime, timedelta, timezone

import pytest

from subscription_backend.models.firestore_types import UserDoc
from subscription_backend.models.util_types import ReferralPolicy
from subscription_backend.services import referral_ledger

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
POLICY = ReferralPolicy()


def accrue_times(referrer: UserDoc, count: int, now: datetime = NOW):
    """Apply ``count`` referrals in a row, feeding each update back in."""
    outcomes = []
    for _ in range(count):
        outcome = referral_ledger.accrue_referral(referrer, now, POLICY)
        referrer = referrer.model_copy(update=outcome.referrer_update)
        outcomes.append(outcome)
    return referrer, outcomes


class TestNormalizeReferralCode:

    @pytest.mark.parametrize("raw, expected", [
        ("abcd1234", "ABCD1234"),
        ("  AbCd1234 ", "ABCD1234"),
        ("", None),
        ("   ", None),
        (None, None),
        (12345678, None),
    ])
    def test_normalization(self, raw, expected):
        assert referral_ledger.normalize_referral_code(raw) == expected


class TestAccrueReferral:

    def test_below_threshold_only_counts(self):
        referrer, outcomes = accrue_times(UserDoc(), 2)

        assert referrer.referrals == 2
        assert referrer.totalReferrals == 2
        assert referrer.referralRewards == 0
        assert not any(o.reward_granted for o in outcomes)
        assert "subscriptionExpiry" not in outcomes[-1].referrer_update

    def test_third_referral_grants_reward_and_resets(self):
        referrer, outcomes = accrue_times(UserDoc(), 3)

        last = outcomes[-1]
        assert last.reward_granted is True
        assert last.reward_number == 1
        assert referrer.referrals == 0
        assert referrer.totalReferrals == 3
        assert referrer.referralRewards == 1
        assert referrer.isPro is True
        assert referrer.subscriptionExpiry == NOW + timedelta(days=7)

    def test_reward_extends_future_expiry(self):
        future = NOW + timedelta(days=10)
        referrer = UserDoc(isPro=True, subscriptionExpiry=future, referrals=2, totalReferrals=2)

        outcome = referral_ledger.accrue_referral(referrer, NOW, POLICY)

        assert outcome.referrer_update["subscriptionExpiry"] == future + timedelta(days=7)
        assert outcome.referrer_expiry == future + timedelta(days=7)

    def test_reward_on_lapsed_expiry_starts_from_now(self):
        past = NOW - timedelta(days=30)
        referrer = UserDoc(isPro=False, subscriptionExpiry=past, referrals=2, totalReferrals=2)

        outcome = referral_ledger.accrue_referral(referrer, NOW, POLICY)

        assert outcome.referrer_update["subscriptionExpiry"] == NOW + timedelta(days=7)
        assert outcome.referrer_update["isPro"] is True

    def test_lifetime_referrer_keeps_null_expiry(self):
        referrer = UserDoc(isPro=True, subscriptionExpiry=None, referrals=2, totalReferrals=2)

        outcome = referral_ledger.accrue_referral(referrer, NOW, POLICY)

        assert outcome.reward_granted is True
        assert outcome.referrer_update["referralRewards"] == 1
        assert "subscriptionExpiry" not in outcome.referrer_update
        assert outcome.referrer_expiry is None

    def test_rewards_cap_at_twelve(self):
        referrer, outcomes = accrue_times(UserDoc(), 45)

        granted = [o for o in outcomes if o.reward_granted]
        capped = [o for o in outcomes if o.cap_reached]
        assert len(granted) == 12
        assert len(capped) == 3
        assert referrer.referralRewards == 12
        assert referrer.totalReferrals == 45
        assert referrer.subscriptionExpiry == NOW + timedelta(days=7 * 12)

    def test_counter_resets_even_when_capped(self):
        referrer = UserDoc(referrals=2, totalReferrals=38, referralRewards=12)

        outcome = referral_ledger.accrue_referral(referrer, NOW, POLICY)

        assert outcome.cap_reached is True
        assert outcome.reward_granted is False
        assert outcome.referrer_update == {"referrals": 0, "totalReferrals": 39}

    def test_missing_counters_read_as_zero(self):
        referrer = UserDoc(referrals=None, totalReferrals=None, referralRewards=None)

        outcome = referral_ledger.accrue_referral(referrer, NOW, POLICY)

        assert outcome.referrer_update == {"referrals": 1, "totalReferrals": 1}


class TestApplyReferral:

    def test_referee_gets_trial(self):
        outcome = referral_ledger.apply_referral("ref-1", UserDoc(), "ABCD1234", NOW)

        assert outcome.referee_grant == {
            "appliedReferralCode": "ABCD1234",
            "referredBy": "ref-1",
            "isPro": True,
            "subscriptionExpiry": NOW + timedelta(days=3),
        }
        assert outcome.referrer_update == {"referrals": 1, "totalReferrals": 1}

    def test_custom_policy(self):
        policy = ReferralPolicy(reward_threshold=1, reward_days=30, max_rewards=1, trial_days=14)

        outcome = referral_ledger.apply_referral("ref-1", UserDoc(), "CODE", NOW, policy)

        assert outcome.referee_grant["subscriptionExpiry"] == NOW + timedelta(days=14)
        assert outcome.referrer_update["subscriptionExpiry"] == NOW + timedelta(days=30)
