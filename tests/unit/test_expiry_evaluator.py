"""Tests for expiry evaluation."""

from datetime import datetime, timedelta, timezone

from subscription_backend.models.util_types import SubscriptionStatus
from subscription_backend.services.expiry_evaluator import evaluate_expiry

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_null_expiry_is_lifetime_without_mutation():
    result = evaluate_expiry(NOW, None, True)

    assert result.status is SubscriptionStatus.LIFETIME
    assert result.mutation is None


def test_null_expiry_without_pro_is_still_lifetime():
    result = evaluate_expiry(NOW, None, False)

    assert result.status is SubscriptionStatus.LIFETIME
    assert result.mutation is None


def test_past_expiry_is_expired_with_revoke():
    result = evaluate_expiry(NOW, NOW - timedelta(seconds=1), True)

    assert result.status is SubscriptionStatus.EXPIRED
    assert result.mutation == {"isPro": False, "expiredAt": NOW}


def test_past_expiry_already_revoked_still_reports_mutation():
    result = evaluate_expiry(NOW, NOW - timedelta(days=3), False)

    assert result.status is SubscriptionStatus.EXPIRED
    assert result.mutation["isPro"] is False


def test_future_expiry_is_active():
    result = evaluate_expiry(NOW, NOW + timedelta(days=1), True)

    assert result.status is SubscriptionStatus.ACTIVE
    assert result.mutation is None


def test_expiry_equal_to_now_is_active():
    assert evaluate_expiry(NOW, NOW, True).status is SubscriptionStatus.ACTIVE


def test_naive_expiry_is_treated_as_utc():
    naive_past = datetime(2023, 12, 31, 12, 0, 0)

    assert evaluate_expiry(NOW, naive_past, True).status is SubscriptionStatus.EXPIRED
