"""Tests for the on-demand subscription check."""

from datetime import timedelta

from subscription_backend.services.subscription_service import SubscriptionService


class TestSubscriptionService:

    def test_missing_user_is_not_found(self, db):
        assert SubscriptionService(db).check("ghost") == {"status": "not_found"}

    def test_lifetime_reports_stored_flag(self, db, seed_user, read_user):
        seed_user("life", isPro=True, subscriptionExpiry=None)
        seed_user("free", isPro=False)

        assert SubscriptionService(db).check("life") == {"status": "lifetime", "isPro": True}
        assert SubscriptionService(db).check("free") == {"status": "lifetime", "isPro": False}
        assert "expiredAt" not in read_user("life")

    def test_active_returns_expiry(self, db, now, seed_user):
        seed_user("active", isPro=True, subscriptionExpiry=now + timedelta(days=2))

        result = SubscriptionService(db).check("active")

        assert result == {
            "status": "active",
            "isPro": True,
            "expiresAt": "2024-01-03T12:00:00.000Z",
        }

    def test_expired_revokes_and_persists(self, db, now, seed_user, read_user):
        seed_user("lapsed", isPro=True, subscriptionExpiry=now - timedelta(minutes=1), referrals=2)

        result = SubscriptionService(db).check("lapsed")

        assert result == {
            "status": "expired",
            "isPro": False,
            "expiredAt": "2024-01-01T12:00:00.000Z",
        }
        stored = read_user("lapsed")
        assert stored["isPro"] is False
        assert stored["expiredAt"] == now
        assert stored["referrals"] == 2
