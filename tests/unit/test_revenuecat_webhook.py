"""Tests for the RevenueCat webhook endpoint."""

import pytest

from subscription_backend.brokers.https.revenuecat_webhook import handle_revenuecat_webhook
from subscription_backend.models.util_types import WebhookAuthMode
from subscription_backend.util.webhook_auth import resolve_webhook_auth

EVENT = {
    "type": "INITIAL_PURCHASE",
    "app_user_id": "alice",
    "entitlements": {"pro": {"expires_date": "2024-02-01T00:00:00Z"}},
}


class TestResolveWebhookAuth:

    @pytest.mark.parametrize("secret", [None, ""])
    def test_unconfigured_secret(self, secret):
        assert resolve_webhook_auth("Bearer anything", secret) is WebhookAuthMode.SECRET_MISSING

    def test_matching_bearer(self):
        assert resolve_webhook_auth("Bearer s3cret", "s3cret") is WebhookAuthMode.VERIFIED

    @pytest.mark.parametrize("header", [None, "", "s3cret", "Bearer wrong", "bearer s3cret"])
    def test_mismatch(self, header):
        assert resolve_webhook_auth(header, "s3cret") is WebhookAuthMode.UNAUTHORIZED


class TestHandleRevenueCatWebhook:

    def test_verified_event_is_synced(self, db, read_user):
        result = handle_revenuecat_webhook("POST", "Bearer s3cret", EVENT, "s3cret", db)

        assert result == ("OK", 200)
        assert read_user("alice")["isPro"] is True

    def test_wrapped_event_body(self, db, read_user):
        result = handle_revenuecat_webhook("POST", None, {"event": EVENT}, "", db)

        assert result == ("OK", 200)
        assert read_user("alice")["lastWebhookEvent"] == "INITIAL_PURCHASE"

    def test_missing_secret_proceeds_with_warning(self, db, read_user, caplog):
        result = handle_revenuecat_webhook("POST", None, EVENT, None, db)

        assert result == ("OK", 200)
        assert "REVENUECAT_WEBHOOK_SECRET not configured" in caplog.text

    def test_bad_token_is_unauthorized(self, db, read_user):
        result = handle_revenuecat_webhook("POST", "Bearer nope", EVENT, "s3cret", db)

        assert result == ("Unauthorized", 401)
        assert read_user("alice") is None

    def test_non_post_is_rejected(self, db):
        assert handle_revenuecat_webhook("GET", None, None, "", db) == ("Method Not Allowed", 405)

    def test_missing_user_id(self, db):
        body = dict(EVENT, app_user_id=None)

        assert handle_revenuecat_webhook("POST", None, body, "", db) == ("Missing app_user_id", 400)

    def test_non_json_body(self, db):
        assert handle_revenuecat_webhook("POST", None, None, "", db) == ("Invalid payload", 400)

    def test_store_failure_is_server_error(self, db, firestore_client, monkeypatch):
        def fail(*args, **kwargs):
            raise RuntimeError("store down")

        monkeypatch.setattr(firestore_client, "apply", fail)

        assert handle_revenuecat_webhook("POST", None, EVENT, "", db) == ("Internal Server Error", 500)
