"""Shared-secret check for inbound billing webhooks."""

import hmac
from typing import Optional
from subscription_backend.models.util_types import WebhookAuthMode


def resolve_webhook_auth(authorization: Optional[str], secret: Optional[str]) -> WebhookAuthMode:
    """Classify a webhook request by its Authorization header.

    Args:
        authorization: Raw Authorization header value, if any
        secret: Configured shared secret; empty or None means unsecured

    Returns:
        SECRET_MISSING when no secret is configured (request proceeds),
        VERIFIED when the header equals ``Bearer <secret>``,
        UNAUTHORIZED otherwise
    """
    if not secret:
        return WebhookAuthMode.SECRET_MISSING

    expected = f"Bearer {secret}"
    if authorization and hmac.compare_digest(authorization.encode(), expected.encode()):
        return WebhookAuthMode.VERIFIED

    return WebhookAuthMode.UNAUTHORIZED
