"""RevenueCat webhook HTTP endpoint."""

from typing import Any, Optional, Tuple
from firebase_functions import https_fn, options
from pydantic import ValidationError as PayloadError
from subscription_backend.apis.Db import Db
from subscription_backend.config.env_loader import get_webhook_secret
from subscription_backend.config.loader import get_pro_entitlement_key
from subscription_backend.exceptions import ValidationError
from subscription_backend.models.function_types import RevenueCatEvent
from subscription_backend.models.util_types import WebhookAuthMode
from subscription_backend.services.entitlement_sync_service import EntitlementSyncService
from subscription_backend.util.cors_response import preflight_response, create_text_response
from subscription_backend.util.logger import get_logger
from subscription_backend.util.webhook_auth import resolve_webhook_auth

logger = get_logger(__name__)


def handle_revenuecat_webhook(
    method: str,
    authorization: Optional[str],
    body: Any,
    secret: Optional[str],
    db: Optional[Db] = None,
) -> Tuple[str, int]:
    """Authenticate a billing event and mirror its entitlements onto the user.

    Never raises; every outcome is a (body, status) pair.

    Args:
        method: HTTP method of the request
        authorization: Authorization header, if any
        body: Parsed JSON body, or None if it was not JSON
        secret: Configured shared secret; empty accepts unauthenticated events
        db: Database to write to

    Returns:
        Response text and HTTP status
    """
    if method != "POST":
        return "Method Not Allowed", 405

    auth_mode = resolve_webhook_auth(authorization, secret)
    if auth_mode is WebhookAuthMode.UNAUTHORIZED:
        logger.warning("Unauthorized webhook request")
        return "Unauthorized", 401
    if auth_mode is WebhookAuthMode.SECRET_MISSING:
        logger.warning("REVENUECAT_WEBHOOK_SECRET not configured, accepting unauthenticated webhook")

    try:
        event = RevenueCatEvent.from_body(body)
    except PayloadError as e:
        logger.warning(f"Invalid webhook payload: {e}")
        return "Invalid payload", 400

    try:
        EntitlementSyncService(db, get_pro_entitlement_key()).sync(event)
    except ValidationError as e:
        logger.warning(f"Invalid webhook event: {e.message}")
        return e.message, 400
    except Exception as e:
        logger.error(f"Webhook error: {e}")
        return "Internal Server Error", 500

    return "OK", 200


@https_fn.on_request(
    ingress=options.IngressSetting.ALLOW_ALL,
    timeout_sec=60,
)
def revenuecat_webhook(req: https_fn.Request):
    """Handle RevenueCat subscription events.

    Args:
        req: Firebase HTTP request

    Returns:
        Plain-text response with the processing status
    """
    preflight = preflight_response(req, ["POST", "OPTIONS"])
    if preflight is not None:
        return preflight

    try:
        body, status = handle_revenuecat_webhook(
            req.method,
            req.headers.get("Authorization"),
            req.get_json(silent=True),
            get_webhook_secret(),
        )
    except Exception as e:
        logger.error(f"Webhook processing failed: {e}")
        body, status = "Internal Server Error", 500

    return create_text_response(body, status=status)
