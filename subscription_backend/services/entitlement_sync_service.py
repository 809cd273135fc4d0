"""Entitlement sync from billing provider events."""

from typing import Any, Dict, Optional
from subscription_backend.apis.Db import Db
from subscription_backend.exceptions import InternalError, ValidationError
from subscription_backend.models.function_types import RevenueCatEvent
from subscription_backend.util import time_utils
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


class EntitlementSyncService:
    """Mirrors the billing provider's view of a user's Pro entitlement.

    Each event is reduced to ``isPro`` (the Pro entitlement is present) and its
    expiry, then merged into the user document. Referral counters and other
    fields are never touched, and replaying an event converges to the same
    entitlement state.
    """

    def __init__(self, db: Optional[Db] = None, pro_key: str = "pro"):
        self.db = db or Db.get_instance()
        self.pro_key = pro_key

    def entitlement_fields(self, event: RevenueCatEvent) -> Dict[str, Any]:
        """Derive isPro and subscriptionExpiry from an event.

        Raises:
            ValidationError: If the Pro entitlement carries an unparseable expiry
        """
        is_pro = self.pro_key in event.entitlements
        pro_entitlement = event.entitlements.get(self.pro_key)

        expiry = None
        if is_pro and pro_entitlement is not None and pro_entitlement.expires_date:
            try:
                expiry = time_utils.parse_iso8601_z(pro_entitlement.expires_date)
            except ValueError as e:
                raise ValidationError(str(e), field="expires_date") from e

        return {"isPro": is_pro, "subscriptionExpiry": expiry}

    def sync(self, event: RevenueCatEvent) -> Dict[str, Any]:
        """Merge the event's entitlement state into users/{app_user_id}.

        Returns:
            The fields written

        Raises:
            ValidationError: If the event has no app_user_id
            InternalError: If the write failed
        """
        uid = event.app_user_id
        if not uid or not uid.strip():
            raise ValidationError("Missing app_user_id", field="app_user_id")

        logger.info(f"RevenueCat webhook: {event.type} for user {uid}")

        update = {
            **self.entitlement_fields(event),
            "lastVerified": self.db.server_timestamp,
            "lastWebhookEvent": event.type,
        }

        try:
            self.db.collections["users"].document(uid).set(update, merge=True)
        except Exception as e:
            raise InternalError(f"Failed to sync entitlements for user {uid}: {e}", cause=e) from e

        logger.info(f"Webhook processed: user {uid}, isPro={update['isPro']}, event={event.type}")
        return update
