"""On-demand subscription status check for a single user."""

from datetime import datetime
from typing import Optional
from subscription_backend.apis.Db import Db
from subscription_backend.documents.users.User import UserDocument
from subscription_backend.models.function_types import SubscriptionStatusResponse
from subscription_backend.models.util_types import SubscriptionStatus
from subscription_backend.services.expiry_evaluator import evaluate_expiry
from subscription_backend.util import time_utils
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


class SubscriptionService:
    """Reads one user, evaluates expiry, and revokes Pro access when it lapsed."""

    def __init__(self, db: Optional[Db] = None):
        self.db = db or Db.get_instance()

    def check(self, uid: str, now: Optional[datetime] = None) -> SubscriptionStatusResponse:
        """Evaluate the user's subscription and persist a revoke if it expired.

        Args:
            uid: User to check
            now: Evaluation time; defaults to the server clock

        Returns:
            Status payload for the client
        """
        now = now or self.db.timestamp_now()
        user = UserDocument.find(uid, db=self.db)

        if user is None:
            return {"status": SubscriptionStatus.NOT_FOUND.value}

        expiry = user.doc.subscriptionExpiry
        evaluation = evaluate_expiry(now, expiry, user.doc.isPro)

        if evaluation.status is SubscriptionStatus.LIFETIME:
            return {"status": evaluation.status.value, "isPro": user.doc.isPro}

        if evaluation.status is SubscriptionStatus.EXPIRED:
            user.revoke_pro(evaluation.mutation["expiredAt"])
            return {
                "status": evaluation.status.value,
                "isPro": False,
                "expiredAt": time_utils.to_iso8601_z(now),
            }

        return {
            "status": evaluation.status.value,
            "isPro": True,
            "expiresAt": time_utils.to_iso8601_z(expiry),
        }
