"""Daily bulk revocation of expired subscriptions."""

from datetime import datetime
from typing import Optional
from google.cloud.firestore_v1.base_query import FieldFilter
from subscription_backend.apis.Db import Db
from subscription_backend.documents.users.User import UserDocument
from subscription_backend.models.function_types import SweepResult
from subscription_backend.models.util_types import SubscriptionStatus
from subscription_backend.services.expiry_evaluator import evaluate_expiry
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


class ExpirySweepService:
    """Revokes Pro access for every user whose subscription expired.

    One run queries ``isPro == true`` and ``subscriptionExpiry < now`` (null
    expiries never match a range filter) and commits all revocations in a
    single batch, so a failed run changes nothing and the next run picks up
    the same documents.
    """

    def __init__(self, db: Optional[Db] = None):
        self.db = db or Db.get_instance()

    def expired_users_query(self, now: datetime):
        return (
            self.db.collections["users"]
            .where(filter=FieldFilter("isPro", "==", True))
            .where(filter=FieldFilter("subscriptionExpiry", "<", now))
        )

    def sweep(self, now: Optional[datetime] = None) -> SweepResult:
        """Run one sweep.

        Raises:
            Exception: Any query or commit failure, with nothing persisted
        """
        now = now or self.db.timestamp_now()
        logger.info("Running scheduled expiry check...")

        batch = self.db.batch()
        count = 0

        for snapshot in self.expired_users_query(now).stream():
            user = UserDocument.from_snapshot(snapshot, db=self.db)
            evaluation = evaluate_expiry(now, user.doc.subscriptionExpiry, user.doc.isPro)
            if evaluation.status is not SubscriptionStatus.EXPIRED:
                continue
            batch.update(snapshot.reference, evaluation.mutation)
            count += 1

        if count == 0:
            logger.info("No expired subscriptions found")
            return {"success": True, "revokedCount": 0}

        batch.commit()
        logger.info(f"Revoked Pro access for {count} expired users")

        return {"success": True, "revokedCount": count}
