"""Account creation with referral redemption."""

from datetime import datetime
from typing import Any, Dict, Optional
from google.cloud.firestore_v1.base_query import FieldFilter
from subscription_backend.apis.Db import Db
from subscription_backend.apis.Identity import Identity
from subscription_backend.exceptions import InternalError, ValidationError
from subscription_backend.documents.users.User import UserDocument
from subscription_backend.models.function_types import SignUpResponse
from subscription_backend.models.util_types import ReferralPolicy
from subscription_backend.services import referral_ledger
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


class SignupService:
    """Creates an account and its profile, applying a referral atomically.

    The auth account is created first, outside any transaction. The profile
    document and the referrer update are then written by one Firestore
    transaction. If that transaction fails the auth account is deleted again,
    so a profile never exists without an account and a referral is never
    visible on only one side.
    """

    def __init__(
        self,
        db: Optional[Db] = None,
        identity: Optional[Identity] = None,
        policy: Optional[ReferralPolicy] = None,
    ):
        self.db = db or Db.get_instance()
        self.identity = identity or Identity()
        self.policy = policy or ReferralPolicy()

    @staticmethod
    def validate(email: Any, password: Any, display_name: Any) -> None:
        """Reject missing or blank signup fields before anything is created."""
        for field_name, value in (("email", email), ("password", password), ("displayName", display_name)):
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(
                    "Email, password, and display name are required",
                    field=field_name,
                )

    def sign_up(
        self,
        email: str,
        password: str,
        display_name: str,
        referral_code: Optional[str] = None,
    ) -> SignUpResponse:
        """Create the account, then the profile and referral in one transaction.

        Raises:
            ValidationError: If a required field is missing; nothing is created
            InternalError: If account creation or the transaction failed, after
                the account (if any) was deleted
        """
        self.validate(email, password, display_name)

        uid = None
        try:
            uid = self.identity.create_account(email, password, display_name)

            self.db.run_transaction(
                lambda transaction: self._create_profile(
                    transaction, uid, email, display_name, referral_code
                )
            )

            logger.info(f"User {uid} created successfully with email {email}")

            return {"success": True, "uid": uid, "email": email}

        except Exception as e:
            logger.error(f"Sign up failed: {e}")

            if uid:
                self._rollback_account(uid)

            raise InternalError(str(e) or "Sign up failed", cause=e) from e

    def _rollback_account(self, uid: str) -> None:
        """Delete the auth account of a signup whose profile was not written."""
        try:
            self.identity.delete_account(uid)
            logger.info(f"Rolled back auth user {uid}")
        except Exception as delete_error:
            logger.error(
                f"Failed to rollback auth user {uid}: {delete_error}. "
                f"Leaked account requires manual reconciliation"
            )

    def _create_profile(
        self,
        transaction,
        uid: str,
        email: str,
        display_name: str,
        referral_code: Optional[str],
    ) -> Dict[str, Any]:
        """Transaction body: build the profile, apply the referral, write both."""
        users = self.db.collections["users"]
        user_ref = users.document(uid)

        profile: Dict[str, Any] = {
            "uid": uid,
            "email": email,
            "displayName": display_name,
            "createdAt": self.db.server_timestamp,
            "isPro": False,
        }

        # Self-referral keeps the code and counters already in users/{uid}
        merge_existing = False

        code = referral_ledger.normalize_referral_code(referral_code)
        if code:
            # All transactional reads happen before the writes below
            referrer_snapshot = self._read_referrer(transaction, code)

            if referrer_snapshot is not None:
                if referrer_snapshot.id == uid:
                    logger.info(f"Skipped self-referral with code {code} for user {uid}")
                    merge_existing = True
                else:
                    self._apply_referral(
                        transaction,
                        profile,
                        referrer_snapshot,
                        code,
                        uid,
                        self.db.timestamp_now(),
                    )

        transaction.set(user_ref, profile, merge=merge_existing)
        return profile

    def _read_referrer(self, transaction, code: str):
        """Find the code owner, then read its document inside the transaction."""
        matches = (
            self.db.collections["users"]
            .where(filter=FieldFilter("referralCode", "==", code))
            .limit(1)
            .get()
        )

        if not matches:
            logger.info(f"Referral code {code} not found")
            return None

        referrer_snapshot = matches[0].reference.get(transaction=transaction)
        if not referrer_snapshot.exists:
            logger.info(f"Referrer for code {code} no longer exists")
            return None

        return referrer_snapshot

    def _apply_referral(
        self,
        transaction,
        profile: Dict[str, Any],
        referrer_snapshot,
        code: str,
        uid: str,
        now: datetime,
    ) -> None:
        referrer = UserDocument.from_snapshot(referrer_snapshot, db=self.db)
        outcome = referral_ledger.apply_referral(
            referrer.id, referrer.doc, code, now, self.policy
        )

        profile.update(outcome.referee_grant)
        profile["referralAppliedAt"] = self.db.server_timestamp

        transaction.update(referrer_snapshot.reference, outcome.referrer_update)

        if outcome.reward_granted:
            logger.info(
                f"Granted referrer {referrer_snapshot.id} +{self.policy.reward_days} days "
                f"(reward #{outcome.reward_number})"
            )
        elif outcome.cap_reached:
            logger.info(f"Referrer {referrer_snapshot.id} hit reward cap")

        logger.info(f"Applied referral {code} for user {uid}")
