"""User profile document class."""

from datetime import datetime
from typing import Optional
from subscription_backend.apis.Db import Db
from subscription_backend.documents.DocumentBase import DocumentBase
from subscription_backend.models.firestore_types import UserDoc
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


class UserDocument(DocumentBase[UserDoc]):
    """User profile stored at users/{uid}."""

    collection_name = "users"
    pydantic_model = UserDoc

    def __init__(self, id: str, doc: Optional[dict] = None, db: Optional[Db] = None):
        super().__init__(id, doc, db)

    @property
    def doc(self) -> UserDoc:
        """Get the typed document."""
        return super().doc

    def set_referral_code(self, code: str):
        """Persist the user's own referral code without touching other fields."""
        self.merge_doc({"referralCode": code})
        logger.info(f"Generated referral code {code} for user {self.id}")

    def revoke_pro(self, expired_at: datetime):
        """Remove Pro access after the subscription expired."""
        self.update_doc({"isPro": False, "expiredAt": expired_at})
        logger.info(f"Revoked Pro access for user {self.id} - subscription expired")
