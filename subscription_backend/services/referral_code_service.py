"""Referral code generation."""

import random
from typing import Optional
from google.cloud.firestore_v1.base_query import FieldFilter
from subscription_backend.apis.Db import Db
from subscription_backend.documents.users.User import UserDocument
from subscription_backend.exceptions import CodeGenerationExhausted
from subscription_backend.models.util_types import CodePolicy
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


class ReferralCodeService:
    """Assigns each user one short referral code.

    Uniqueness is check-then-write: a sampled code is used only if a point
    query finds no owner. Two users generating concurrently can still draw the
    same unused code; that window is accepted.
    """

    def __init__(
        self,
        db: Optional[Db] = None,
        policy: Optional[CodePolicy] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize ReferralCodeService.

        Args:
            db: Database to use
            policy: Code length, alphabet and collision retry bound
            rng: Random source; codes need not be unpredictable
        """
        self.db = db or Db.get_instance()
        self.policy = policy or CodePolicy()
        self.rng = rng or random.SystemRandom()

    def sample_code(self) -> str:
        return "".join(self.rng.choice(self.policy.alphabet) for _ in range(self.policy.length))

    def is_code_taken(self, code: str) -> bool:
        existing = (
            self.db.collections["users"]
            .where(filter=FieldFilter("referralCode", "==", code))
            .limit(1)
            .get()
        )
        return len(existing) > 0

    def get_or_create(self, uid: str) -> str:
        """Return the user's referral code, generating and saving one if needed.

        Raises:
            CodeGenerationExhausted: If every sampled code was already taken
        """
        user = UserDocument.find(uid, db=self.db)

        if user is not None and user.doc.referralCode:
            return user.doc.referralCode

        code = None
        for attempt in range(1, self.policy.max_attempts + 1):
            candidate = self.sample_code()
            if not self.is_code_taken(candidate):
                code = candidate
                break
            logger.info(f"Referral code collision on attempt {attempt} for user {uid}")

        if code is None:
            logger.error(f"Failed to generate unique referral code for user {uid} after {self.policy.max_attempts} attempts")
            raise CodeGenerationExhausted(self.policy.max_attempts)

        if user is None:
            user = UserDocument(uid, {}, db=self.db)
        user.set_referral_code(code)

        return code
