"""Identity provider operations backed by Firebase Authentication."""

from typing import Any, Optional
from firebase_admin import auth

from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)


class Identity:
    """Create and delete accounts in Firebase Authentication.

    Account creation is not transactional with Firestore; callers that pair it
    with a document write must compensate with ``delete_account`` on failure.
    """

    def __init__(self, app: Optional[Any] = None):
        """Initialize Identity.

        Args:
            app: Optional firebase_admin App; the default app is used otherwise
        """
        self.app = app

    def create_account(self, email: str, password: str, display_name: str) -> str:
        """Create an account and return its uid.

        Raises:
            firebase_admin.exceptions.FirebaseError: If the provider rejects the account
        """
        record = auth.create_user(
            email=email,
            password=password,
            display_name=display_name,
            app=self.app,
        )
        logger.info(f"Created auth account {record.uid}")
        return record.uid

    def delete_account(self, uid: str) -> None:
        """Delete an account by uid."""
        auth.delete_user(uid, app=self.app)
        logger.info(f"Deleted auth account {uid}")
