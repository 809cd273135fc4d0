"""Project database class with Firestore operations."""

import logging
from typing import Any, Callable, Dict, Optional, TypeVar
from firebase_admin import firestore

from subscription_backend.config.env_loader import get_environment_name
from subscription_backend.util import time_utils

T = TypeVar("T")


class Db:
    """Firestore access shared by the services.

    ``Db.get_instance()`` caches one instance per class for the deployed
    functions. Services never reach for it directly when a ``db`` was passed to
    them, so tests build isolated instances around their own client.
    """
    _instances: Dict[str, "Db"] = {}
    server_timestamp = firestore.firestore.SERVER_TIMESTAMP

    collections: Dict[str, Any] = {}

    def __init__(self, firestore_client: Optional[Any] = None):
        """Initialize the database around a Firestore client.

        Args:
            firestore_client: Client to use; defaults to the Admin SDK client
        """
        self._init_firestore(firestore_client)
        self._init_collections()

    def _init_firestore(self, firestore_client: Optional[Any] = None):
        """Initialize Firestore client and base configuration."""
        self.firestore = firestore_client if firestore_client is not None else firestore.client()
        self.logger = logging.getLogger("firebase-functions")
        self.logger.info("Firestore initialized")

    def _init_collections(self):
        """Initialize collection references."""
        self.collections = {
            "users": self.firestore.collection("users"),
        }

    @classmethod
    def get_instance(cls):
        """Get or create the cached instance for this class"""
        if cls.__name__ not in cls._instances:
            cls._instances[cls.__name__] = cls()
        return cls._instances[cls.__name__]

    @classmethod
    def reset_instance(cls):
        """Drop the cached instance so the next get_instance() builds a new one."""
        cls._instances.pop(cls.__name__, None)

    # Transaction functions
    def run_transaction(self, callback: Callable[[Any], T], max_attempts: int = 5) -> T:
        """Run ``callback(transaction)`` inside one read-write transaction.

        All reads in the callback must happen before its writes. The store
        retries the callback on contention up to ``max_attempts`` times and
        either commits every buffered write or none of them.
        """
        transaction = self.firestore.transaction(max_attempts=max_attempts)

        @firestore.firestore.transactional
        def _run(transaction):
            return callback(transaction)

        return _run(transaction)

    def batch(self):
        """Create an atomic write batch."""
        return self.firestore.batch()

    # Environment
    @staticmethod
    def is_development():
        """Check if running in development environment"""
        return get_environment_name() == "development"

    # Timestamp functions
    @staticmethod
    def timestamp_now():
        return time_utils.now()
