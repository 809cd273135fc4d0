"""Pytest configuration and fixtures."""

import os
import sys
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

# Add root to path for main.py and the subscription_backend package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Set environment before any package imports read it
os.environ["GCLOUD_PROJECT"] = "test-project"
os.environ["ENV"] = "test"
os.environ.pop("REVENUECAT_WEBHOOK_SECRET", None)

from subscription_backend.apis.Db import Db  # noqa: E402
from subscription_backend.apis.Identity import Identity  # noqa: E402
from tests.util.fake_firestore import FakeClient, FakeDb  # noqa: E402

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed server time used by the fake store."""
    return NOW


@pytest.fixture
def firestore_client(now):
    """Empty in-memory Firestore."""
    return FakeClient(now=now)


@pytest.fixture
def db(firestore_client):
    """Get test database instance backed by the in-memory store."""
    return FakeDb(firestore_client)


@pytest.fixture(autouse=True)
def cached_db(db):
    """Make Db.get_instance() return the test database for brokers."""
    Db._instances["Db"] = db
    yield db
    Db.reset_instance()


@pytest.fixture
def identity():
    """Identity provider double that hands out sequential uids."""
    mock = MagicMock(spec=Identity)
    uids = iter(f"new-user-{n}" for n in range(1, 1000))
    mock.create_account.side_effect = lambda email, password, display_name: next(uids)
    return mock


@pytest.fixture
def seed_user(firestore_client):
    """Write a user document directly into the store."""
    def _seed(uid: str, **fields):
        data = {"uid": uid, "email": f"{uid}@example.com", "displayName": uid, "isPro": False}
        data.update(fields)
        firestore_client.seed("users", uid, data)
        return data
    return _seed


@pytest.fixture
def read_user(firestore_client):
    """Read a user document back as a dict, or None."""
    def _read(uid: str):
        return firestore_client.read(f"users/{uid}")
    return _read


@pytest.fixture
def test_user_id():
    """Get a test user ID."""
    return "test-user-123"
