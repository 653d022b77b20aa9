"""Pytest configuration and fixtures."""

import os

import pytest

from routinelog.config.env_loader import load_environment

# Load environment variables from .env.local first, then .env
load_environment('.env.local' if os.path.exists('.env.local') else None)

from routinelog.apis.Db import Db
from routinelog.config.loader import load_app_config
from tests.util.fake_firestore import FakeFirestore
from tests.util.test_env import emulator_available


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless the Firestore emulator is configured."""
    if emulator_available():
        return
    skip = pytest.mark.skip(reason="FIRESTORE_EMULATOR_HOST not set")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def fake_client():
    """In-memory Firestore client."""
    client = FakeFirestore()
    yield client
    client.close()


@pytest.fixture
def db(fake_client):
    """Database handle over the in-memory client."""
    return Db(client=fake_client)


@pytest.fixture(scope="session")
def app_config():
    """Settings loaded from the packaged settings.yaml."""
    return load_app_config()


@pytest.fixture
def test_user_id():
    """Get a test user ID."""
    return "test-user-123"


@pytest.fixture
def friend_user_id():
    return "test-user-456"
