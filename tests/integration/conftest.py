import os
import uuid
from collections.abc import Generator

import pytest

from lexigem.config.settings import Settings
from lexigem.persistence.connection import close_client, init_client


def _test_settings() -> Settings:
    os.environ.setdefault("SUPABASE_STORAGE_BUCKET", "documents")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    settings = _test_settings()
    if not settings.supabase_url or not settings.supabase_api_key:
        pytest.skip("Supabase not configured. Set SUPABASE_URL and SUPABASE_API_KEY")
    return settings


@pytest.fixture(scope="session")
def supabase_client(test_settings: Settings) -> Generator[None, None, None]:
    init_client(test_settings)
    try:
        yield
    finally:
        close_client()


@pytest.fixture(scope="session")
def owner_id() -> str:
    """User ID owning the rows created by the integration tests.

    Row level security ties rows to auth.users, so a real user ID is needed.
    """
    value = os.environ.get("SUPABASE_TEST_USER_ID")
    if not value:
        pytest.skip("Set SUPABASE_TEST_USER_ID to an existing auth user")
    return value


@pytest.fixture
def session_id() -> str:
    return str(uuid.uuid4())
