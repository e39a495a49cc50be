"""Test configuration and fixtures."""
import os

import pytest

from target_sdk import init

# ---------------------------------------------------------------------------
# Constants (shared with tests)
# ---------------------------------------------------------------------------
TEST_TENANT = "test-tenant"
TEST_API_KEY = "test-apikey"
TEST_TOKEN = "test-token"
BASE_URL = f"https://mc.adobe.io/{TEST_TENANT}/target"


# ---------------------------------------------------------------------------
# TargetClient fixture
# ---------------------------------------------------------------------------


@pytest.fixture
async def api_client():
    """Async TargetClient wired with test credentials."""
    async with await init(TEST_TENANT, TEST_API_KEY, TEST_TOKEN) as client:
        yield client


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep real TARGET_* variables out of unit tests.

    tests/e2e/conftest.py loads tests/e2e/.env into the process at collection.
    """
    for key in [k for k in os.environ if k.startswith("TARGET_")]:
        monkeypatch.delenv(key, raising=False)
