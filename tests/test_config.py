"""Tests for TargetSettings and init_from_env.

Tests validate:
1. TARGET_* environment variables populate the settings
2. Empty environment variables fall through to the .env file
3. init_from_env builds a working client or reports every missing credential
"""

import pytest
import respx

from target_sdk import InitializationError, TargetClient, TargetSettings, init_from_env
from target_sdk.operations import SERVER_TEMPLATE

# ---------------------------------------------------------------------------
# Test constants (must match conftest.py)
# ---------------------------------------------------------------------------
TEST_TENANT = "test-tenant"
TEST_API_KEY = "test-apikey"
TEST_TOKEN = "test-token"
BASE_URL = f"https://mc.adobe.io/{TEST_TENANT}/target"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run inside an empty directory so no stray .env file is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(scope="module")
def leaked_transport_env():
    """Transport settings present in the process before each test starts."""
    with pytest.MonkeyPatch.context() as mp:
        mp.setenv("TARGET_SERVER_URL", "https://leaked.example.test/{tenant-name}")
        mp.setenv("TARGET_TIMEOUT_SECONDS", "1")
        yield


def _set_credentials(monkeypatch):
    monkeypatch.setenv("TARGET_TENANT", TEST_TENANT)
    monkeypatch.setenv("TARGET_APIKEY", TEST_API_KEY)
    monkeypatch.setenv("TARGET_TOKEN", TEST_TOKEN)


class TestTargetSettings:
    def test_defaults(self, workdir):
        settings = TargetSettings()
        assert settings.tenant is None
        assert settings.apikey is None
        assert settings.token is None
        assert settings.server_url == SERVER_TEMPLATE
        assert settings.timeout_seconds == 60.0

    def test_defaults_ignore_preloaded_transport_env(self, leaked_transport_env, workdir):
        settings = TargetSettings()
        assert settings.server_url == SERVER_TEMPLATE
        assert settings.timeout_seconds == 60.0

    def test_reads_prefixed_env(self, workdir, monkeypatch):
        _set_credentials(monkeypatch)
        monkeypatch.setenv("TARGET_TIMEOUT_SECONDS", "5")
        settings = TargetSettings()
        assert settings.tenant == TEST_TENANT
        assert settings.apikey == TEST_API_KEY
        assert settings.token == TEST_TOKEN
        assert settings.timeout_seconds == 5.0

    def test_reads_dotenv_file(self, workdir):
        (workdir / ".env").write_text(
            f"TARGET_TENANT={TEST_TENANT}\nTARGET_APIKEY={TEST_API_KEY}\nTARGET_TOKEN={TEST_TOKEN}\n"
        )
        settings = TargetSettings()
        assert settings.tenant == TEST_TENANT
        assert settings.token == TEST_TOKEN

    def test_empty_env_var_falls_back_to_dotenv(self, workdir, monkeypatch):
        (workdir / ".env").write_text(f"TARGET_TOKEN={TEST_TOKEN}\n")
        monkeypatch.setenv("TARGET_TOKEN", "")
        assert TargetSettings().token == TEST_TOKEN

    def test_env_var_wins_over_dotenv(self, workdir, monkeypatch):
        (workdir / ".env").write_text("TARGET_TENANT=from-file\n")
        monkeypatch.setenv("TARGET_TENANT", "from-env")
        assert TargetSettings().tenant == "from-env"


class TestInitFromEnv:
    async def test_success(self, workdir, monkeypatch):
        _set_credentials(monkeypatch)
        async with await init_from_env() as client:
            assert isinstance(client, TargetClient)
            assert client.tenant == TEST_TENANT
            assert client.api_key == TEST_API_KEY
            assert client.token == TEST_TOKEN

    async def test_missing_credentials(self, workdir, monkeypatch):
        monkeypatch.setenv("TARGET_TENANT", TEST_TENANT)
        with pytest.raises(InitializationError) as exc_info:
            await init_from_env()
        assert exc_info.value.missing == ["apiKey", "token"]
        assert str(exc_info.value).endswith("Missing arguments: apiKey, token")

    @respx.mock
    async def test_explicit_settings_used(self, workdir, respx_mock):
        respx_mock.get(f"{BASE_URL}/environments").respond(200, json={"environments": []})
        settings = TargetSettings(tenant=TEST_TENANT, apikey=TEST_API_KEY, token=TEST_TOKEN)
        async with await init_from_env(settings) as client:
            res = await client.get_environments()
        assert res.body == {"environments": []}
        req = respx_mock.calls[0].request
        assert req.headers["x-api-key"] == TEST_API_KEY
        assert req.headers["authorization"] == f"Bearer {TEST_TOKEN}"
