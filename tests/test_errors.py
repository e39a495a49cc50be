"""Tests for SDK initialization and the error taxonomy."""

import copy
import dataclasses
import itertools
import pickle

import pytest

from target_sdk import ErrorCode, InitializationError, TargetClient, TargetSDKError, init

TEST_TENANT = "test-tenant"
TEST_API_KEY = "test-apikey"
TEST_TOKEN = "test-token"

_FIELDS = ("tenant", "apiKey", "token")
_VALUES = (TEST_TENANT, TEST_API_KEY, TEST_TOKEN)


def _missing_combinations():
    """Every non-empty subset of credentials, each missing as None or ''."""
    for mask in itertools.product((True, False), repeat=3):
        if not any(mask):
            continue
        for blank in (None, ""):
            args = [blank if missing else value for missing, value in zip(mask, _VALUES)]
            expected = [name for missing, name in zip(mask, _FIELDS) if missing]
            yield pytest.param(args, expected, id=f"{'-'.join(expected)}-{blank!r}")


class TestInit:
    async def test_init_success(self):
        async with await init(TEST_TENANT, TEST_API_KEY, TEST_TOKEN) as client:
            assert isinstance(client, TargetClient)
            assert client.tenant == TEST_TENANT
            assert client.api_key == TEST_API_KEY
            assert client.token == TEST_TOKEN

    @pytest.mark.parametrize("args,expected", list(_missing_combinations()))
    async def test_init_lists_every_missing_argument(self, args, expected):
        with pytest.raises(InitializationError) as exc_info:
            await init(*args)
        err = exc_info.value
        assert err.code is ErrorCode.ERROR_SDK_INITIALIZATION
        assert err.missing == expected
        assert str(err) == (
            "[TargetSDK:ERROR_SDK_INITIALIZATION] SDK initialization error(s). "
            f"Missing arguments: {', '.join(expected)}"
        )

    async def test_init_missing_tenant_message(self):
        with pytest.raises(TargetSDKError, match=r"Missing arguments: tenant$"):
            await init(None, TEST_API_KEY, TEST_TOKEN)

    async def test_init_missing_all_message(self):
        with pytest.raises(
            InitializationError, match=r"Missing arguments: tenant, apiKey, token$"
        ):
            await init("", "", "")

    async def test_session_is_immutable(self):
        async with await init(TEST_TENANT, TEST_API_KEY, TEST_TOKEN) as client:
            with pytest.raises(dataclasses.FrozenInstanceError):
                client.session.tenant = "other"
            with pytest.raises(AttributeError):
                client.token = "other"

    async def test_session_repr_hides_secrets(self):
        async with await init(TEST_TENANT, TEST_API_KEY, TEST_TOKEN) as client:
            text = repr(client.session)
            assert TEST_TENANT in text
            assert TEST_TOKEN not in text
            assert TEST_API_KEY not in text


class TestTargetSDKError:
    def test_fields(self):
        cause = RuntimeError("boom")
        err = TargetSDKError(
            ErrorCode.ERROR_GET_AB_ACTIVITY_BY_ID,
            "HTTP 404: Not Found",
            sdk_details={"id": 123},
            cause=cause,
            status_code=404,
        )
        assert err.name == "TargetSDKError"
        assert err.sdk == "TargetSDK"
        assert err.code == "ERROR_GET_AB_ACTIVITY_BY_ID"
        assert err.sdk_details == {"id": 123}
        assert err.cause is cause
        assert str(err) == "[TargetSDK:ERROR_GET_AB_ACTIVITY_BY_ID] HTTP 404: Not Found"

    def test_code_accepts_string(self):
        err = TargetSDKError("ERROR_EXECUTE_BATCH", "x")
        assert err.code is ErrorCode.ERROR_EXECUTE_BATCH

    def test_message_with_percent_sign(self):
        err = TargetSDKError(ErrorCode.ERROR_GET_OFFERS, "100% failed")
        assert err.message.endswith("100% failed")

    def test_to_dict(self):
        err = TargetSDKError(
            ErrorCode.ERROR_DELETE_OFFER, "HTTP 500: boom", {"id": 1}, status_code=500
        )
        assert err.to_dict() == {
            "name": "TargetSDKError",
            "sdk": "TargetSDK",
            "code": "ERROR_DELETE_OFFER",
            "message": "[TargetSDK:ERROR_DELETE_OFFER] HTTP 500: boom",
            "sdk_details": {"id": 1},
            "status_code": 500,
        }

    def test_initialization_error_is_target_error(self):
        err = InitializationError(["token"])
        assert isinstance(err, TargetSDKError)
        assert err.sdk_details == {"missing": ["token"]}

    def test_pickle_keeps_fields(self):
        err = TargetSDKError(
            ErrorCode.ERROR_GET_OFFERS,
            "HTTP 500: x",
            sdk_details={"limit": 10},
            status_code=500,
        )
        restored = pickle.loads(pickle.dumps(err))
        assert type(restored) is TargetSDKError
        assert restored.code is ErrorCode.ERROR_GET_OFFERS
        assert restored.message == err.message
        assert restored.sdk_details == {"limit": 10}
        assert restored.status_code == 500

    def test_copy_keeps_fields(self):
        err = TargetSDKError(ErrorCode.ERROR_EXECUTE_BATCH, "Request failed: boom")
        clone = copy.copy(err)
        assert clone.code is ErrorCode.ERROR_EXECUTE_BATCH
        assert str(clone) == str(err)

    def test_initialization_error_pickles(self):
        err = InitializationError(["apiKey", "token"])
        restored = pickle.loads(pickle.dumps(err))
        assert type(restored) is InitializationError
        assert restored.missing == ["apiKey", "token"]
        assert str(restored) == str(err)
