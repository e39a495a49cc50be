"""
Error taxonomy for the Target SDK.

Every operation has exactly one error code. Failures are always raised as
``TargetSDKError`` carrying that code, so callers branch on ``err.code``
rather than on message text.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

SDK_NAME = "TargetSDK"
ERROR_CLASS_NAME = "TargetSDKError"


class ErrorCode(str, Enum):
    ERROR_SDK_INITIALIZATION = "ERROR_SDK_INITIALIZATION"
    ERROR_GET_ACTIVITIES = "ERROR_GET_ACTIVITIES"
    ERROR_CREATE_AB_ACTIVITY = "ERROR_CREATE_AB_ACTIVITY"
    ERROR_CREATE_XT_ACTIVITY = "ERROR_CREATE_XT_ACTIVITY"
    ERROR_GET_AB_ACTIVITY_BY_ID = "ERROR_GET_AB_ACTIVITY_BY_ID"
    ERROR_GET_XT_ACTIVITY_BY_ID = "ERROR_GET_XT_ACTIVITY_BY_ID"
    ERROR_UPDATE_AB_ACTIVITY = "ERROR_UPDATE_AB_ACTIVITY"
    ERROR_UPDATE_XT_ACTIVITY = "ERROR_UPDATE_XT_ACTIVITY"
    ERROR_SET_ACTIVITY_NAME = "ERROR_SET_ACTIVITY_NAME"
    ERROR_SET_ACTIVITY_STATE = "ERROR_SET_ACTIVITY_STATE"
    ERROR_SET_ACTIVITY_PRIORITY = "ERROR_SET_ACTIVITY_PRIORITY"
    ERROR_SET_ACTIVITY_SCHEDULE = "ERROR_SET_ACTIVITY_SCHEDULE"
    ERROR_DELETE_AB_ACTIVITY = "ERROR_DELETE_AB_ACTIVITY"
    ERROR_DELETE_XT_ACTIVITY = "ERROR_DELETE_XT_ACTIVITY"
    ERROR_GET_ACTIVITY_CHANGELOG = "ERROR_GET_ACTIVITY_CHANGELOG"
    ERROR_GET_OFFERS = "ERROR_GET_OFFERS"
    ERROR_GET_OFFER_BY_ID = "ERROR_GET_OFFER_BY_ID"
    ERROR_CREATE_OFFER = "ERROR_CREATE_OFFER"
    ERROR_UPDATE_OFFER = "ERROR_UPDATE_OFFER"
    ERROR_DELETE_OFFER = "ERROR_DELETE_OFFER"
    ERROR_GET_AUDIENCES = "ERROR_GET_AUDIENCES"
    ERROR_CREATE_AUDIENCE = "ERROR_CREATE_AUDIENCE"
    ERROR_GET_AUDIENCE_BY_ID = "ERROR_GET_AUDIENCE_BY_ID"
    ERROR_UPDATE_AUDIENCE = "ERROR_UPDATE_AUDIENCE"
    ERROR_DELETE_AUDIENCE = "ERROR_DELETE_AUDIENCE"
    ERROR_GET_PROPERTIES = "ERROR_GET_PROPERTIES"
    ERROR_GET_PROPERTY_BY_ID = "ERROR_GET_PROPERTY_BY_ID"
    ERROR_GET_MBOXES = "ERROR_GET_MBOXES"
    ERROR_GET_MBOX_BY_NAME = "ERROR_GET_MBOX_BY_NAME"
    ERROR_GET_MBOX_PROFILE_ATTRIBUTES = "ERROR_GET_MBOX_PROFILE_ATTRIBUTES"
    ERROR_GET_ENVIRONMENTS = "ERROR_GET_ENVIRONMENTS"
    ERROR_GET_AB_ACTIVITY_PERFORMANCE = "ERROR_GET_AB_ACTIVITY_PERFORMANCE"
    ERROR_GET_XT_ACTIVITY_PERFORMANCE = "ERROR_GET_XT_ACTIVITY_PERFORMANCE"
    ERROR_GET_ACTIVITY_PERFORMANCE = "ERROR_GET_ACTIVITY_PERFORMANCE"
    ERROR_GET_ORDERS_REPORT = "ERROR_GET_ORDERS_REPORT"
    ERROR_EXECUTE_BATCH = "ERROR_EXECUTE_BATCH"


# Message templates, filled with a single ``%s`` argument.
MESSAGES: Dict[ErrorCode, str] = {
    code: "%s" for code in ErrorCode
}
MESSAGES[ErrorCode.ERROR_SDK_INITIALIZATION] = (
    "SDK initialization error(s). Missing arguments: %s"
)


class TargetSDKError(Exception):
    """A failed SDK call, tagged with the error code of the operation."""

    name = ERROR_CLASS_NAME
    sdk = SDK_NAME

    def __init__(
        self,
        code: ErrorCode,
        message_value: Any = "",
        sdk_details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
    ):
        self.code = ErrorCode(code)
        self.message_value = message_value
        self.message = f"[{self.sdk}:{self.code.value}] " + (
            MESSAGES[self.code] % (message_value,)
        )
        super().__init__(self.message)
        self.sdk_details = sdk_details or {}
        self.cause = cause
        self.status_code = status_code

    def __reduce__(self):
        # args only holds the formatted message; rebuild from the inputs.
        return (
            type(self),
            (self.code, self.message_value, self.sdk_details, self.cause, self.status_code),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "sdk": self.sdk,
            "code": self.code.value,
            "message": self.message,
        }
        if self.sdk_details:
            result["sdk_details"] = self.sdk_details
        if self.status_code is not None:
            result["status_code"] = self.status_code
        return result


class InitializationError(TargetSDKError):
    """Raised when one or more credentials are missing at initialization."""

    def __init__(self, missing: List[str]):
        super().__init__(
            ErrorCode.ERROR_SDK_INITIALIZATION,
            ", ".join(missing),
            sdk_details={"missing": list(missing)},
        )
        self.missing = list(missing)

    def __reduce__(self):
        return (type(self), (self.missing,))
