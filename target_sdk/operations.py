"""
Static operation catalog for the Target Admin API.

Each logical operation maps to one ``OperationDescriptor`` holding the HTTP
verb, the path template (relative to the tenant server), the media-type
profile used for content negotiation and the error code raised on failure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from target_sdk.errors import ErrorCode

SERVER_TEMPLATE = "https://mc.adobe.io/{tenant-name}/target"
TENANT_VARIABLE = "tenant-name"

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")

PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


class AcceptVersion(str, Enum):
    V1 = "V1"
    V2 = "V2"
    V3 = "V3"


ACCEPT_HEADERS: Dict[AcceptVersion, str] = {
    AcceptVersion.V1: "application/vnd.adobe.target.v1+json",
    AcceptVersion.V2: "application/vnd.adobe.target.v2+json",
    AcceptVersion.V3: "application/vnd.adobe.target.v3+json",
}


@dataclass(frozen=True)
class OperationDescriptor:
    """How to build the request for one logical operation."""

    name: str
    method: str
    path: str
    accept_version: AcceptVersion
    error_code: ErrorCode
    path_params: Tuple[str, ...] = ()
    requires_body: bool = False
    paginated: bool = False

    @property
    def placeholders(self) -> Tuple[str, ...]:
        return tuple(PLACEHOLDER_RE.findall(self.path))

    @property
    def media_type(self) -> str:
        return ACCEPT_HEADERS[self.accept_version]


def _op(
    name: str,
    method: str,
    path: str,
    version: AcceptVersion,
    code: ErrorCode,
    *,
    params: Tuple[str, ...] = (),
    body: bool = False,
    paginated: bool = False,
) -> OperationDescriptor:
    return OperationDescriptor(
        name=name,
        method=method,
        path=path,
        accept_version=version,
        error_code=code,
        path_params=params,
        requires_body=body,
        paginated=paginated,
    )


V1, V2, V3 = AcceptVersion.V1, AcceptVersion.V2, AcceptVersion.V3
ID = ("id",)

_CATALOG = (
    # -- activities --
    _op("get_activities", "GET", "/activities", V3,
        ErrorCode.ERROR_GET_ACTIVITIES, paginated=True),
    _op("create_ab_activity", "POST", "/activities/ab", V3,
        ErrorCode.ERROR_CREATE_AB_ACTIVITY, body=True),
    _op("create_xt_activity", "POST", "/activities/xt", V3,
        ErrorCode.ERROR_CREATE_XT_ACTIVITY, body=True),
    _op("get_ab_activity_by_id", "GET", "/activities/ab/{id}", V3,
        ErrorCode.ERROR_GET_AB_ACTIVITY_BY_ID, params=ID),
    _op("get_xt_activity_by_id", "GET", "/activities/xt/{id}", V3,
        ErrorCode.ERROR_GET_XT_ACTIVITY_BY_ID, params=ID),
    _op("update_ab_activity", "PUT", "/activities/ab/{id}", V3,
        ErrorCode.ERROR_UPDATE_AB_ACTIVITY, params=ID, body=True),
    _op("update_xt_activity", "PUT", "/activities/xt/{id}", V3,
        ErrorCode.ERROR_UPDATE_XT_ACTIVITY, params=ID, body=True),
    _op("set_activity_name", "PUT", "/activities/{id}/name", V1,
        ErrorCode.ERROR_SET_ACTIVITY_NAME, params=ID, body=True),
    _op("set_activity_state", "PUT", "/activities/{id}/state", V1,
        ErrorCode.ERROR_SET_ACTIVITY_STATE, params=ID, body=True),
    _op("set_activity_priority", "PUT", "/activities/{id}/priority", V1,
        ErrorCode.ERROR_SET_ACTIVITY_PRIORITY, params=ID, body=True),
    _op("set_activity_schedule", "PUT", "/activities/{id}/schedule", V1,
        ErrorCode.ERROR_SET_ACTIVITY_SCHEDULE, params=ID, body=True),
    _op("delete_ab_activity", "DELETE", "/activities/ab/{id}", V3,
        ErrorCode.ERROR_DELETE_AB_ACTIVITY, params=ID),
    _op("delete_xt_activity", "DELETE", "/activities/xt/{id}", V3,
        ErrorCode.ERROR_DELETE_XT_ACTIVITY, params=ID),
    _op("get_activity_changelog", "GET", "/activities/{id}/changelog", V1,
        ErrorCode.ERROR_GET_ACTIVITY_CHANGELOG, params=ID),
    # -- offers --
    _op("get_offers", "GET", "/offers", V2,
        ErrorCode.ERROR_GET_OFFERS, paginated=True),
    _op("get_offer_by_id", "GET", "/offers/content/{id}", V2,
        ErrorCode.ERROR_GET_OFFER_BY_ID, params=ID),
    _op("create_offer", "POST", "/offers/content", V2,
        ErrorCode.ERROR_CREATE_OFFER, body=True),
    _op("update_offer", "PUT", "/offers/content/{id}", V2,
        ErrorCode.ERROR_UPDATE_OFFER, params=ID, body=True),
    _op("delete_offer", "DELETE", "/offers/content/{id}", V2,
        ErrorCode.ERROR_DELETE_OFFER, params=ID),
    # -- audiences --
    _op("get_audiences", "GET", "/audiences", V3,
        ErrorCode.ERROR_GET_AUDIENCES, paginated=True),
    _op("create_audience", "POST", "/audiences", V3,
        ErrorCode.ERROR_CREATE_AUDIENCE, body=True),
    _op("get_audience_by_id", "GET", "/audiences/{id}", V3,
        ErrorCode.ERROR_GET_AUDIENCE_BY_ID, params=ID),
    _op("update_audience", "PUT", "/audiences/{id}", V3,
        ErrorCode.ERROR_UPDATE_AUDIENCE, params=ID, body=True),
    _op("delete_audience", "DELETE", "/audiences/{id}", V3,
        ErrorCode.ERROR_DELETE_AUDIENCE, params=ID),
    # -- properties --
    _op("get_properties", "GET", "/properties", V2,
        ErrorCode.ERROR_GET_PROPERTIES),
    _op("get_property_by_id", "GET", "/properties/{id}", V2,
        ErrorCode.ERROR_GET_PROPERTY_BY_ID, params=ID),
    # -- mboxes --
    _op("get_mboxes", "GET", "/mboxes", V2,
        ErrorCode.ERROR_GET_MBOXES),
    _op("get_mbox_by_name", "GET", "/mbox/{mboxName}", V2,
        ErrorCode.ERROR_GET_MBOX_BY_NAME, params=("mboxName",)),
    _op("get_mbox_profile_attributes", "GET", "/profileattributes/mbox", V2,
        ErrorCode.ERROR_GET_MBOX_PROFILE_ATTRIBUTES),
    # -- environments --
    _op("get_environments", "GET", "/environments", V1,
        ErrorCode.ERROR_GET_ENVIRONMENTS),
    # -- reports --
    _op("get_ab_activity_performance", "GET",
        "/activities/ab/{id}/report/performance", V1,
        ErrorCode.ERROR_GET_AB_ACTIVITY_PERFORMANCE, params=ID),
    _op("get_xt_activity_performance", "GET",
        "/activities/xt/{id}/report/performance", V1,
        ErrorCode.ERROR_GET_XT_ACTIVITY_PERFORMANCE, params=ID),
    _op("get_activity_performance", "GET",
        "/activities/abt/{id}/report/performance", V1,
        ErrorCode.ERROR_GET_ACTIVITY_PERFORMANCE, params=ID),
    _op("get_orders_report", "GET", "/activities/ab/{id}/report/orders", V1,
        ErrorCode.ERROR_GET_ORDERS_REPORT, params=ID),
    # -- batch --
    _op("execute_batch", "POST", "/batch", V1,
        ErrorCode.ERROR_EXECUTE_BATCH, body=True),
)

OPERATIONS: Dict[str, OperationDescriptor] = {op.name: op for op in _CATALOG}


class CatalogError(ValueError):
    """The operation catalog is inconsistent."""


def get_operation(name: str) -> OperationDescriptor:
    try:
        return OPERATIONS[name]
    except KeyError:
        raise CatalogError(f"Unknown operation: {name}") from None


def validate_catalog(
    operations: Tuple[OperationDescriptor, ...] = _CATALOG,
) -> None:
    """Check the catalog once, before any request is built.

    Raises ``CatalogError`` on duplicate names or error codes, unsupported
    verbs, or path placeholders that are not plain parameter names or do not
    match the declared path parameters.
    """
    seen_names: set[str] = set()
    seen_codes: set[ErrorCode] = set()
    for op in operations:
        if op.name in seen_names:
            raise CatalogError(f"Duplicate operation name: {op.name}")
        seen_names.add(op.name)

        if not isinstance(op.error_code, ErrorCode):
            raise CatalogError(f"{op.name}: unknown error code {op.error_code!r}")
        if op.error_code is ErrorCode.ERROR_SDK_INITIALIZATION:
            raise CatalogError(f"{op.name}: initialization code is reserved")
        if op.error_code in seen_codes:
            raise CatalogError(f"Duplicate error code: {op.error_code.value}")
        seen_codes.add(op.error_code)

        if op.method not in ALLOWED_METHODS:
            raise CatalogError(f"{op.name}: unsupported method {op.method}")
        if not op.path.startswith("/"):
            raise CatalogError(f"{op.name}: path must start with '/'")
        for param in op.placeholders:
            if not param.isidentifier():
                raise CatalogError(f"{op.name}: invalid path parameter {param!r}")
        if op.placeholders != tuple(op.path_params):
            raise CatalogError(
                f"{op.name}: path parameters {op.placeholders} do not match "
                f"declared {tuple(op.path_params)}"
            )
        if op.requires_body and op.method not in ("POST", "PUT"):
            raise CatalogError(f"{op.name}: {op.method} cannot carry a body")
