"""
Adobe Target Admin API client — async httpx.

One coroutine per catalog operation. Requests are assembled by
``request_builder`` and dispatched over a shared ``httpx.AsyncClient``;
any failure is re-raised as ``TargetSDKError`` carrying the operation's
error code, the parameters that were sent and the original exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from target_sdk.config import DEFAULT_TIMEOUT_SECONDS, TargetSettings
from target_sdk.errors import InitializationError, TargetSDKError
from target_sdk.operations import SERVER_TEMPLATE, get_operation, validate_catalog
from target_sdk.request_builder import RequestDescriptor, TargetResponse, build_request
from target_sdk.schemas import ListOptions

logger = logging.getLogger(__name__)

Headers = Optional[Mapping[str, str]]


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Session:
    """Credentials bound to a client for its whole lifetime."""

    tenant: str
    api_key: str = field(repr=False)
    token: str = field(repr=False)


def missing_credentials(
    tenant: Optional[str], api_key: Optional[str], token: Optional[str]
) -> List[str]:
    """Names of the missing credentials, always in tenant, apiKey, token order."""
    fields = (("tenant", tenant), ("apiKey", api_key), ("token", token))
    return [name for name, value in fields if not value]


# ---------------------------------------------------------------------------
# BaseTargetClient — request dispatch and error normalization
# ---------------------------------------------------------------------------

class BaseTargetClient:
    """Builds, sends and normalizes one request per operation call."""

    def __init__(
        self,
        session: Session,
        http_client: Optional[httpx.AsyncClient] = None,
        server_url: str = SERVER_TEMPLATE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._session = session
        self.server_url = server_url
        # A caller-supplied client stays owned by the caller.
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    # -- read-only session --

    @property
    def session(self) -> Session:
        return self._session

    @property
    def tenant(self) -> str:
        return self._session.tenant

    @property
    def api_key(self) -> str:
        return self._session.api_key

    @property
    def token(self) -> str:
        return self._session.token

    # -- helpers --

    @staticmethod
    def _describe_failure(exc: Exception) -> Tuple[str, Optional[int]]:
        """Human-readable cause and HTTP status (if any) of a failed call."""
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            return f"HTTP {status}: {exc.response.text[:500]}", status
        if isinstance(exc, httpx.RequestError):
            return f"Request failed: {exc}", None
        return str(exc), None

    def _build(
        self,
        name: str,
        path_params: Optional[Dict[str, Any]],
        query: Optional[Dict[str, Any]],
        body: Any,
        headers: Headers,
    ) -> RequestDescriptor:
        return build_request(
            get_operation(name),
            tenant=self._session.tenant,
            api_key=self._session.api_key,
            token=self._session.token,
            path_params=path_params,
            query=query,
            body=body,
            headers=headers,
            server_template=self.server_url,
        )

    async def _send(self, request: RequestDescriptor) -> TargetResponse:
        url = request.url
        logger.debug(f"{request.method} {url} ({request.operation})")
        resp = await self._http.request(
            request.method,
            url,
            params=request.query or None,
            json=request.request_body,
            headers=request.headers,
        )
        resp.raise_for_status()
        return TargetResponse.from_httpx(resp)

    # -- core request method --

    async def _call(
        self,
        name: str,
        *,
        path_params: Optional[Dict[str, Any]] = None,
        list_options: Optional[Dict[str, Any]] = None,
        body: Any = None,
        headers: Headers = None,
    ) -> TargetResponse:
        op = get_operation(name)
        details: Dict[str, Any] = dict(path_params or {})
        if body is not None:
            details["body"] = body

        try:
            query: Dict[str, Any] = {}
            if op.paginated:
                query = ListOptions.build(**(list_options or {})).to_query()
                details.update(query)
            request = self._build(name, path_params, query, body, headers)
            return await self._send(request)
        except Exception as exc:
            message, status = self._describe_failure(exc)
            logger.warning(f"Error while calling Adobe Target {name} - {message}")
            raise TargetSDKError(
                op.error_code,
                message,
                sdk_details=details,
                cause=exc,
                status_code=status,
            ) from exc

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # context-manager support
    async def __aenter__(self) -> "BaseTargetClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()


# ---------------------------------------------------------------------------
# TargetClient — one method per operation
# ---------------------------------------------------------------------------

class TargetClient(BaseTargetClient):
    """Adobe Target Admin API: activities, offers, audiences, properties,
    mboxes, environments, reports and batch execution."""

    # -- activities --

    async def get_activities(
        self,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort_by: Optional[str] = None,
        headers: Headers = None,
    ) -> TargetResponse:
        """List activities, with optional pagination and sorting.

        ``limit`` defaults to 2147483647 and ``offset`` to 0, matching the API.
        """
        return await self._call(
            "get_activities",
            list_options={"limit": limit, "offset": offset, "sort_by": sort_by},
            headers=headers,
        )

    async def create_ab_activity(
        self, body: Dict[str, Any], *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call("create_ab_activity", body=body, headers=headers)

    async def create_xt_activity(
        self, body: Dict[str, Any], *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call("create_xt_activity", body=body, headers=headers)

    async def get_ab_activity_by_id(
        self, activity_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "get_ab_activity_by_id",
            path_params={"id": activity_id},
            headers=headers,
        )

    async def get_xt_activity_by_id(
        self, activity_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "get_xt_activity_by_id",
            path_params={"id": activity_id},
            headers=headers,
        )

    async def update_ab_activity(
        self, activity_id: int, body: Dict[str, Any], *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "update_ab_activity",
            path_params={"id": activity_id},
            body=body,
            headers=headers,
        )

    async def update_xt_activity(
        self, activity_id: int, body: Dict[str, Any], *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "update_xt_activity",
            path_params={"id": activity_id},
            body=body,
            headers=headers,
        )

    async def set_activity_name(
        self, activity_id: int, name: str, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "set_activity_name",
            path_params={"id": activity_id},
            body={"name": name},
            headers=headers,
        )

    async def set_activity_state(
        self, activity_id: int, state: str, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "set_activity_state",
            path_params={"id": activity_id},
            body={"state": state},
            headers=headers,
        )

    async def set_activity_priority(
        self, activity_id: int, priority: Any, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "set_activity_priority",
            path_params={"id": activity_id},
            body={"priority": priority},
            headers=headers,
        )

    async def set_activity_schedule(
        self, activity_id: int, schedule: Any, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "set_activity_schedule",
            path_params={"id": activity_id},
            body={"schedule": schedule},
            headers=headers,
        )

    async def delete_ab_activity(
        self, activity_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "delete_ab_activity",
            path_params={"id": activity_id},
            headers=headers,
        )

    async def delete_xt_activity(
        self, activity_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "delete_xt_activity",
            path_params={"id": activity_id},
            headers=headers,
        )

    async def get_activity_changelog(
        self, activity_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "get_activity_changelog",
            path_params={"id": activity_id},
            headers=headers,
        )

    # -- offers --

    async def get_offers(
        self,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort_by: Optional[str] = None,
        headers: Headers = None,
    ) -> TargetResponse:
        return await self._call(
            "get_offers",
            list_options={"limit": limit, "offset": offset, "sort_by": sort_by},
            headers=headers,
        )

    async def get_offer_by_id(
        self, offer_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "get_offer_by_id", path_params={"id": offer_id}, headers=headers
        )

    async def create_offer(
        self, body: Dict[str, Any], *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call("create_offer", body=body, headers=headers)

    async def update_offer(
        self, offer_id: int, body: Dict[str, Any], *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "update_offer",
            path_params={"id": offer_id},
            body=body,
            headers=headers,
        )

    async def delete_offer(
        self, offer_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "delete_offer", path_params={"id": offer_id}, headers=headers
        )

    # -- audiences --

    async def get_audiences(
        self,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        sort_by: Optional[str] = None,
        headers: Headers = None,
    ) -> TargetResponse:
        return await self._call(
            "get_audiences",
            list_options={"limit": limit, "offset": offset, "sort_by": sort_by},
            headers=headers,
        )

    async def create_audience(
        self, body: Dict[str, Any], *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call("create_audience", body=body, headers=headers)

    async def get_audience_by_id(
        self, audience_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "get_audience_by_id", path_params={"id": audience_id}, headers=headers
        )

    async def update_audience(
        self, audience_id: int, body: Dict[str, Any], *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "update_audience",
            path_params={"id": audience_id},
            body=body,
            headers=headers,
        )

    async def delete_audience(
        self, audience_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "delete_audience", path_params={"id": audience_id}, headers=headers
        )

    # -- properties --

    async def get_properties(self, *, headers: Headers = None) -> TargetResponse:
        return await self._call("get_properties", headers=headers)

    async def get_property_by_id(
        self, property_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "get_property_by_id", path_params={"id": property_id}, headers=headers
        )

    # -- mboxes --

    async def get_mboxes(self, *, headers: Headers = None) -> TargetResponse:
        return await self._call("get_mboxes", headers=headers)

    async def get_mbox_by_name(
        self, name: str, *, headers: Headers = None
    ) -> TargetResponse:
        """Parameters of the named mbox."""
        return await self._call(
            "get_mbox_by_name", path_params={"mboxName": name}, headers=headers
        )

    async def get_mbox_profile_attributes(
        self, *, headers: Headers = None
    ) -> TargetResponse:
        """Profile attributes and mbox parameters of type profile."""
        return await self._call("get_mbox_profile_attributes", headers=headers)

    # -- environments --

    async def get_environments(self, *, headers: Headers = None) -> TargetResponse:
        return await self._call("get_environments", headers=headers)

    # -- reports --

    async def get_ab_activity_performance(
        self, activity_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "get_ab_activity_performance",
            path_params={"id": activity_id},
            headers=headers,
        )

    async def get_xt_activity_performance(
        self, activity_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "get_xt_activity_performance",
            path_params={"id": activity_id},
            headers=headers,
        )

    async def get_activity_performance(
        self, activity_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        """Performance report of an Automated Personalization activity."""
        return await self._call(
            "get_activity_performance",
            path_params={"id": activity_id},
            headers=headers,
        )

    async def get_orders_report(
        self, activity_id: int, *, headers: Headers = None
    ) -> TargetResponse:
        return await self._call(
            "get_orders_report",
            path_params={"id": activity_id},
            headers=headers,
        )

    # -- batch --

    async def execute_batch(
        self, body: Dict[str, Any], *, headers: Headers = None
    ) -> TargetResponse:
        """Submit several Admin API operations as one batch request.

        The body is sent as is; ordering and ``dependsOnOperationIds`` are
        resolved by the service.
        """
        return await self._call("execute_batch", body=body, headers=headers)


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

async def init(
    tenant: Optional[str],
    api_key: Optional[str],
    token: Optional[str],
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    server_url: str = SERVER_TEMPLATE,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> TargetClient:
    """Validate credentials and return a ready ``TargetClient``.

    Raises ``InitializationError`` listing every missing credential.
    """
    missing = missing_credentials(tenant, api_key, token)
    if missing:
        err = InitializationError(missing)
        logger.warning(f"sdk init error {err}")
        raise err

    validate_catalog()
    client = TargetClient(
        Session(tenant=tenant, api_key=api_key, token=token),
        http_client=http_client,
        server_url=server_url,
        timeout=timeout,
    )
    logger.info("sdk initialized successfully")
    return client


async def init_from_env(
    settings: Optional[TargetSettings] = None,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
) -> TargetClient:
    """Same as ``init`` with credentials read from ``TARGET_*`` settings."""
    settings = settings or TargetSettings()
    return await init(
        settings.tenant,
        settings.apikey,
        settings.token,
        http_client=http_client,
        server_url=settings.server_url,
        timeout=settings.timeout_seconds,
    )
