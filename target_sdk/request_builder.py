"""
Request assembly for Target API calls.

Everything here is pure: it turns an operation descriptor plus call arguments
into a ``RequestDescriptor`` without touching the network, so header
precedence and URL expansion can be tested on their own.

Header precedence, lowest to highest:
    1. operation profile (``Accept``, plus ``Content-Type`` for body operations)
    2. explicit per-call ``headers`` overrides
    3. session auth and the generic ``Content-Type: application/json``
       fallback, applied only when the header is still unset
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import httpx

from target_sdk.operations import (
    PLACEHOLDER_RE,
    SERVER_TEMPLATE,
    TENANT_VARIABLE,
    OperationDescriptor,
)

DEFAULT_CONTENT_TYPE = "application/json"


class TemplateError(ValueError):
    """A template placeholder has no bound value."""


def expand_template(
    template: str, variables: Mapping[str, Any], *, encode: bool = True
) -> str:
    """Replace every ``{name}`` in ``template`` with ``variables[name]``."""

    def _sub(match: re.Match) -> str:
        key = match.group(1)
        if key not in variables or variables[key] is None:
            raise TemplateError(f"Missing value for '{key}' in {template}")
        value = str(variables[key])
        return quote(value, safe="") if encode else value

    return PLACEHOLDER_RE.sub(_sub, template)


def merge_headers(*layers: Optional[Mapping[str, str]]) -> httpx.Headers:
    """Merge header mappings left to right; later layers win.

    Names are compared case-insensitively, so an override of ``accept``
    replaces a default ``Accept`` and leaves a single value behind.
    """
    merged = httpx.Headers()
    for layer in layers:
        if not layer:
            continue
        for name, value in layer.items():
            merged[name] = value
    return merged


def operation_headers(op: OperationDescriptor) -> Dict[str, str]:
    headers = {"Accept": op.media_type}
    if op.requires_body:
        headers["Content-Type"] = op.media_type
    return headers


def set_auth_headers(headers: httpx.Headers, api_key: str, token: str) -> httpx.Headers:
    """Fill in auth and content-type headers the request does not carry yet.

    Headers that are already set are never overwritten, which lets callers
    inject their own values for testing or debugging.
    """
    if not headers.get("x-api-key"):
        headers["x-api-key"] = api_key
    if not headers.get("Authorization"):
        headers["Authorization"] = f"Bearer {token}"
    if not headers.get("Content-Type"):
        headers["Content-Type"] = DEFAULT_CONTENT_TYPE
    return headers


@dataclass(frozen=True)
class RequestDescriptor:
    """A fully-built request, ready for the transport."""

    operation: str
    method: str
    path: str
    server_template: str
    server_variables: Dict[str, str]
    headers: httpx.Headers
    query: Dict[str, Any] = field(default_factory=dict)
    request_body: Any = None

    @property
    def server(self) -> str:
        return expand_template(self.server_template, self.server_variables)

    @property
    def url(self) -> str:
        return f"{self.server.rstrip('/')}{self.path}"


@dataclass(frozen=True)
class TargetResponse:
    """Raw response envelope returned for every successful call."""

    status: int
    headers: httpx.Headers
    body: Any
    url: str = ""

    @classmethod
    def from_httpx(cls, resp: httpx.Response) -> "TargetResponse":
        if not resp.content:
            body: Any = None
        else:
            try:
                body = resp.json()
            except ValueError:
                body = resp.text
        return cls(
            status=resp.status_code,
            headers=resp.headers,
            body=body,
            url=str(resp.url),
        )


def build_request(
    op: OperationDescriptor,
    *,
    tenant: str,
    api_key: str,
    token: str,
    path_params: Optional[Mapping[str, Any]] = None,
    query: Optional[Mapping[str, Any]] = None,
    body: Any = None,
    headers: Optional[Mapping[str, str]] = None,
    server_template: str = SERVER_TEMPLATE,
) -> RequestDescriptor:
    """Bind parameters and negotiate headers for one call of ``op``."""
    path = expand_template(op.path, path_params or {})
    merged = merge_headers(operation_headers(op), headers)
    set_auth_headers(merged, api_key, token)
    return RequestDescriptor(
        operation=op.name,
        method=op.method,
        path=path,
        server_template=server_template,
        server_variables={TENANT_VARIABLE: tenant},
        headers=merged,
        query=dict(query or {}),
        request_body=body if op.requires_body else None,
    )
