"""
Target SDK - async client for the Adobe Target Admin API.

Layers:
- operations: static catalog of verbs, paths and media-type profiles
- request_builder: header negotiation, auth injection, URL expansion
- client: session, dispatch and per-operation methods
"""

from target_sdk.client import Session, TargetClient, init, init_from_env
from target_sdk.config import TargetSettings
from target_sdk.errors import ErrorCode, InitializationError, TargetSDKError
from target_sdk.operations import ACCEPT_HEADERS, AcceptVersion
from target_sdk.request_builder import TargetResponse
from target_sdk.schemas import ListOptions

__version__ = "1.0.0"
__all__ = [
    "ACCEPT_HEADERS",
    "AcceptVersion",
    "ErrorCode",
    "InitializationError",
    "ListOptions",
    "Session",
    "TargetClient",
    "TargetResponse",
    "TargetSDKError",
    "TargetSettings",
    "init",
    "init_from_env",
]
