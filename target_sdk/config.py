import os
import logging
from typing import Optional

from dotenv import dotenv_values
from pydantic import model_validator
from pydantic_settings import BaseSettings

from target_sdk.operations import SERVER_TEMPLATE


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0


def _env_or_dotenv(key: str, dotenv_path: str = ".env") -> Optional[str]:
    """Get a value from env var (if non-empty) or from .env file.

    Pydantic-settings prefers env vars over .env files. If the env var
    is set to an empty string, pydantic treats it as the actual value and
    ignores the .env file. This helper ensures that empty env vars fall
    through to the .env file value.
    """
    val = os.environ.get(key)
    if val:  # non-empty env var wins
        return val
    vals = dotenv_values(dotenv_path)
    return vals.get(key) or None


class TargetSettings(BaseSettings):
    # Credentials (TARGET_TENANT, TARGET_APIKEY, TARGET_TOKEN)
    tenant: Optional[str] = None
    apikey: Optional[str] = None
    token: Optional[str] = None

    # Transport
    server_url: str = SERVER_TEMPLATE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    model_config = {
        "env_prefix": "TARGET_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def _resolve_empty_env_vars(self) -> "TargetSettings":
        """Fix empty env vars overriding .env file values."""
        for key in ("tenant", "apikey", "token"):
            if not getattr(self, key):
                val = _env_or_dotenv(f"TARGET_{key.upper()}")
                if val:
                    logger.debug(f"Resolved TARGET_{key.upper()} from .env")
                    object.__setattr__(self, key, val)
        return self
