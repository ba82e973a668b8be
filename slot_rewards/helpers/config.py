"""Configuration management and environment variable utilities."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from slot_rewards.helpers.constants import (
    DEFAULT_BEACON_ENDPOINT,
    DEFAULT_TIMEOUT,
    RECEIPT_BATCH_SIZE,
    RPC_CALL_TIMEOUT,
)


# Load environment variables from .env file
load_dotenv()

DEFAULT_BUILDERS_FILE = (
    Path(__file__).resolve().parent.parent / "data" / "builders" / "builders.json"
)


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from slot_rewards.helpers.config import get_required_env

        rpc_url = get_required_env("ETH_RPC_URL")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_eth_rpc_url(rpc_url: str | None = None) -> str:
    """Get Ethereum RPC URL from parameter or environment.

    Args:
        rpc_url: Optional RPC URL to use directly

    Returns:
        Ethereum RPC URL

    Raises:
        ValueError: If RPC URL is not provided and ETH_RPC_URL env var is not set
    """
    if rpc_url:
        return rpc_url

    env_rpc_url = os.getenv("ETH_RPC_URL")
    if not env_rpc_url:
        msg = "ETH_RPC_URL must be provided or set in environment variables"
        raise ValueError(msg)

    return env_rpc_url


def get_beacon_endpoint(beacon_endpoint: str | None = None) -> str:
    """Get the consensus-layer REST base URL, without a trailing slash."""
    endpoint = beacon_endpoint or os.getenv("BEACON_ENDPOINT") or DEFAULT_BEACON_ENDPOINT
    return endpoint.rstrip("/")


def _get_bool_env(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Runtime settings resolved from the environment."""

    model_config = ConfigDict(frozen=True)

    eth_rpc_url: str
    beacon_endpoint: str = DEFAULT_BEACON_ENDPOINT
    builders_file: Path = DEFAULT_BUILDERS_FILE
    log_level: str = "INFO"
    log_color: bool = False
    receipt_batch_size: int = Field(default=RECEIPT_BATCH_SIZE, gt=0)
    rpc_timeout: float = Field(default=RPC_CALL_TIMEOUT, gt=0)
    beacon_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    api_host: str = "0.0.0.0"  # noqa: S104
    api_port: int = 8080


def load_settings(rpc_url: str | None = None) -> Settings:
    """Assemble :class:`Settings` from environment variables.

    Args:
        rpc_url: Optional execution RPC URL overriding ``ETH_RPC_URL``

    Returns:
        Settings instance

    Raises:
        ValueError: If ``ETH_RPC_URL`` is missing or a numeric variable is malformed
    """
    builders_file = get_optional_env("BUILDERS_FILE")
    return Settings(
        eth_rpc_url=get_eth_rpc_url(rpc_url),
        beacon_endpoint=get_beacon_endpoint(),
        builders_file=Path(builders_file) if builders_file else DEFAULT_BUILDERS_FILE,
        log_level=(get_optional_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        log_color=_get_bool_env("LOG_COLOR"),
        receipt_batch_size=int(
            get_optional_env("RECEIPT_BATCH_SIZE", str(RECEIPT_BATCH_SIZE))
            or RECEIPT_BATCH_SIZE
        ),
        rpc_timeout=float(
            get_optional_env("RPC_TIMEOUT", str(RPC_CALL_TIMEOUT)) or RPC_CALL_TIMEOUT
        ),
        beacon_timeout=float(
            get_optional_env("BEACON_TIMEOUT", str(DEFAULT_TIMEOUT)) or DEFAULT_TIMEOUT
        ),
        api_host=get_optional_env("API_HOST", "0.0.0.0") or "0.0.0.0",  # noqa: S104
        api_port=int(get_optional_env("API_PORT", "8080") or 8080),
    )


__all__ = [
    "DEFAULT_BUILDERS_FILE",
    "Settings",
    "get_beacon_endpoint",
    "get_eth_rpc_url",
    "get_optional_env",
    "get_required_env",
    "load_settings",
]
