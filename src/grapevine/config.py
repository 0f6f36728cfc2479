"""
Client Configuration

``GrapevineConfig`` collects the construction options of a
``GrapevineClient``. Options may be passed directly or loaded from the
environment (and an optional ``.env`` file) with ``GrapevineConfig.from_env``.

Environment variables:
    GRAPEVINE_NETWORK       "testnet" (default) or "mainnet"
    GRAPEVINE_PRIVATE_KEY   0x-prefixed hex private key
    GRAPEVINE_API_URL       override for the API origin
    GRAPEVINE_DEBUG         "1"/"true"/"yes" enables debug logging
    GRAPEVINE_TIMEOUT       HTTP timeout in seconds
"""

import logging
import os
from typing import Any, Dict, List, Optional

import dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigError
from .networks import NetworkConfig, NetworkName, get_network
from .wallets.bases import WalletAdapter

_TRUTHY = {"1", "true", "yes", "on"}


def _describe_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    return [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]


class GrapevineConfig(BaseModel):
    """
    Construction options for ``GrapevineClient``.

    Attributes:
        network: Deployment target; decides API origin, x402 network and chain id.
        private_key: Key for a ``LocalKeyWallet``. Mutually exclusive with ``wallet``.
        wallet: Any ``WalletAdapter`` (e.g. a ``ConnectedWallet``).
        api_url: Optional override of the API origin.
        debug: Attach a DEBUG stream handler to the ``grapevine`` logger.
        timeout: HTTP timeout in seconds forwarded to httpx.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    network: NetworkName = Field(default="testnet", description="testnet or mainnet")
    private_key: Optional[str] = Field(default=None, repr=False, description="Local signing key")
    wallet: Optional[WalletAdapter] = Field(default=None, description="Externally supplied wallet adapter")
    api_url: Optional[str] = Field(default=None, description="API origin override")
    debug: bool = Field(default=False, description="Enable debug logging")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout (seconds)")

    def __init__(self, **data: Any):
        """
        Raises:
            ConfigError: Unknown option names or values that fail validation.
        """
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise ConfigError.invalid_options(_describe_errors(exc)) from exc

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        return value.rstrip("/") if value else value

    @property
    def network_config(self) -> NetworkConfig:
        return get_network(self.network)

    @property
    def is_testnet(self) -> bool:
        return self.network == "testnet"

    @property
    def resolved_api_url(self) -> str:
        """API origin: explicit override or the network default."""
        return self.api_url or self.network_config.api_url

    @classmethod
    def from_env(cls, **overrides: Any) -> "GrapevineConfig":
        """
        Build a config from ``GRAPEVINE_*`` environment variables.

        A ``.env`` file in the working directory is loaded first without
        overriding variables already set. Keyword arguments take precedence
        over the environment.
        """
        dotenv.load_dotenv(override=False)

        values: Dict[str, Any] = {}
        if os.getenv("GRAPEVINE_NETWORK"):
            values["network"] = os.getenv("GRAPEVINE_NETWORK", "").strip().lower()
        if os.getenv("GRAPEVINE_PRIVATE_KEY"):
            values["private_key"] = os.getenv("GRAPEVINE_PRIVATE_KEY", "").strip()
        if os.getenv("GRAPEVINE_API_URL"):
            values["api_url"] = os.getenv("GRAPEVINE_API_URL", "").strip()
        if os.getenv("GRAPEVINE_DEBUG"):
            values["debug"] = os.getenv("GRAPEVINE_DEBUG", "").strip().lower() in _TRUTHY
        if os.getenv("GRAPEVINE_TIMEOUT"):
            raw_timeout = os.getenv("GRAPEVINE_TIMEOUT", "").strip()
            try:
                values["timeout"] = float(raw_timeout)
            except ValueError as exc:
                raise ConfigError.invalid_options(
                    [{"field": "timeout", "message": f"GRAPEVINE_TIMEOUT is not a number: {raw_timeout!r}"}]
                ) from exc

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def configure_debug_logging(enabled: bool) -> None:
    """
    Attach a stream handler to the package logger when debug is enabled.

    Idempotent: repeated calls do not stack handlers.
    """
    if not enabled:
        return
    package_logger = logging.getLogger("grapevine")
    package_logger.setLevel(logging.DEBUG)
    if not any(getattr(h, "_grapevine_debug", False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        handler._grapevine_debug = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)
