"""
Grapevine Client

Entry point of the SDK. Owns the configuration, one ``httpx.AsyncClient``,
the request dispatcher and the resource groups.

Usage:
    ```python
    async with GrapevineClient(network="testnet", private_key=KEY) as client:
        feed = await client.feeds.create("Market notes", tags=["defi"])
        await client.entries.create(feed.id, "# First post")

        async for batch in client.feeds.paginate(page_size=50):
            ...
    ```
"""

import logging
from typing import Any, List, Mapping, Optional

import httpx

from .clients.dispatcher import RequestDispatcher
from .config import GrapevineConfig, configure_debug_logging
from .exceptions import ConfigError, NoWalletConfiguredError
from .payments.exact import PaymentScheme
from .resources import (
    CategoriesResource,
    EntriesResource,
    FeedsResource,
    LeaderboardsResource,
    TransactionsResource,
    WalletsResource,
)
from .schemas.resources import Category
from .wallets.bases import WalletAdapter
from .wallets.local import LocalKeyWallet

logger = logging.getLogger(__name__)


class GrapevineClient:
    """
    Async client for the Grapevine API.

    Works without a wallet for public reads. Authenticated and paid calls
    need a wallet, supplied as ``private_key``, as ``wallet`` or later via
    ``set_wallet``.
    """

    def __init__(
        self,
        config: Optional[GrapevineConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        payment_scheme: Optional[PaymentScheme] = None,
        **overrides: Any,
    ):
        """
        Args:
            config: Full configuration; keyword overrides are applied on top.
            http_client: Externally owned ``httpx.AsyncClient``; not closed by ``aclose``.
            payment_scheme: Alternative payment scheme for 402 handling.
            **overrides: Any ``GrapevineConfig`` field.

        Raises:
            ConfigError: Both ``private_key`` and ``wallet`` supplied.
            InvalidKeyFormatError: Malformed ``private_key``.
        """
        if config is None:
            config = GrapevineConfig(**overrides)
        elif overrides:
            config = GrapevineConfig(**{**dict(config), **overrides})
        if config.private_key and config.wallet is not None:
            raise ConfigError.conflicting("private_key", "wallet")
        self.config = config
        configure_debug_logging(config.debug)

        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=config.timeout)
        self._dispatcher = RequestDispatcher(
            self._http,
            config.resolved_api_url,
            config.network_config.x402_network,
            payment_scheme,
        )

        if config.private_key:
            self.set_wallet(LocalKeyWallet(config.private_key, is_testnet=config.is_testnet))
        elif config.wallet is not None:
            self.set_wallet(config.wallet)

        self.feeds = FeedsResource(self)
        self.entries = EntriesResource(self)
        self.categories = CategoriesResource(self)
        self.transactions = TransactionsResource(self)
        self.wallets = WalletsResource(self)
        self.leaderboards = LeaderboardsResource(self)

        logger.debug(
            "GrapevineClient initialized: api_url=%s network=%s testnet=%s",
            self.api_url,
            self.x402_network,
            self.is_testnet,
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> "GrapevineClient":
        """Build a client from ``GRAPEVINE_*`` environment variables."""
        http_client = overrides.pop("http_client", None)
        return cls(GrapevineConfig.from_env(**overrides), http_client=http_client)

    # =========================================================================
    # Wallet management
    # =========================================================================

    def set_wallet(self, wallet: WalletAdapter) -> None:
        """Swap the wallet; affects calls that start after this returns."""
        self._dispatcher.set_wallet(wallet)
        logger.debug("Wallet configured: %s", wallet.address)

    def clear_wallet(self) -> None:
        self._dispatcher.clear_wallet()
        logger.debug("Wallet configuration cleared")

    def has_wallet(self) -> bool:
        return self._dispatcher.session is not None

    @property
    def wallet(self) -> Optional[WalletAdapter]:
        session = self._dispatcher.session
        return session.wallet if session else None

    def get_wallet_address(self) -> str:
        """
        Raises:
            NoWalletConfiguredError: If no wallet is configured.
        """
        session = self._dispatcher.session
        if session is None:
            raise NoWalletConfiguredError()
        return session.wallet.address

    # =========================================================================
    # Network
    # =========================================================================

    @property
    def network(self) -> str:
        """Deployment target: ``testnet`` or ``mainnet``."""
        return self.config.network

    @property
    def x402_network(self) -> str:
        """x402 network used for payments: ``base-sepolia`` or ``base``."""
        return self._dispatcher.x402_network

    @property
    def is_testnet(self) -> bool:
        return self.config.is_testnet

    @property
    def api_url(self) -> str:
        return self._dispatcher.api_url

    # =========================================================================
    # Requests
    # =========================================================================

    async def request(
        self,
        path: str,
        method: str = "GET",
        *,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        requires_auth: bool = False,
        handle_payment: bool = False,
    ) -> httpx.Response:
        """Send a raw API call through the authenticated pipeline."""
        return await self._dispatcher.dispatch(
            path,
            method,
            json=json,
            params=params,
            requires_auth=requires_auth,
            handle_payment=handle_payment,
        )

    async def get_categories(self) -> List[Category]:
        """First page of categories."""
        page = await self.categories.list()
        return page.data

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "GrapevineClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"GrapevineClient(api_url={self.api_url!r}, network={self.network!r}, wallet={self.wallet!r})"
