"""
Grapevine SDK

Async Python client for the Grapevine feeds and entries API with wallet
signature authentication and x402 micropayments.
"""

from .client import GrapevineClient
from .config import GrapevineConfig
from .exceptions import (
    ApiError,
    AuthError,
    ChallengeRequestFailedError,
    ConfigError,
    ContentError,
    GrapevineError,
    InvalidKeyFormatError,
    InvalidTransition,
    MalformedPaymentResponseError,
    NoMatchingPaymentRequirementError,
    NoWalletConfiguredError,
    PaymentError,
    RequestFailedError,
    UnsupportedNetworkError,
    UserRejectedError,
    ValidationError,
    WalletError,
)
from .networks import NETWORKS, NetworkConfig, get_network
from .pagination import CursorPaginator, paginate
from .schemas import (
    BatchCreateResult,
    Category,
    Entry,
    EntryPrice,
    Feed,
    LeaderboardResponse,
    Page,
    Transaction,
    Wallet,
    WalletStats,
)
from .wallets import ConnectedWallet, LocalKeyWallet, WalletAdapter

__version__ = "0.1.0"

__all__ = [
    "GrapevineClient",
    "GrapevineConfig",
    "NETWORKS",
    "NetworkConfig",
    "get_network",
    "CursorPaginator",
    "paginate",
    "WalletAdapter",
    "LocalKeyWallet",
    "ConnectedWallet",
    "Page",
    "Feed",
    "Entry",
    "EntryPrice",
    "Category",
    "Transaction",
    "Wallet",
    "WalletStats",
    "LeaderboardResponse",
    "BatchCreateResult",
    "GrapevineError",
    "ConfigError",
    "ValidationError",
    "ContentError",
    "AuthError",
    "NoWalletConfiguredError",
    "InvalidKeyFormatError",
    "ChallengeRequestFailedError",
    "WalletError",
    "UserRejectedError",
    "PaymentError",
    "MalformedPaymentResponseError",
    "NoMatchingPaymentRequirementError",
    "UnsupportedNetworkError",
    "ApiError",
    "RequestFailedError",
    "InvalidTransition",
]
