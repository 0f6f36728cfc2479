from .bases import CanonicalModel, GrapevineModel, ResourceModel
from .https import (
    ApiPagination,
    AuthChallenge,
    AuthHeaders,
    ExactEvmAuthorization,
    ExactEvmPayload,
    NonceRequest,
    Page,
    PaymentPayload,
    PaymentRequiredResponse,
    PaymentRequirement,
)
from .resources import (
    BatchCreateResult,
    BatchFailure,
    Category,
    Entry,
    EntryPrice,
    Feed,
    LeaderboardPeriod,
    LeaderboardResponse,
    Transaction,
    Wallet,
    WalletStats,
)
from .versions import BASELINE_X402_VERSION, parse_x402_version

__all__ = [
    "CanonicalModel",
    "GrapevineModel",
    "ResourceModel",
    "ApiPagination",
    "AuthChallenge",
    "AuthHeaders",
    "ExactEvmAuthorization",
    "ExactEvmPayload",
    "NonceRequest",
    "Page",
    "PaymentPayload",
    "PaymentRequiredResponse",
    "PaymentRequirement",
    "BatchCreateResult",
    "BatchFailure",
    "Category",
    "Entry",
    "EntryPrice",
    "Feed",
    "LeaderboardPeriod",
    "LeaderboardResponse",
    "Transaction",
    "Wallet",
    "WalletStats",
    "BASELINE_X402_VERSION",
    "parse_x402_version",
]
