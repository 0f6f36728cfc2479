"""
Grapevine Resource Models

Typed views over the JSON objects returned by resource endpoints. Every model
keeps fields it does not declare, so new server fields survive a round trip.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .bases import GrapevineModel, ResourceModel

LeaderboardPeriod = Literal["1d", "7d", "30d", "all"]


class Feed(ResourceModel):
    id: str
    owner_id: Optional[str] = None
    owner_wallet_address: Optional[str] = None
    category_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    image_cid: Optional[str] = None
    is_active: bool = True
    total_entries: int = 0
    total_purchases: int = 0
    total_revenue: str = "0"
    tags: Optional[List[str]] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class Entry(ResourceModel):
    id: str
    feed_id: str
    cid: Optional[str] = None
    mime_type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    metadata: Optional[str] = None
    tags: Optional[List[str]] = None
    is_free: bool = True
    expires_at: Optional[int] = None
    is_active: bool = True
    total_purchases: int = 0
    total_revenue: str = "0"
    piid: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class Category(ResourceModel):
    id: str
    name: str
    description: Optional[str] = None
    icon_url: Optional[str] = None
    is_active: bool = True
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class Transaction(ResourceModel):
    id: str
    piid: Optional[str] = None
    payer: str
    pay_to: str
    amount: str
    asset: str
    entry_id: Optional[str] = None
    transaction_hash: str
    created_at: Optional[int] = None


class Wallet(ResourceModel):
    id: str
    wallet_address: str
    wallet_address_network: Optional[str] = None
    username: Optional[str] = None
    picture_url: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None


class WalletStats(ResourceModel):
    wallet_id: str
    total_feeds_created: int = 0
    total_entries_published: int = 0
    total_revenue_earned: str = "0"
    total_items_sold: int = 0
    unique_buyers_count: int = 0
    total_purchases_made: int = 0
    total_amount_spent: str = "0"
    unique_feeds_purchased_from: int = 0
    revenue_rank: Optional[int] = None
    purchases_rank: Optional[int] = None


class LeaderboardResponse(ResourceModel):
    """Leaderboard rows are returned as plain dicts; their shape varies per board."""
    data: List[Dict[str, Any]] = Field(default_factory=list)
    period: Optional[str] = None


class EntryPrice(GrapevineModel):
    amount: str
    currency: str = "USDC"


class BatchFailure(GrapevineModel):
    """One failed item from ``entries.batch_create``."""
    index: int
    input: Dict[str, Any]
    error: str


class BatchCreateResult(GrapevineModel):
    successful: List[Entry] = Field(default_factory=list)
    failed: List[BatchFailure] = Field(default_factory=list)
