"""
Categories, transactions, wallets and leaderboards resource tests.
"""

import json

import pytest

from grapevine import GrapevineClient
from grapevine.exceptions import NoWalletConfiguredError, ValidationError

from mocks import MOCK_ADDRESS, MOCK_CATEGORY_ID, MOCK_PRIVATE_KEY, MockApi, make_list_body

WALLET = {"id": "w1", "wallet_address": MOCK_ADDRESS, "username": "alice"}
TRANSACTION = {
    "id": "t1",
    "payer": MOCK_ADDRESS,
    "pay_to": MOCK_ADDRESS,
    "amount": "10000",
    "asset": "0x036CbD53842c5426634e7929541eC2318f3dCF7e",
    "transaction_hash": "0xabc",
}


def make_client(api: MockApi, with_wallet: bool = True) -> GrapevineClient:
    if with_wallet:
        return GrapevineClient(private_key=MOCK_PRIVATE_KEY, http_client=api.client())
    return GrapevineClient(http_client=api.client())


# ========================================================================
# Categories
# ========================================================================

@pytest.mark.asyncio
async def test_categories_get_all_pages_by_hundred():
    first = make_list_body([{"id": "c1", "name": "A"}], "t1")
    second = make_list_body([{"id": "c2", "name": "B"}])
    api = MockApi().queue("GET", "/v1/categories", (200, first), (200, second))

    categories = await make_client(api, with_wallet=False).categories.get_all(is_active=True)

    assert [c.id for c in categories] == ["c1", "c2"]
    assert api.requests[0].url.params["page_size"] == "100"
    assert api.requests[0].url.params["is_active"] == "true"


@pytest.mark.asyncio
async def test_category_get():
    api = MockApi().queue("GET", f"/v1/categories/{MOCK_CATEGORY_ID}", (200, {"id": MOCK_CATEGORY_ID, "name": "DeFi"}))

    category = await make_client(api, with_wallet=False).categories.get(MOCK_CATEGORY_ID)

    assert category.name == "DeFi"


# ========================================================================
# Transactions
# ========================================================================

@pytest.mark.asyncio
async def test_transactions_list_filters():
    api = MockApi().queue("GET", "/v1/transactions", (200, make_list_body([TRANSACTION])))

    page = await make_client(api, with_wallet=False).transactions.list(payer=MOCK_ADDRESS, page_size=5)

    assert page.data[0].transaction_hash == "0xabc"
    assert page.next_page_token is None
    assert api.requests[0].url.params["payer"] == MOCK_ADDRESS


@pytest.mark.asyncio
async def test_transaction_by_hash():
    api = MockApi().queue("GET", "/v1/transactions/hash/0xabc", (200, TRANSACTION))

    transaction = await make_client(api, with_wallet=False).transactions.get_by_hash("0xabc")

    assert transaction.id == "t1"


# ========================================================================
# Wallets
# ========================================================================

@pytest.mark.asyncio
async def test_wallet_by_address_validates_format():
    api = MockApi()

    with pytest.raises(ValidationError):
        await make_client(api, with_wallet=False).wallets.get_by_address("0x1234")

    assert api.requests == []


@pytest.mark.asyncio
async def test_get_me_uses_configured_wallet():
    api = MockApi().queue("GET", f"/v1/wallets/address/{MOCK_ADDRESS}", (200, WALLET))

    wallet = await make_client(api).wallets.get_me()

    assert wallet.username == "alice"


@pytest.mark.asyncio
async def test_get_me_without_wallet():
    with pytest.raises(NoWalletConfiguredError):
        await make_client(MockApi(), with_wallet=False).wallets.get_me()


@pytest.mark.asyncio
async def test_wallet_stats():
    api = MockApi().queue("GET", "/v1/wallets/w1/stats", (200, {"wallet_id": "w1", "total_feeds_created": 3}))

    stats = await make_client(api, with_wallet=False).wallets.get_stats("w1")

    assert stats.total_feeds_created == 3


@pytest.mark.asyncio
async def test_wallet_update_is_authenticated():
    api = MockApi().queue("PATCH", "/v1/wallets/w1", (200, {**WALLET, "username": "bob"}))

    wallet = await make_client(api).wallets.update("w1", username="bob")

    assert wallet.username == "bob"
    assert api.nonce_count == 1
    assert json.loads(api.primary_requests[0].content) == {"username": "bob"}


# ========================================================================
# Leaderboards
# ========================================================================

@pytest.mark.asyncio
async def test_leaderboard_period():
    api = MockApi().queue("GET", "/v1/leaderboards/top-buyers", (200, {"data": [{"rank": 1}], "period": "7d"}))

    board = await make_client(api, with_wallet=False).leaderboards.top_buyers(period="7d", page_size=10)

    assert board.data == [{"rank": 1}]
    assert api.requests[0].url.params["period"] == "7d"


@pytest.mark.asyncio
async def test_leaderboard_invalid_period():
    api = MockApi()

    with pytest.raises(ValidationError):
        await make_client(api, with_wallet=False).leaderboards.most_popular(period="1y")

    assert api.requests == []


@pytest.mark.asyncio
async def test_recent_entries_is_paged():
    api = MockApi().queue("GET", "/v1/leaderboards/recent-entries", (200, make_list_body([{"id": "e1"}], "t2")))

    page = await make_client(api, with_wallet=False).leaderboards.recent_entries(page_size=1)

    assert page.data == [{"id": "e1"}]
    assert page.next_page_token == "t2"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path",
    [
        ("trending", "trending"),
        ("category_stats", "category-stats"),
        ("top_feeds", "top-feeds"),
        ("top_revenue", "top-revenue"),
        ("top_providers", "top-providers"),
    ],
)
async def test_leaderboard_paths(method, path):
    api = MockApi().queue("GET", f"/v1/leaderboards/{path}", (200, {"data": []}))

    await getattr(make_client(api, with_wallet=False).leaderboards, method)()

    assert api.requests[0].url.path == f"/v1/leaderboards/{path}"
