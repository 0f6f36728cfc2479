"""
Grapevine SDK Test Mocks Module

Shared constants and fakes for exercising the SDK without a live API or
wallet.

Key Components:
    - Fixed test keys and addresses (deterministic signatures)
    - Payment requirement / 402 body factories
    - MockApi: an ``httpx.MockTransport`` backed fake of the Grapevine API
      that serves nonce challenges and queued responses, recording every
      request it sees
    - FakeProvider: an EIP-1193 style async provider for ConnectedWallet

Usage:
    from mocks import MockApi, MOCK_PRIVATE_KEY, make_requirement

    api = MockApi()
    api.queue("GET", "/v1/feeds", (200, {"data": [], "pagination": {}}))
    client = GrapevineClient(private_key=MOCK_PRIVATE_KEY, http_client=api.client())
"""

from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
from eth_account import Account
from eth_utils import to_checksum_address

# ========================================================================
# Mock Keys and Addresses
# ========================================================================

# Test private keys (do not use in production!)
MOCK_PRIVATE_KEY = "0x1234567890123456789012345678901234567890123456789012345678901234"
MOCK_OTHER_PRIVATE_KEY = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcdefabcd"

MOCK_ADDRESS = Account.from_key(MOCK_PRIVATE_KEY).address
MOCK_OTHER_ADDRESS = Account.from_key(MOCK_OTHER_PRIVATE_KEY).address

MOCK_PAY_TO = to_checksum_address("0x209693bc6afc0c5328ba36faf03c514ef312287c")
MOCK_USDC_BASE_SEPOLIA = to_checksum_address("0x036cbd53842c5426634e7929541ec2318f3dcf7e")
MOCK_USDC_BASE = to_checksum_address("0x833589fcd6edb6e08f4c7c32d4f71b54bda02913")

MOCK_FEED_ID = "123e4567-e89b-42d3-a456-426614174000"
MOCK_CATEGORY_ID = "223e4567-e89b-42d3-a456-426614174001"
MOCK_ENTRY_ID = "323e4567-e89b-42d3-a456-426614174002"

TESTNET_API = "https://api.grapevine.markets"
NONCE_PATH = "/v1/auth/nonce"

# ========================================================================
# Factories
# ========================================================================


def make_requirement(network: str = "base-sepolia", **overrides: Any) -> Dict[str, Any]:
    """x402 v1 ``accepts`` entry as the server sends it."""
    requirement = {
        "scheme": "exact",
        "network": network,
        "maxAmountRequired": "10000",
        "resource": f"{TESTNET_API}/v1/feeds",
        "description": "Create feed",
        "mimeType": "application/json",
        "payTo": MOCK_PAY_TO,
        "maxTimeoutSeconds": 60,
        "asset": MOCK_USDC_BASE if network == "base" else MOCK_USDC_BASE_SEPOLIA,
        "extra": {"name": "USDC", "version": "2"},
    }
    requirement.update(overrides)
    return requirement


def make_402_body(*requirements: Dict[str, Any], x402_version: Any = 1) -> Dict[str, Any]:
    return {
        "x402Version": x402_version,
        "accepts": list(requirements),
        "error": "X-PAYMENT header is required",
    }


def make_feed(**overrides: Any) -> Dict[str, Any]:
    feed = {
        "id": MOCK_FEED_ID,
        "owner_id": "423e4567-e89b-42d3-a456-426614174003",
        "category_id": MOCK_CATEGORY_ID,
        "name": "Market notes",
        "description": "Daily notes",
        "is_active": True,
        "total_entries": 0,
        "total_purchases": 0,
        "total_revenue": "0",
        "tags": ["defi"],
        "created_at": 1700000000,
        "updated_at": 1700000000,
    }
    feed.update(overrides)
    return feed


def make_entry(**overrides: Any) -> Dict[str, Any]:
    entry = {
        "id": MOCK_ENTRY_ID,
        "feed_id": MOCK_FEED_ID,
        "cid": "bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi",
        "mime_type": "text/plain",
        "title": "Hello",
        "is_free": True,
        "is_active": True,
        "total_purchases": 0,
        "total_revenue": "0",
        "created_at": 1700000000,
        "updated_at": 1700000000,
    }
    entry.update(overrides)
    return entry


def make_list_body(items: List[Any], next_page_token: Optional[str] = None) -> Dict[str, Any]:
    return {
        "data": items,
        "pagination": {
            "page_size": len(items),
            "next_page_token": next_page_token,
            "has_more": next_page_token is not None,
        },
    }


# ========================================================================
# Mock Grapevine API
# ========================================================================

Responder = Union[httpx.Response, Tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class MockApi:
    """
    In-process fake of the Grapevine API.

    Nonce requests are answered with ``{"message": "sign:<n>"}`` where ``n``
    counts challenges issued. Other requests are answered from per-route
    queues; the last queued response for a route is repeated once the
    queue runs dry. Unknown routes get a 404.
    """

    def __init__(self, nonce_status: int = 200):
        self.requests: List[httpx.Request] = []
        self.nonce_status = nonce_status
        self.nonce_body: Optional[Any] = None
        self.nonce_count = 0
        self._routes: Dict[Tuple[str, str], List[Responder]] = {}

    def queue(self, method: str, path: str, *responses: Responder) -> "MockApi":
        self._routes.setdefault((method.upper(), path), []).extend(responses)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == NONCE_PATH:
            self.nonce_count += 1
            if self.nonce_status != 200:
                return httpx.Response(self.nonce_status, text="nonce unavailable")
            body = self.nonce_body if self.nonce_body is not None else {"message": f"sign:{self.nonce_count}"}
            return httpx.Response(200, json=body)

        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"error": "not found"})
        responder = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(responder) and not isinstance(responder, httpx.Response):
            return responder(request)
        if isinstance(responder, tuple):
            status, body = responder
            return httpx.Response(status, json=body)
        return responder

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport)

    @property
    def nonce_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == NONCE_PATH]

    @property
    def primary_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path != NONCE_PATH]


# ========================================================================
# Mock EIP-1193 Provider
# ========================================================================


class FakeProvider:
    """
    Async provider answering JSON-RPC methods from a table.

    Table values are either a result (wrapped as ``{"result": value}``) or a
    full response dict containing an ``error`` key.
    """

    def __init__(self, table: Dict[str, Any]):
        self.table = table
        self.calls: List[Tuple[str, List[Any]]] = []

    async def make_request(self, method: str, params: List[Any]) -> Dict[str, Any]:
        self.calls.append((method, params))
        if method not in self.table:
            return {"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "Method not found"}}
        value = self.table[method]
        if isinstance(value, dict) and "error" in value:
            return {"jsonrpc": "2.0", "id": 1, **value}
        return {"jsonrpc": "2.0", "id": 1, "result": value}
