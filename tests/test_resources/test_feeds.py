"""
Feeds resource tests.
"""

import base64
import json

import httpx
import pytest

from grapevine import GrapevineClient
from grapevine.exceptions import ConfigError, ContentError, NoWalletConfiguredError, ValidationError

from mocks import (
    MOCK_ADDRESS,
    MOCK_CATEGORY_ID,
    MOCK_FEED_ID,
    MOCK_PRIVATE_KEY,
    MockApi,
    make_402_body,
    make_feed,
    make_list_body,
    make_requirement,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8


def make_client(api: MockApi, **kwargs) -> GrapevineClient:
    return GrapevineClient(private_key=MOCK_PRIVATE_KEY, http_client=api.client(), **kwargs)


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_pays_and_returns_feed(self):
        api = MockApi().queue(
            "POST", "/v1/feeds", (402, make_402_body(make_requirement())), (201, make_feed())
        )
        client = make_client(api)

        feed = await client.feeds.create(
            "Market notes", description="Daily notes", tags=["defi"], category_id=MOCK_CATEGORY_ID
        )

        assert feed.id == MOCK_FEED_ID
        first, retry = api.primary_requests
        assert json.loads(first.content) == {
            "name": "Market notes",
            "description": "Daily notes",
            "category_id": MOCK_CATEGORY_ID,
            "tags": ["defi"],
        }
        assert "x-payment" in retry.headers

    @pytest.mark.asyncio
    async def test_create_encodes_raw_image(self):
        api = MockApi().queue("POST", "/v1/feeds", (201, make_feed()))
        client = make_client(api)

        await client.feeds.create("With image", image=PNG_BYTES)

        body = json.loads(api.primary_requests[0].content)
        assert base64.b64decode(body["image_base64"]) == PNG_BYTES

    @pytest.mark.asyncio
    async def test_create_strips_data_url(self):
        api = MockApi().queue("POST", "/v1/feeds", (201, make_feed()))
        client = make_client(api)

        await client.feeds.create("With image", image="data:image/png;base64,iVBORw0KGgo=")

        assert json.loads(api.primary_requests[0].content)["image_base64"] == "iVBORw0KGgo="

    @pytest.mark.asyncio
    async def test_multiple_image_fields_rejected(self):
        api = MockApi()
        client = make_client(api)

        with pytest.raises(ConfigError):
            await client.feeds.create("x", image_base64="aGk=", image_url="https://example.com/a.png")

        assert api.requests == []

    @pytest.mark.asyncio
    async def test_invalid_base64_image(self):
        client = make_client(MockApi())

        with pytest.raises(ContentError):
            await client.feeds.create("x", image_base64="not base64!")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"name": ""},
            {"name": "x", "description": ""},
            {"name": "x", "category_id": "not-a-uuid"},
            {"name": "x", "tags": ["ok", ""]},
            {"name": "x", "image_url": "ftp://example.com/a.png"},
        ],
    )
    async def test_validation_before_dispatch(self, kwargs):
        api = MockApi()
        client = make_client(api)

        with pytest.raises(ValidationError):
            await client.feeds.create(**kwargs)

        assert api.requests == []

    @pytest.mark.asyncio
    async def test_create_without_wallet(self):
        api = MockApi()
        client = GrapevineClient(http_client=api.client())

        with pytest.raises(NoWalletConfiguredError):
            await client.feeds.create("x")

        assert api.requests == []


class TestRead:

    @pytest.mark.asyncio
    async def test_get_keeps_unknown_fields(self):
        api = MockApi().queue("GET", f"/v1/feeds/{MOCK_FEED_ID}", (200, make_feed(brand_new_field=7)))
        client = make_client(api)

        feed = await client.feeds.get(MOCK_FEED_ID)

        assert feed.name == "Market notes"
        assert feed.model_extra["brand_new_field"] == 7
        assert api.nonce_count == 0

    @pytest.mark.asyncio
    async def test_list_query_parameters(self):
        api = MockApi().queue("GET", "/v1/feeds", (200, make_list_body([make_feed()], "tok")))
        client = make_client(api)

        page = await client.feeds.list(page_size=10, tags=["a", "b"], is_active=True, category=MOCK_CATEGORY_ID)

        assert page.next_page_token == "tok"
        assert page.has_more
        assert page.data[0].id == MOCK_FEED_ID
        params = api.requests[0].url.params
        assert params["page_size"] == "10"
        assert params.get_list("tags") == ["a", "b"]
        assert params["is_active"] == "true"
        assert params["category"] == MOCK_CATEGORY_ID

    @pytest.mark.asyncio
    async def test_my_feeds_filters_by_wallet(self):
        api = MockApi().queue("GET", "/v1/feeds", (200, make_list_body([])))
        client = make_client(api)

        await client.feeds.my_feeds()

        assert api.requests[0].url.params["owner_wallet_address"] == MOCK_ADDRESS

    @pytest.mark.asyncio
    async def test_paginate_walks_pages(self):
        first = make_list_body([make_feed(id="a"), make_feed(id="b")], "t1")
        second = make_list_body([make_feed(id="c")])
        api = MockApi().queue("GET", "/v1/feeds", (200, first), (200, second))
        client = make_client(api)

        batches = [[feed.id for feed in batch] async for batch in client.feeds.paginate(page_size=2)]

        assert batches == [["a", "b"], ["c"]]
        assert api.requests[1].url.params["page_token"] == "t1"


class TestWrite:

    @pytest.mark.asyncio
    async def test_update_sends_only_given_fields(self):
        api = MockApi().queue("PATCH", f"/v1/feeds/{MOCK_FEED_ID}", (200, make_feed(name="Renamed")))
        client = make_client(api)

        feed = await client.feeds.update(MOCK_FEED_ID, name="Renamed", is_active=False)

        assert feed.name == "Renamed"
        assert json.loads(api.primary_requests[0].content) == {"name": "Renamed", "is_active": False}
        assert api.nonce_count == 1

    @pytest.mark.asyncio
    async def test_delete(self):
        api = MockApi().queue("DELETE", f"/v1/feeds/{MOCK_FEED_ID}", httpx.Response(204))
        client = make_client(api)

        assert await client.feeds.delete(MOCK_FEED_ID) is None
        assert api.primary_requests[0].method == "DELETE"
