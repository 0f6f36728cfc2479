"""
Feeds: named collections of entries owned by a wallet.

Creating a feed is a paid, authenticated call; the 402 handshake is handled
by the request pipeline.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..content import encode_image
from ..exceptions import ConfigError
from ..pagination import CursorPaginator
from ..schemas.https import Page
from ..schemas.resources import Feed
from ..validation import (
    validate_base64,
    validate_optional_bool,
    validate_optional_string,
    validate_optional_string_list,
    validate_optional_url,
    validate_optional_uuid,
    validate_required_string,
)
from .bases import Resource

logger = logging.getLogger(__name__)

ImageInput = Union[str, bytes, bytearray, Path]


def _image_fields(
    image: Optional[ImageInput],
    image_base64: Optional[str],
    image_url: Optional[str],
) -> Dict[str, str]:
    provided = [
        name
        for name, value in (("image", image), ("image_base64", image_base64), ("image_url", image_url))
        if value
    ]
    if len(provided) > 1:
        raise ConfigError(
            "Cannot provide multiple image fields",
            suggestion="Choose only one: image (raw), image_base64 (pre-encoded), or image_url",
            context={"provided_fields": provided},
        )

    fields: Dict[str, str] = {}
    url = validate_optional_url("image_url", image_url)
    if url is not None:
        fields["image_url"] = url
    if image_base64:
        fields["image_base64"] = validate_base64("image_base64", image_base64)
    elif image:
        fields["image_base64"] = encode_image(image)
    return fields


class FeedsResource(Resource):

    async def create(
        self,
        name: str,
        *,
        description: Optional[str] = None,
        tags: Optional[List[str]] = None,
        category_id: Optional[str] = None,
        image_url: Optional[str] = None,
        image_base64: Optional[str] = None,
        image: Optional[ImageInput] = None,
    ) -> Feed:
        """
        Create a feed owned by the configured wallet.

        At most one of ``image``, ``image_base64`` and ``image_url`` may be
        given; raw ``image`` input is base64-encoded client side.

        Raises:
            ValidationError: Malformed arguments.
            ConfigError: More than one image field.
            NoWalletConfiguredError: No wallet on the client.
        """
        payload: Dict[str, Any] = {"name": validate_required_string("name", name)}
        optional = {
            "description": validate_optional_string("description", description),
            "category_id": validate_optional_uuid("category_id", category_id, "category"),
            "tags": validate_optional_string_list("tags", tags),
        }
        payload.update({k: v for k, v in optional.items() if v is not None})
        payload.update(_image_fields(image, image_base64, image_url))

        response = await self._client.request(
            "/v1/feeds", "POST", json=payload, requires_auth=True, handle_payment=True
        )
        feed = Feed.model_validate(response.json())
        logger.debug("Created feed %s", feed.id)
        return feed

    async def get(self, feed_id: str) -> Feed:
        validate_required_string("feed_id", feed_id)
        return await self._get(f"/v1/feeds/{feed_id}", Feed)

    async def list(
        self,
        *,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
        owner_id: Optional[str] = None,
        owner_wallet_address: Optional[str] = None,
        category: Optional[str] = None,
        tags: Optional[List[str]] = None,
        min_entries: Optional[int] = None,
        min_age: Optional[int] = None,
        max_age: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> Page[Feed]:
        params = {
            "page_size": page_size,
            "page_token": validate_optional_string("page_token", page_token),
            "owner_id": validate_optional_uuid("owner_id", owner_id, "wallet owner"),
            "owner_wallet_address": validate_optional_string("owner_wallet_address", owner_wallet_address),
            "category": validate_optional_uuid("category", category, "category"),
            "tags": validate_optional_string_list("tags", tags),
            "min_entries": min_entries,
            "min_age": min_age,
            "max_age": max_age,
            "is_active": validate_optional_bool("is_active", is_active),
        }
        return await self._get_page("/v1/feeds", Feed, params)

    async def update(
        self,
        feed_id: str,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        category_id: Optional[str] = None,
        tags: Optional[List[str]] = None,
        is_active: Optional[bool] = None,
        image_url: Optional[str] = None,
        image_base64: Optional[str] = None,
        image: Optional[ImageInput] = None,
    ) -> Feed:
        """Patch a feed; only the fields passed are sent. Requires ownership."""
        validate_required_string("feed_id", feed_id)
        changes = {
            "name": validate_optional_string("name", name),
            "description": validate_optional_string("description", description),
            "category_id": validate_optional_uuid("category_id", category_id, "category"),
            "tags": validate_optional_string_list("tags", tags),
            "is_active": validate_optional_bool("is_active", is_active),
        }
        payload = {k: v for k, v in changes.items() if v is not None}
        payload.update(_image_fields(image, image_base64, image_url))

        response = await self._client.request(
            f"/v1/feeds/{feed_id}", "PATCH", json=payload, requires_auth=True
        )
        return Feed.model_validate(response.json())

    async def delete(self, feed_id: str) -> None:
        validate_required_string("feed_id", feed_id)
        await self._client.request(f"/v1/feeds/{feed_id}", "DELETE", requires_auth=True)

    async def my_feeds(self, **query: Any) -> Page[Feed]:
        """Feeds owned by the configured wallet."""
        address = self._client.get_wallet_address()
        return await self.list(owner_wallet_address=address, **query)

    def paginate(self, page_size: int = 20, **query: Any) -> CursorPaginator[Feed]:
        return CursorPaginator(self.list, page_size, **query)
