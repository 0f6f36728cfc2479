"""
Entries: individual content items published to a feed.

Content is uploaded base64-encoded together with its MIME type. Either raw
``content`` (str, bytes, dict/list, or a file path) or a pre-encoded
``content_base64`` must be supplied, never both.
"""

import asyncio
import functools
import json
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

import httpx

from ..content import Content, OCTET_STREAM, encode_content
from ..exceptions import ContentError, GrapevineError
from ..pagination import CursorPaginator
from ..schemas.https import Page
from ..schemas.resources import BatchCreateResult, BatchFailure, Entry, EntryPrice
from ..validation import (
    validate_base64,
    validate_optional_bool,
    validate_optional_string,
    validate_optional_string_list,
    validate_optional_timestamp,
    validate_required_string,
)
from .bases import Resource

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], Any]


class EntriesResource(Resource):

    async def create(
        self,
        feed_id: str,
        content: Optional[Content] = None,
        *,
        content_base64: Optional[str] = None,
        mime_type: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        metadata: Optional[Union[str, Dict[str, Any]]] = None,
        tags: Optional[List[str]] = None,
        is_free: bool = True,
        expires_at: Optional[int] = None,
        price: Optional[Union[EntryPrice, Mapping[str, Any]]] = None,
    ) -> Entry:
        """
        Publish an entry. Authenticated; paid when the server answers 402.

        Args:
            feed_id: Target feed.
            content: Raw content, encoded client side.
            content_base64: Already encoded content.
            mime_type: Overrides detection.
            metadata: Dict values are sent JSON-encoded.
            is_free: Paid entries need a ``price``.
            expires_at: Unix seconds.
            price: ``EntryPrice`` or ``{"amount": ..., "currency": ...}``.

        Raises:
            ContentError: Neither or both content fields, or invalid base64.
            ValidationError: Malformed arguments.
        """
        validate_required_string("feed_id", feed_id)
        if content is not None and content_base64 is not None:
            raise ContentError.both_provided()
        if content is None and content_base64 is None:
            raise ContentError.content_required()

        if content_base64 is not None:
            encoded = validate_base64("content_base64", content_base64)
            detected = OCTET_STREAM
        else:
            encoded, detected = encode_content(content)

        payload: Dict[str, Any] = {
            "content_base64": encoded,
            "mime_type": validate_optional_string("mime_type", mime_type) or detected,
            "tags": validate_optional_string_list("tags", tags) or [],
            "is_free": bool(is_free),
        }
        for key, value in (
            ("title", validate_optional_string("title", title)),
            ("description", validate_optional_string("description", description)),
            ("expires_at", validate_optional_timestamp("expires_at", expires_at)),
        ):
            if value is not None:
                payload[key] = value
        if metadata:
            payload["metadata"] = metadata if isinstance(metadata, str) else json.dumps(metadata)
        if not is_free and price:
            entry_price = price if isinstance(price, EntryPrice) else EntryPrice.model_validate(price)
            payload["price"] = {**entry_price.to_dict(), "network": self._client.x402_network}

        response = await self._client.request(
            f"/v1/feeds/{feed_id}/entries", "POST", json=payload, requires_auth=True, handle_payment=True
        )
        return Entry.model_validate(response.json())

    async def get(self, feed_id: str, entry_id: str) -> Entry:
        validate_required_string("feed_id", feed_id)
        validate_required_string("entry_id", entry_id)
        return await self._get(f"/v1/feeds/{feed_id}/entries/{entry_id}", Entry)

    async def list(
        self,
        feed_id: str,
        *,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
        is_free: Optional[bool] = None,
        is_active: Optional[bool] = None,
        tags: Optional[List[str]] = None,
    ) -> Page[Entry]:
        validate_required_string("feed_id", feed_id)
        params = {
            "page_size": page_size,
            "page_token": validate_optional_string("page_token", page_token),
            "is_free": validate_optional_bool("is_free", is_free),
            "is_active": validate_optional_bool("is_active", is_active),
            "tags": validate_optional_string_list("tags", tags),
        }
        return await self._get_page(f"/v1/feeds/{feed_id}/entries", Entry, params)

    async def delete(self, feed_id: str, entry_id: str) -> None:
        validate_required_string("feed_id", feed_id)
        validate_required_string("entry_id", entry_id)
        await self._client.request(f"/v1/feeds/{feed_id}/entries/{entry_id}", "DELETE", requires_auth=True)

    async def batch_create(
        self,
        feed_id: str,
        entries: Sequence[Mapping[str, Any]],
        *,
        on_progress: Optional[ProgressCallback] = None,
        delay_seconds: float = 0,
    ) -> BatchCreateResult:
        """
        Create entries one after another, collecting failures instead of raising.

        Each mapping holds the keyword arguments of ``create``. ``on_progress``
        is called as ``(processed, total)`` after every item, succeeded or
        not, and may be a coroutine function. ``delay_seconds`` is slept
        between items, never after the last one.
        """
        result = BatchCreateResult()
        total = len(entries)

        for index, item in enumerate(entries):
            try:
                result.successful.append(await self.create(feed_id, **item))
            except (GrapevineError, httpx.HTTPError) as exc:
                logger.debug("Batch item %d/%d failed: %s", index + 1, total, exc)
                result.failed.append(BatchFailure(index=index, input=dict(item), error=str(exc)))

            if on_progress is not None:
                outcome = on_progress(index + 1, total)
                if asyncio.iscoroutine(outcome):
                    await outcome
            if delay_seconds and index < total - 1:
                await asyncio.sleep(delay_seconds)

        return result

    def paginate(self, feed_id: str, page_size: int = 20, **query: Any) -> CursorPaginator[Entry]:
        return CursorPaginator(functools.partial(self.list, feed_id), page_size, **query)
