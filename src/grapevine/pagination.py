"""
Cursor Pagination

List endpoints take ``page_size``/``page_token`` and answer with
``{data, pagination: {next_page_token, has_more}}``. ``paginate`` walks such
an endpoint lazily, one batch per fetch, until the server stops returning a
continuation token.

Example::

    async for batch in client.feeds.paginate(page_size=50):
        for feed in batch:
            print(feed.name)
"""

import logging
from typing import Any, AsyncIterable, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Type, TypeVar

import httpx

from .schemas.https import ApiPagination, Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

FetchPage = Callable[..., Awaitable[Page[T]]]


async def paginate(fetch_page: FetchPage, page_size: int = 20, **query: Any) -> AsyncIterator[List[T]]:
    """
    Yield successive batches from a cursor-paginated fetch function.

    ``fetch_page`` is called as ``fetch_page(page_size=..., page_token=...,
    **query)``; the first call passes ``page_token=None``. Iteration ends as
    soon as a page carries no ``next_page_token`` (``None`` or empty).
    Errors from ``fetch_page`` propagate to the consumer.
    """
    cursor: Optional[str] = None
    while True:
        page = await fetch_page(page_size=page_size, page_token=cursor, **query)
        logger.debug("Fetched page of %d item(s), has_more=%s", len(page.data), page.has_more)
        yield page.data
        cursor = page.next_page_token
        if not cursor:
            return


class CursorPaginator(AsyncIterable[List[T]]):
    """
    Reusable async iterable over a paginated endpoint.

    Each ``async for`` starts a fresh walk from the first page.
    """

    def __init__(self, fetch_page: FetchPage, page_size: int = 20, **query: Any):
        self._fetch_page = fetch_page
        self.page_size = page_size
        self._query = query

    def __aiter__(self) -> AsyncIterator[List[T]]:
        return paginate(self._fetch_page, self.page_size, **self._query)

    async def collect(self) -> List[T]:
        """Drain every page into one list."""
        items: List[T] = []
        async for batch in self:
            items.extend(batch)
        return items


def parse_page(response: httpx.Response, item_type: Type[T]) -> Page[T]:
    """Decode a ``{data, pagination}`` envelope into a ``Page``."""
    body: Dict[str, Any] = response.json()
    pagination = ApiPagination.model_validate(body.get("pagination") or {})
    return Page[item_type](
        data=body.get("data") or [],
        next_page_token=pagination.next_page_token,
        has_more=pagination.has_more,
    )
