"""
Base class shared by the resource groups hanging off ``GrapevineClient``.
"""

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Type, TypeVar

from ..pagination import parse_page
from ..schemas.https import Page

if TYPE_CHECKING:
    from ..client import GrapevineClient

M = TypeVar("M")


class Resource:
    """Holds the owning client and decodes JSON responses into models."""

    def __init__(self, client: "GrapevineClient"):
        self._client = client

    async def _get(self, path: str, model: Type[M], params: Optional[Mapping[str, Any]] = None) -> M:
        response = await self._client.request(path, "GET", params=params)
        return model.model_validate(response.json())

    async def _get_page(self, path: str, item_type: Type[M], params: Dict[str, Any]) -> Page[M]:
        response = await self._client.request(path, "GET", params=params)
        return parse_page(response, item_type)
