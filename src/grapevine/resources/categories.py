from typing import Any, List, Optional

from ..pagination import CursorPaginator
from ..schemas.https import Page
from ..schemas.resources import Category
from ..validation import validate_optional_bool, validate_optional_string, validate_required_string
from .bases import Resource


class CategoriesResource(Resource):
    """Read-only catalogue of feed categories."""

    async def list(
        self,
        *,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Page[Category]:
        params = {
            "page_size": page_size,
            "page_token": validate_optional_string("page_token", page_token),
            "is_active": validate_optional_bool("is_active", is_active),
            "search": validate_optional_string("search", search),
        }
        return await self._get_page("/v1/categories", Category, params)

    async def get(self, category_id: str) -> Category:
        validate_required_string("category_id", category_id)
        return await self._get(f"/v1/categories/{category_id}", Category)

    def paginate(self, page_size: int = 20, **query: Any) -> CursorPaginator[Category]:
        return CursorPaginator(self.list, page_size, **query)

    async def get_all(self, **query: Any) -> List[Category]:
        """Every category, fetched in pages of 100."""
        return await self.paginate(100, **query).collect()
