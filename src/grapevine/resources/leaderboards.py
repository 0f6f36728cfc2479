"""
Leaderboards: ranked views over feeds, buyers and providers.

Boards that accept a ``period`` take one of ``"1d"``, ``"7d"``, ``"30d"``
or ``"all"``.
"""

from typing import Any, Dict, Optional, get_args

from ..exceptions import ValidationError
from ..schemas.https import Page
from ..schemas.resources import LeaderboardPeriod, LeaderboardResponse
from ..validation import validate_optional_string
from .bases import Resource

PERIODS = get_args(LeaderboardPeriod)


def _validate_period(period: Optional[str]) -> Optional[str]:
    if period is not None and period not in PERIODS:
        raise ValidationError("period", period, " | ".join(PERIODS), "Use one of the supported periods")
    return period


class LeaderboardsResource(Resource):

    async def _board(self, name: str, **params: Any) -> LeaderboardResponse:
        return await self._get(f"/v1/leaderboards/{name}", LeaderboardResponse, params)

    async def trending(self, *, page_size: Optional[int] = None) -> LeaderboardResponse:
        return await self._board("trending", page_size=page_size)

    async def most_popular(
        self, *, page_size: Optional[int] = None, period: Optional[str] = None
    ) -> LeaderboardResponse:
        return await self._board("most-popular", page_size=page_size, period=_validate_period(period))

    async def top_buyers(
        self, *, page_size: Optional[int] = None, period: Optional[str] = None
    ) -> LeaderboardResponse:
        return await self._board("top-buyers", page_size=page_size, period=_validate_period(period))

    async def top_providers(
        self, *, page_size: Optional[int] = None, period: Optional[str] = None
    ) -> LeaderboardResponse:
        return await self._board("top-providers", page_size=page_size, period=_validate_period(period))

    async def category_stats(self) -> LeaderboardResponse:
        return await self._board("category-stats")

    async def recent_entries(
        self, *, page_size: Optional[int] = None, page_token: Optional[str] = None
    ) -> Page[Dict[str, Any]]:
        """Most recently published entries, cursor paginated."""
        params = {
            "page_size": page_size,
            "page_token": validate_optional_string("page_token", page_token),
        }
        return await self._get_page("/v1/leaderboards/recent-entries", Dict[str, Any], params)

    async def top_feeds(self, *, page_size: Optional[int] = None) -> LeaderboardResponse:
        return await self._board("top-feeds", page_size=page_size)

    async def top_revenue(
        self, *, page_size: Optional[int] = None, period: Optional[str] = None
    ) -> LeaderboardResponse:
        return await self._board("top-revenue", page_size=page_size, period=_validate_period(period))
