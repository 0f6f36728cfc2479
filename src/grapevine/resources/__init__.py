from .bases import Resource
from .categories import CategoriesResource
from .entries import EntriesResource
from .feeds import FeedsResource
from .leaderboards import LeaderboardsResource
from .transactions import TransactionsResource
from .wallets import WalletsResource

__all__ = [
    "Resource",
    "CategoriesResource",
    "EntriesResource",
    "FeedsResource",
    "LeaderboardsResource",
    "TransactionsResource",
    "WalletsResource",
]
