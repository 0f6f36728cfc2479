from typing import Any, Optional

from ..pagination import CursorPaginator
from ..schemas.https import Page
from ..schemas.resources import Transaction
from ..validation import validate_optional_string, validate_required_string
from .bases import Resource


class TransactionsResource(Resource):
    """Settled x402 payments recorded by the service."""

    async def list(
        self,
        *,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
        payer: Optional[str] = None,
        pay_to: Optional[str] = None,
        entry_id: Optional[str] = None,
    ) -> Page[Transaction]:
        params = {
            "page_size": page_size,
            "page_token": validate_optional_string("page_token", page_token),
            "payer": validate_optional_string("payer", payer),
            "pay_to": validate_optional_string("pay_to", pay_to),
            "entry_id": validate_optional_string("entry_id", entry_id),
        }
        return await self._get_page("/v1/transactions", Transaction, params)

    async def get(self, transaction_id: str) -> Transaction:
        validate_required_string("transaction_id", transaction_id)
        return await self._get(f"/v1/transactions/{transaction_id}", Transaction)

    async def get_by_hash(self, tx_hash: str) -> Transaction:
        validate_required_string("hash", tx_hash)
        return await self._get(f"/v1/transactions/hash/{tx_hash}", Transaction)

    def paginate(self, page_size: int = 20, **query: Any) -> CursorPaginator[Transaction]:
        return CursorPaginator(self.list, page_size, **query)
