from typing import Optional

from ..schemas.resources import Wallet, WalletStats
from ..validation import (
    validate_optional_string,
    validate_optional_url,
    validate_required_string,
    validate_wallet_address,
)
from .bases import Resource


class WalletsResource(Resource):
    """Wallet profiles and their publishing/purchasing statistics."""

    async def get(self, wallet_id: str) -> Wallet:
        validate_required_string("wallet_id", wallet_id)
        return await self._get(f"/v1/wallets/{wallet_id}", Wallet)

    async def get_by_address(self, address: str) -> Wallet:
        validate_required_string("address", address)
        validate_wallet_address("address", address)
        return await self._get(f"/v1/wallets/address/{address}", Wallet)

    async def get_stats(self, wallet_id: str) -> WalletStats:
        validate_required_string("wallet_id", wallet_id)
        return await self._get(f"/v1/wallets/{wallet_id}/stats", WalletStats)

    async def update(
        self,
        wallet_id: str,
        *,
        username: Optional[str] = None,
        picture_url: Optional[str] = None,
    ) -> Wallet:
        """Update the profile; requires the wallet's own signature."""
        validate_required_string("wallet_id", wallet_id)
        changes = {
            "username": validate_optional_string("username", username),
            "picture_url": validate_optional_url("picture_url", picture_url),
        }
        payload = {k: v for k, v in changes.items() if v is not None}
        response = await self._client.request(
            f"/v1/wallets/{wallet_id}", "PATCH", json=payload, requires_auth=True
        )
        return Wallet.model_validate(response.json())

    async def get_me(self) -> Wallet:
        """Profile of the configured wallet."""
        return await self.get_by_address(self._client.get_wallet_address())
