"""
Externally Connected Wallet

Delegates signing to a wallet reachable over EIP-1193 style JSON-RPC, such
as a browser extension bridged through a local RPC endpoint, a remote signer,
or any object implementing web3's async provider interface
(``async make_request(method, params) -> dict``).

Signature material is opaque to the SDK: the wallet may prompt its user,
may take arbitrarily long to answer, and may produce different signatures
for identical requests.
"""

import json
import logging
from typing import Any, Dict, List, Union

from eth_utils import is_address, to_checksum_address, to_hex
from web3 import AsyncHTTPProvider

from ..exceptions import UserRejectedError, ValidationError, WalletError
from .bases import WalletAdapter

logger = logging.getLogger(__name__)

# EIP-1193 provider error codes
USER_REJECTED_CODE = 4001


def _normalize_chain_id(chain_id: Union[int, str]) -> str:
    if isinstance(chain_id, int) and not isinstance(chain_id, bool):
        return str(chain_id)
    text = str(chain_id).strip()
    try:
        if text.lower().startswith("0x"):
            return str(int(text, 16))
        return str(int(text))
    except ValueError as exc:
        raise WalletError(f"Wallet reported an unusable chain id: {chain_id!r}") from exc


async def _rpc(provider: Any, method: str, params: List[Any]) -> Any:
    """
    Issue one JSON-RPC call and unwrap its result.

    Raises:
        UserRejectedError: On EIP-1193 error code 4001.
        WalletError: On any other JSON-RPC error object.
    """
    response = await provider.make_request(method, params)
    error = response.get("error") if isinstance(response, dict) else None
    if error:
        code = error.get("code") if isinstance(error, dict) else None
        message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
        if code == USER_REJECTED_CODE:
            raise UserRejectedError(message)
        raise WalletError(f"{method} failed: {message}", code=code)
    if not isinstance(response, dict) or "result" not in response:
        raise WalletError(f"{method} returned no result")
    return response["result"]


class ConnectedWallet(WalletAdapter):
    """
    Wallet whose key lives outside this process.

    Use ``await ConnectedWallet.connect(provider_or_url)`` to discover the
    account and chain from the wallet itself, or construct directly when both
    are already known.
    """

    def __init__(self, provider: Any, address: str, chain_id: Union[int, str]):
        """
        Args:
            provider: Object exposing ``async make_request(method, params)``.
            address: Account the wallet signs with.
            chain_id: Chain id as int, decimal string or 0x-hex string.

        Raises:
            ValidationError: If the address is not a valid EVM address.
            WalletError: If the chain id cannot be parsed.
        """
        if not is_address(address):
            raise ValidationError("address", address, "a valid EVM address")
        self._provider = provider
        self._address = to_checksum_address(address)
        self._chain_id = _normalize_chain_id(chain_id)

    @classmethod
    async def connect(cls, provider: Union[str, Any]) -> "ConnectedWallet":
        """
        Ask the wallet for its active account and chain.

        ``eth_requestAccounts`` is tried first (it may prompt the user);
        wallets that do not implement it fall back to ``eth_accounts``.

        Args:
            provider: An async provider or an HTTP JSON-RPC URL.

        Raises:
            UserRejectedError: If the user declines the connection request.
            WalletError: If no valid account or chain id is exposed.
        """
        if isinstance(provider, str):
            return await cls.from_url(provider)

        try:
            accounts = await _rpc(provider, "eth_requestAccounts", [])
        except UserRejectedError:
            raise
        except WalletError:
            logger.debug("eth_requestAccounts unavailable, falling back to eth_accounts")
            accounts = await _rpc(provider, "eth_accounts", [])

        if not accounts:
            raise WalletError("Wallet address not available from connected wallet")
        if not isinstance(accounts[0], str) or not is_address(accounts[0]):
            raise WalletError(f"Connected wallet returned an invalid address: {accounts[0]!r}")
        chain_id = await _rpc(provider, "eth_chainId", [])
        return cls(provider, accounts[0], chain_id)

    @classmethod
    async def from_url(cls, url: str) -> "ConnectedWallet":
        """Connect through a web3 ``AsyncHTTPProvider`` pointed at ``url``."""
        return await cls.connect(AsyncHTTPProvider(url))

    @property
    def address(self) -> str:
        return self._address

    @property
    def chain_id(self) -> str:
        return self._chain_id

    async def sign_message(self, message: str) -> str:
        return await _rpc(self._provider, "personal_sign", [to_hex(text=message), self._address])

    async def sign_typed_data(self, typed_data: Dict[str, Any]) -> str:
        return await _rpc(
            self._provider,
            "eth_signTypedData_v4",
            [self._address, json.dumps(typed_data)],
        )
