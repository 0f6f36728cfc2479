"""
Local Private-Key Wallet

Signs in-process with ``eth_account``; no RPC endpoint or network connection
is required. Signatures are deterministic for a given key and payload.
"""

import re
from typing import Any, Dict

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import ValidationError as EthValidationError
from eth_utils import to_hex

from ..exceptions import InvalidKeyFormatError
from ..networks import get_network
from .bases import WalletAdapter

_PRIVATE_KEY_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")


class LocalKeyWallet(WalletAdapter):
    """
    Wallet backed by a locally held secp256k1 private key.

    The chain id comes from the explicit ``is_testnet`` flag: Base Sepolia
    (84532) for testnet, Base (8453) for mainnet.

    Example::

        wallet = LocalKeyWallet("0x" + "11" * 32, is_testnet=True)
        signature = await wallet.sign_message("hello")
    """

    def __init__(self, private_key: str, is_testnet: bool = True):
        """
        Args:
            private_key: 0x-prefixed 64-hex-character private key.
            is_testnet: Selects the chain id reported by this wallet.

        Raises:
            InvalidKeyFormatError: If the key is malformed or out of range.
        """
        if not isinstance(private_key, str) or not _PRIVATE_KEY_RE.match(private_key):
            raise InvalidKeyFormatError(private_key if isinstance(private_key, str) else None)
        try:
            self._account = Account.from_key(private_key)
        except (ValueError, TypeError, EthValidationError) as exc:
            raise InvalidKeyFormatError(private_key) from exc

        network = get_network("testnet" if is_testnet else "mainnet")
        self._chain_id = str(network.chain_id)

    @property
    def address(self) -> str:
        return self._account.address

    @property
    def chain_id(self) -> str:
        return self._chain_id

    async def sign_message(self, message: str) -> str:
        signed = self._account.sign_message(encode_defunct(text=message))
        return to_hex(signed.signature)

    async def sign_typed_data(self, typed_data: Dict[str, Any]) -> str:
        signed = self._account.sign_typed_data(full_message=typed_data)
        return to_hex(signed.signature)
