"""
Abstract Wallet Capability

Defines the interface every wallet variant must implement. A wallet proves
ownership of an EVM address by signing two kinds of payloads:

- EIP-191 personal messages (the nonce challenge used for authentication)
- EIP-712 typed data (the ERC-3009 authorization used for x402 payments)

The base class carries no state. Variants differ in where the key lives and
whether signing can suspend on user interaction, so nothing about one
variant's signing model is assumed by the other.

Core Classes:
    - WalletAdapter: capability interface implemented by LocalKeyWallet and ConnectedWallet
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class WalletAdapter(ABC):
    """
    Abstract signing capability.

    ``address`` and ``chain_id`` are fixed for the lifetime of the object and
    are available without suspending. Both signing operations are coroutines:
    a local key completes immediately, an externally connected wallet may
    wait indefinitely for user approval.
    """

    @property
    @abstractmethod
    def address(self) -> str:
        """Checksummed 0x-prefixed wallet address."""

    @property
    @abstractmethod
    def chain_id(self) -> str:
        """Decimal chain id string, as sent in the ``x-chain-id`` header."""

    @abstractmethod
    async def sign_message(self, message: str) -> str:
        """
        Sign an EIP-191 personal message.

        Args:
            message: Text to sign, passed verbatim.

        Returns:
            0x-prefixed 65-byte signature hex string.

        Raises:
            UserRejectedError: If an interactive wallet declines the request.
            WalletError: For any other wallet-side failure.
        """

    @abstractmethod
    async def sign_typed_data(self, typed_data: Dict[str, Any]) -> str:
        """
        Sign an EIP-712 structured payload.

        Args:
            typed_data: ``{types, primaryType, domain, message}`` dictionary.

        Returns:
            0x-prefixed 65-byte signature hex string.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address={self.address}, chain_id={self.chain_id})"
