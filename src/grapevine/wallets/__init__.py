"""
Wallet capability variants.

Provides the signing capability used for challenge authentication and for
x402 payment authorizations.
"""

from .bases import WalletAdapter
from .connected import ConnectedWallet
from .local import LocalKeyWallet

__all__ = ["WalletAdapter", "LocalKeyWallet", "ConnectedWallet"]
