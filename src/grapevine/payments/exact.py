"""
x402 ``exact`` Scheme for EVM Networks

Builds the ``X-PAYMENT`` header value for a selected payment requirement:

1. Derive the token's EIP-712 domain (name/version from ``requirement.extra``,
   chain id from the x402 network, verifying contract = asset)
2. Build an ERC-3009 ``TransferWithAuthorization`` for the required amount,
   valid from ten minutes ago until ``maxTimeoutSeconds`` from now
3. Ask the wallet to sign the typed data
4. Base64-encode the JSON ``PaymentPayload``

The signature is produced by the wallet capability, so the same code path
serves local keys and externally connected wallets.
"""

import base64
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from eth_utils import is_address, to_checksum_address

from ..exceptions import MalformedPaymentResponseError
from ..networks import chain_id_for_x402_network
from ..schemas.https import (
    ExactEvmAuthorization,
    ExactEvmPayload,
    PaymentPayload,
    PaymentRequirement,
)
from ..wallets.bases import WalletAdapter

DEFAULT_DOMAIN_NAME = "USDC"
DEFAULT_DOMAIN_VERSION = "2"
# validAfter is backdated to tolerate clock skew between client and chain
VALID_AFTER_SKEW_SECONDS = 600

TRANSFER_WITH_AUTHORIZATION_TYPES = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
    "TransferWithAuthorization": [
        {"name": "from", "type": "address"},
        {"name": "to", "type": "address"},
        {"name": "value", "type": "uint256"},
        {"name": "validAfter", "type": "uint256"},
        {"name": "validBefore", "type": "uint256"},
        {"name": "nonce", "type": "bytes32"},
    ],
}


def random_nonce() -> str:
    """Random bytes32 hex string."""
    return "0x" + os.urandom(32).hex()


@dataclass(frozen=True)
class TransferAuthorization:
    """
    Unsigned ERC-3009 authorization together with the token domain it is
    signed under.

    Attributes:
        payer: Paying address (``from``).
        pay_to: Receiving address (``to``).
        value: Amount in the token's atomic units.
        valid_after: Unix time after which the authorization is usable.
        valid_before: Unix time at which the authorization expires.
        nonce: Random bytes32 hex string.
        token_name: EIP-712 domain name of the token.
        token_version: EIP-712 domain version of the token.
        chain_id: Chain the token lives on.
        token: Token contract, the domain's ``verifyingContract``.
    """
    payer: str
    pay_to: str
    value: int
    valid_after: int
    valid_before: int
    nonce: str
    token_name: str
    token_version: str
    chain_id: int
    token: str

    def typed_data(self) -> Dict[str, Any]:
        """``{types, primaryType, domain, message}`` for ``eth_signTypedData_v4``."""
        return {
            "types": {name: [dict(f) for f in fields] for name, fields in TRANSFER_WITH_AUTHORIZATION_TYPES.items()},
            "primaryType": "TransferWithAuthorization",
            "domain": {
                "name": self.token_name,
                "version": self.token_version,
                "chainId": self.chain_id,
                "verifyingContract": self.token,
            },
            "message": {
                "from": self.payer,
                "to": self.pay_to,
                "value": self.value,
                "validAfter": self.valid_after,
                "validBefore": self.valid_before,
                "nonce": self.nonce,
            },
        }

    def signed(self, signature: str) -> ExactEvmPayload:
        return ExactEvmPayload(
            signature=signature,
            authorization=ExactEvmAuthorization(
                from_=self.payer,
                to=self.pay_to,
                value=str(self.value),
                valid_after=str(self.valid_after),
                valid_before=str(self.valid_before),
                nonce=self.nonce,
            ),
        )


class PaymentScheme(ABC):
    """
    Turns one payment requirement into an ``X-PAYMENT`` header value.

    Implementations must not issue network calls of their own; the only
    side effect allowed is asking the wallet for a signature.
    """

    scheme: str

    @abstractmethod
    async def create_payment_header(
        self,
        wallet: WalletAdapter,
        requirement: PaymentRequirement,
        x402_version: int,
    ) -> str:
        """
        Args:
            wallet: Payer.
            requirement: The selected ``accepts`` entry.
            x402_version: Protocol version echoed into the payload.

        Returns:
            Opaque header value.
        """


class ExactEvmScheme(PaymentScheme):
    """
    ERC-3009 based ``exact`` scheme.

    Args:
        clock: Returns the current Unix time; injectable for tests.
        nonce_factory: Returns a bytes32 hex nonce; injectable for tests.
    """

    scheme = "exact"

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        nonce_factory: Optional[Callable[[], str]] = None,
    ):
        self._clock = clock
        self._nonce_factory = nonce_factory or random_nonce

    def build_authorization(self, payer: str, requirement: PaymentRequirement) -> TransferAuthorization:
        """
        Build the unsigned authorization paying ``requirement``.

        Raises:
            UnsupportedNetworkError: Unknown x402 network.
            MalformedPaymentResponseError: Non-numeric amount or invalid addresses.
        """
        chain_id = chain_id_for_x402_network(requirement.network)
        extra = requirement.extra or {}

        try:
            value = int(requirement.max_amount_required)
        except ValueError as exc:
            raise MalformedPaymentResponseError(
                f"maxAmountRequired is not an integer: {requirement.max_amount_required!r}"
            ) from exc
        for label, address in (("payTo", requirement.pay_to), ("asset", requirement.asset)):
            if not is_address(address):
                raise MalformedPaymentResponseError(f"{label} is not a valid address: {address!r}")

        now = int(self._clock())
        return TransferAuthorization(
            payer=payer,
            pay_to=to_checksum_address(requirement.pay_to),
            value=value,
            valid_after=now - VALID_AFTER_SKEW_SECONDS,
            valid_before=now + requirement.max_timeout_seconds,
            nonce=self._nonce_factory(),
            token_name=str(extra.get("name") or DEFAULT_DOMAIN_NAME),
            token_version=str(extra.get("version") or DEFAULT_DOMAIN_VERSION),
            chain_id=chain_id,
            token=to_checksum_address(requirement.asset),
        )

    async def create_payment_header(
        self,
        wallet: WalletAdapter,
        requirement: PaymentRequirement,
        x402_version: int,
    ) -> str:
        authorization = self.build_authorization(wallet.address, requirement)
        signature = await wallet.sign_typed_data(authorization.typed_data())
        payload = PaymentPayload(
            x402_version=x402_version,
            scheme=self.scheme,
            network=requirement.network,
            payload=authorization.signed(signature),
        )
        return encode_payment_header(payload)


def encode_payment_header(payload: PaymentPayload) -> str:
    return base64.b64encode(payload.to_canonical_json().encode("utf-8")).decode("ascii")


def decode_payment_header(header: str) -> PaymentPayload:
    """Inverse of ``encode_payment_header``."""
    return PaymentPayload.model_validate_json(base64.b64decode(header))
