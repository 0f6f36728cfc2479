"""
402 Response Negotiation

Reads a ``402 Payment Required`` response, picks the requirement matching
the client's x402 network and delegates header construction to a
``PaymentScheme``.
"""

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import MalformedPaymentResponseError, NoMatchingPaymentRequirementError
from ..schemas.https import PaymentRequiredResponse, PaymentRequirement
from ..schemas.versions import parse_x402_version
from ..wallets.bases import WalletAdapter
from .exact import ExactEvmScheme, PaymentScheme

logger = logging.getLogger(__name__)


def select_payment_requirement(
    requirements: List[PaymentRequirement],
    network: str,
    scheme: str = "exact",
) -> Optional[PaymentRequirement]:
    """First requirement on ``network`` using ``scheme``; server order wins."""
    for requirement in requirements:
        if requirement.network == network and requirement.scheme == scheme:
            return requirement
    return None


class PaymentNegotiator:
    """
    Builds ``X-PAYMENT`` header values from 402 responses.

    Args:
        wallet: Payer.
        network: Active x402 network name (``base-sepolia`` or ``base``).
        scheme: Payment scheme implementation; ``ExactEvmScheme`` by default.
    """

    def __init__(self, wallet: WalletAdapter, network: str, scheme: Optional[PaymentScheme] = None):
        self.wallet = wallet
        self.network = network
        self.scheme = scheme or ExactEvmScheme()

    async def build_payment_authorization(self, response: httpx.Response) -> str:
        """
        Turn a 402 response into a payment header value.

        Raises:
            MalformedPaymentResponseError: Body is not JSON, not an object, or
                ``accepts`` is missing, not a list, or holds invalid entries.
            NoMatchingPaymentRequirementError: No entry for the active network.
        """
        body = self._parse_body(response)
        requirements = body.accepts

        selected = select_payment_requirement(requirements, self.network, self.scheme.scheme)
        if selected is None:
            raise NoMatchingPaymentRequirementError(
                self.network, offered=[r.network for r in requirements]
            )

        x402_version = parse_x402_version(body.x402_version)
        logger.debug(
            "Selected payment requirement network=%s amount=%s pay_to=%s (x402 v%d)",
            selected.network,
            selected.max_amount_required,
            selected.pay_to,
            x402_version,
        )
        return await self.scheme.create_payment_header(self.wallet, selected, x402_version)

    @staticmethod
    def _parse_body(response: httpx.Response) -> PaymentRequiredResponse:
        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedPaymentResponseError("402 response body is not valid JSON") from exc
        if not isinstance(body, dict) or not isinstance(body.get("accepts"), list):
            raise MalformedPaymentResponseError()
        try:
            return PaymentRequiredResponse.model_validate(body)
        except PydanticValidationError as exc:
            raise MalformedPaymentResponseError(
                f"Invalid payment requirement in 402 response: {exc.error_count()} error(s)"
            ) from exc
