"""
HTTP Request/Response Schema Models for the Authenticated Pipeline

The main flow consists of:
1. Client requests a nonce challenge for its wallet (``/v1/auth/nonce``)
2. Client signs the challenge and sends ``x-*`` auth headers with the call
3. Server may answer 402 with a list of acceptable payment requirements
4. Client retries once with an ``X-PAYMENT`` header carrying a signed
   ERC-3009 authorization
5. List endpoints return ``{data, pagination}`` envelopes
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import Field

from .bases import CanonicalModel, GrapevineModel

T = TypeVar("T")


# ============================================================================
# Step 1: Nonce challenge
# ============================================================================

class NonceRequest(GrapevineModel):
    """Body POSTed to the nonce endpoint."""
    wallet_address: str = Field(..., description="Address the challenge is issued for")


class AuthChallenge(GrapevineModel):
    """Server challenge; ``message`` embeds a single-use nonce and is signed verbatim."""
    message: str = Field(..., description="Challenge text to sign")


# ============================================================================
# Step 2: Authentication headers
# ============================================================================

class AuthHeaders(GrapevineModel):
    """Per-request wallet authentication headers.

    Attributes:
        wallet_address: Address that signed the challenge.
        signature: EIP-191 signature over ``message``.
        message: Challenge text exactly as returned by the server.
        timestamp: Epoch seconds at header construction time.
        chain_id: Chain id reported by the wallet.
    """
    wallet_address: str = Field(..., alias="x-wallet-address")
    signature: str = Field(..., alias="x-signature")
    message: str = Field(..., alias="x-message")
    timestamp: str = Field(..., alias="x-timestamp")
    chain_id: str = Field(..., alias="x-chain-id")

    def as_headers(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


# ============================================================================
# Step 3: 402 Payment Required
# ============================================================================

class PaymentRequirement(GrapevineModel):
    """One acceptable way to pay for a resource (x402 v1 ``accepts`` entry)."""
    scheme: str = Field(..., description="Payment scheme, e.g. 'exact'")
    network: str = Field(..., description="x402 network name, e.g. 'base-sepolia'")
    max_amount_required: str = Field(..., alias="maxAmountRequired", description="Atomic units of asset")
    resource: str = Field(default="", description="Resource URL being paid for")
    description: str = Field(default="")
    mime_type: str = Field(default="", alias="mimeType")
    pay_to: str = Field(..., alias="payTo", description="Recipient address")
    max_timeout_seconds: int = Field(default=60, alias="maxTimeoutSeconds", ge=0)
    asset: str = Field(..., description="Token contract address")
    output_schema: Optional[Dict[str, Any]] = Field(default=None, alias="outputSchema")
    extra: Optional[Dict[str, Any]] = Field(default=None, description="Scheme specific data (EIP-712 name/version)")


class PaymentRequiredResponse(GrapevineModel):
    """Body of a 402 response."""
    x402_version: Any = Field(default=None, alias="x402Version")
    accepts: List[PaymentRequirement]
    error: Any = None


# ============================================================================
# Step 4: X-PAYMENT header payload
# ============================================================================

class ExactEvmAuthorization(CanonicalModel):
    """ERC-3009 ``TransferWithAuthorization`` fields as sent over the wire (decimal strings)."""
    from_: str = Field(..., alias="from")
    to: str
    value: str
    valid_after: str = Field(..., alias="validAfter")
    valid_before: str = Field(..., alias="validBefore")
    nonce: str


class ExactEvmPayload(CanonicalModel):
    signature: str
    authorization: ExactEvmAuthorization


class PaymentPayload(CanonicalModel):
    """Decoded form of the ``X-PAYMENT`` header."""
    x402_version: int = Field(..., alias="x402Version")
    scheme: str
    network: str
    payload: ExactEvmPayload


# ============================================================================
# Step 5: Paginated list envelopes
# ============================================================================

class ApiPagination(GrapevineModel):
    page_size: Optional[int] = None
    next_page_token: Optional[str] = None
    has_more: bool = False


class Page(GrapevineModel, Generic[T]):
    """One batch of a cursor-paginated list.

    Attributes:
        data: Items in this batch.
        next_page_token: Opaque continuation token; ``None`` on the last page.
        has_more: Server hint that another page exists.
    """
    data: List[T] = Field(default_factory=list)
    next_page_token: Optional[str] = None
    has_more: bool = False
