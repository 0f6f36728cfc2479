"""
Nonce Challenge-Response Authentication

Turns a wallet into per-request authentication headers:

1. POST ``{api_url}/v1/auth/nonce`` with the wallet address
2. Sign the returned challenge message verbatim (EIP-191)
3. Package address, signature, message, timestamp and chain id as ``x-*`` headers

Challenges embed a single-use server nonce, so nothing here is cached: every
call to ``get_auth_headers`` performs a fresh round trip.
"""

import logging
import time

import httpx

from .exceptions import ChallengeRequestFailedError
from .schemas.https import AuthChallenge, AuthHeaders, NonceRequest
from .wallets.bases import WalletAdapter

logger = logging.getLogger(__name__)

NONCE_PATH = "/v1/auth/nonce"


class ChallengeAuthenticator:
    """
    Produces fresh ``AuthHeaders`` for one wallet against one API origin.

    Args:
        wallet: Signing capability whose address is being proven.
        api_url: API origin, without trailing slash.
        http_client: Shared ``httpx.AsyncClient`` used for the nonce call.
    """

    def __init__(self, wallet: WalletAdapter, api_url: str, http_client: httpx.AsyncClient):
        self.wallet = wallet
        self.api_url = api_url.rstrip("/")
        self._http = http_client

    async def get_auth_headers(self) -> AuthHeaders:
        """
        Fetch a challenge, sign it and return the headers.

        Raises:
            ChallengeRequestFailedError: Non-2xx nonce response or a body
                without a string ``message``. Not retried.
            WalletError: If the wallet fails or refuses to sign.
        """
        address = self.wallet.address
        response = await self._http.post(
            f"{self.api_url}{NONCE_PATH}",
            json=NonceRequest(wallet_address=address).to_dict(),
            headers={"Content-Type": "application/json"},
        )
        if not response.is_success:
            raise ChallengeRequestFailedError(response.status_code, response.text)

        challenge = self._parse_challenge(response)
        signature = await self.wallet.sign_message(challenge.message)
        logger.debug("Signed auth challenge for %s", address)

        return AuthHeaders(
            wallet_address=address,
            signature=signature,
            message=challenge.message,
            timestamp=str(int(time.time())),
            chain_id=self.wallet.chain_id,
        )

    @staticmethod
    def _parse_challenge(response: httpx.Response) -> AuthChallenge:
        try:
            body = response.json()
        except ValueError as exc:
            raise ChallengeRequestFailedError(response.status_code, response.text) from exc
        if not isinstance(body, dict) or not isinstance(body.get("message"), str):
            raise ChallengeRequestFailedError(response.status_code, response.text)
        return AuthChallenge(message=body["message"])
