"""
Authenticated Request Dispatcher

Executes one API call through the pipeline:

    BUILDING ──> SENT ──> SUCCESS
       │          │
       │          ├──> PAYMENT_REQUIRED ──> PAID_RETRY_SENT ──> SUCCESS
       │          │            │                   │
       └──────────┴────────────┴───────────────────┴──> FAILURE

- BUILDING: base headers, wallet session snapshot, auth headers
- SENT: the primary call
- PAYMENT_REQUIRED: 402 with payment handling enabled and a wallet present
- PAID_RETRY_SENT: the same call again, with the BUILDING auth headers plus
  ``X-PAYMENT``; at most one per dispatch

Every terminal non-2xx response raises ``RequestFailedError``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

import httpx

from ..auth import ChallengeAuthenticator
from ..exceptions import InvalidTransition, NoWalletConfiguredError, RequestFailedError
from ..payments.negotiator import PaymentNegotiator
from ..payments.exact import PaymentScheme
from ..wallets.bases import WalletAdapter

logger = logging.getLogger(__name__)

PAYMENT_HEADER = "X-PAYMENT"
PAYMENT_RESPONSE_HEADER = "X-PAYMENT-RESPONSE"


class DispatchState(str, Enum):
    BUILDING = "building"
    SENT = "sent"
    SUCCESS = "success"
    PAYMENT_REQUIRED = "payment_required"
    PAID_RETRY_SENT = "paid_retry_sent"
    FAILURE = "failure"


TRANSITIONS: Dict[DispatchState, FrozenSet[DispatchState]] = {
    DispatchState.BUILDING: frozenset({DispatchState.SENT, DispatchState.FAILURE}),
    DispatchState.SENT: frozenset(
        {DispatchState.SUCCESS, DispatchState.PAYMENT_REQUIRED, DispatchState.FAILURE}
    ),
    DispatchState.PAYMENT_REQUIRED: frozenset(
        {DispatchState.PAID_RETRY_SENT, DispatchState.FAILURE}
    ),
    DispatchState.PAID_RETRY_SENT: frozenset({DispatchState.SUCCESS, DispatchState.FAILURE}),
    DispatchState.SUCCESS: frozenset(),
    DispatchState.FAILURE: frozenset(),
}


@dataclass
class DispatchTrace:
    """State of a single dispatch; records every state it passes through."""
    state: DispatchState = DispatchState.BUILDING
    history: List[DispatchState] = field(default_factory=lambda: [DispatchState.BUILDING])

    def advance(self, target: DispatchState) -> None:
        """
        Raises:
            InvalidTransition: If ``target`` is not reachable from the current state.
        """
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransition(f"{self.state.value} -> {target.value}")
        self.state = target
        self.history.append(target)

    @property
    def is_terminal(self) -> bool:
        return not TRANSITIONS[self.state]


@dataclass(frozen=True)
class WalletSession:
    """Wallet plus the collaborators bound to it; replaced as a unit."""
    wallet: WalletAdapter
    authenticator: ChallengeAuthenticator
    negotiator: PaymentNegotiator


class RequestDispatcher:
    """
    Sends API calls with optional wallet authentication and x402 payment.

    Args:
        http_client: Shared ``httpx.AsyncClient``; owned by the caller.
        api_url: API origin, without trailing slash.
        x402_network: Network used to select payment requirements.
        payment_scheme: Scheme handed to every ``PaymentNegotiator``.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_url: str,
        x402_network: str,
        payment_scheme: Optional[PaymentScheme] = None,
    ):
        self._http = http_client
        self.api_url = api_url.rstrip("/")
        self.x402_network = x402_network
        self._payment_scheme = payment_scheme
        self._session: Optional[WalletSession] = None
        # Trace of the most recently started dispatch; a debugging aid only.
        # Concurrent callers pass their own ``trace`` to dispatch().
        self.last_trace: Optional[DispatchTrace] = None

    # =========================================================================
    # Wallet session
    # =========================================================================

    @property
    def session(self) -> Optional[WalletSession]:
        return self._session

    def set_wallet(self, wallet: WalletAdapter) -> WalletSession:
        """Bind a new wallet; calls already past BUILDING keep the old one."""
        self._session = WalletSession(
            wallet=wallet,
            authenticator=ChallengeAuthenticator(wallet, self.api_url, self._http),
            negotiator=PaymentNegotiator(wallet, self.x402_network, self._payment_scheme),
        )
        return self._session

    def clear_wallet(self) -> None:
        self._session = None

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def dispatch(
        self,
        path: str,
        method: str = "GET",
        *,
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        requires_auth: bool = False,
        handle_payment: bool = False,
        trace: Optional[DispatchTrace] = None,
    ) -> httpx.Response:
        """
        Execute one API call.

        Args:
            path: Path below the API origin, e.g. ``/v1/feeds``.
            method: HTTP method.
            json: JSON body, if any.
            params: Query parameters; ``None`` values are dropped.
            requires_auth: Attach wallet auth headers (one nonce round trip).
            handle_payment: Answer a 402 with one paid retry.
            trace: Fresh ``DispatchTrace`` to record this call in; one is
                created when omitted. Either way it becomes ``last_trace``.

        Returns:
            The successful ``httpx.Response``.

        Raises:
            NoWalletConfiguredError: ``requires_auth`` without a wallet; nothing is sent.
            ChallengeRequestFailedError: Nonce request failed.
            PaymentError: The 402 could not be turned into a payment.
            RequestFailedError: Terminal non-2xx response, including a second 402.
        """
        if trace is None:
            trace = DispatchTrace()
        self.last_trace = trace
        url = f"{self.api_url}{path}"
        method = method.upper()
        query = {k: v for k, v in (params or {}).items() if v is not None}

        try:
            # BUILDING
            session = self._session
            headers: Dict[str, str] = {"Content-Type": "application/json"}
            auth_headers: Dict[str, str] = {}
            if requires_auth:
                if session is None:
                    raise NoWalletConfiguredError()
                auth_headers = (await session.authenticator.get_auth_headers()).as_headers()
                headers.update(auth_headers)

            # SENT
            trace.advance(DispatchState.SENT)
            logger.debug("Request: %s %s", method, url)
            response = await self._send(method, url, headers, json, query)

            if response.status_code == 402 and handle_payment and session is not None:
                # PAYMENT_REQUIRED
                trace.advance(DispatchState.PAYMENT_REQUIRED)
                logger.debug("Handling 402 payment required for %s %s", method, url)
                payment = await session.negotiator.build_payment_authorization(response)

                # PAID_RETRY_SENT
                trace.advance(DispatchState.PAID_RETRY_SENT)
                retry_headers = {
                    "Content-Type": "application/json",
                    **auth_headers,
                    PAYMENT_HEADER: payment,
                    "Access-Control-Expose-Headers": PAYMENT_RESPONSE_HEADER,
                }
                response = await self._send(method, url, retry_headers, json, query)
                if response.headers.get(PAYMENT_RESPONSE_HEADER):
                    logger.debug("Payment processed for %s %s", method, url)

            if not response.is_success:
                raise RequestFailedError(response.status_code, response.text, url)
        except Exception:
            if not trace.is_terminal:
                trace.advance(DispatchState.FAILURE)
            raise

        trace.advance(DispatchState.SUCCESS)
        return response

    async def _send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Any,
        params: Dict[str, Any],
    ) -> httpx.Response:
        kwargs: Dict[str, Any] = {"headers": headers}
        if body is not None:
            kwargs["json"] = body
        if params:
            kwargs["params"] = params
        return await self._http.request(method, url, **kwargs)
