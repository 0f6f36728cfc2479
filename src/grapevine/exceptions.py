"""
Exception and Error Definitions Module

Defines the exception hierarchy for the Grapevine SDK. Every error raised by
the request pipeline carries a human-readable message, an optional
suggestion for fixing it, and a ``context`` dict with structured details
(status codes, raw bodies, network names) so callers can decide whether to
retry at a higher level.

Exception Hierarchy:
    GrapevineError (root)
    ├── ConfigError
    ├── ValidationError
    │   └── ContentError
    ├── AuthError
    │   ├── NoWalletConfiguredError
    │   ├── InvalidKeyFormatError
    │   ├── ChallengeRequestFailedError
    │   └── WalletError
    │       └── UserRejectedError
    ├── PaymentError
    │   ├── MalformedPaymentResponseError
    │   ├── NoMatchingPaymentRequirementError
    │   └── UnsupportedNetworkError
    └── ApiError
        └── RequestFailedError
    InvalidTransition
"""

import json
from typing import Any, Dict, Optional


class GrapevineError(Exception):
    """
    Root exception class for all SDK-specific exceptions.

    Attributes:
        message: Short description of what went wrong.
        suggestion: Optional hint describing how to fix the problem.
        context: Structured details about the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}

    def detailed_message(self) -> str:
        """Return the message followed by the suggestion, when one exists."""
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation suitable for logging or JSON output."""
        return {
            "name": type(self).__name__,
            "message": self.message,
            "suggestion": self.suggestion,
            "context": self.context,
        }

    def __str__(self) -> str:
        return self.message


class ConfigError(GrapevineError):
    """
    Raised when client construction options conflict or are malformed.

    Never reaches the network.
    """

    @classmethod
    def conflicting(cls, first: str, second: str) -> "ConfigError":
        return cls(
            f"Cannot provide both {first} and {second}",
            suggestion=f"Choose either {first} or {second}, but not both",
            context={"fields": [first, second]},
        )

    @classmethod
    def invalid_options(cls, errors: list) -> "ConfigError":
        """Wrap field-level problems found while validating construction options."""
        fields = ", ".join(error["field"] for error in errors) or "options"
        return cls(
            f"Invalid client configuration: {fields}",
            suggestion="Check option names and values against GrapevineConfig",
            context={"errors": errors},
        )


class ValidationError(GrapevineError):
    """
    Raised when call arguments are malformed, before any request is dispatched.

    Attributes:
        field: Name of the offending argument.
        value: The rejected value.
    """

    def __init__(
        self,
        field: str,
        value: Any,
        expected: str,
        suggestion: Optional[str] = None,
    ):
        try:
            rendered = json.dumps(value)
        except (TypeError, ValueError):
            rendered = repr(value)
        message = f"Invalid {field}: expected {expected}, got {rendered}"
        if suggestion:
            message = f"{message}. {suggestion}"
        super().__init__(
            message,
            suggestion=suggestion,
            context={"field": field, "expected": expected},
        )
        self.field = field
        self.value = value


class ContentError(ValidationError):
    """Raised when entry content or feed image input cannot be encoded."""

    @classmethod
    def content_required(cls) -> "ContentError":
        return cls(
            "content",
            None,
            "content or content_base64",
            "Provide either raw content or pre-encoded base64, not neither",
        )

    @classmethod
    def both_provided(cls, first: str = "content", second: str = "content_base64") -> "ContentError":
        return cls(
            f"{first}/{second}",
            "both",
            "exactly one of the two fields",
            f"Choose either {first} or {second}, not both",
        )

    @classmethod
    def invalid_base64(cls, field: str = "content_base64") -> "ContentError":
        return cls(
            field,
            "<invalid>",
            "valid base64 data",
            "Strip any data URL prefix and pass only the base64 payload",
        )


# ============================================================================
# Authentication
# ============================================================================

class AuthError(GrapevineError):
    """
    Base exception for wallet authentication failures.

    This includes scenarios such as:
    - No wallet configured for an authenticated call
    - Malformed private key
    - Nonce challenge request rejected by the server
    - Wallet refusing or failing to sign
    """


class NoWalletConfiguredError(AuthError):
    """Raised when an authenticated call is attempted without a wallet."""

    def __init__(self, message: str = "No wallet configured for authentication"):
        super().__init__(
            message,
            suggestion="Configure a wallet with set_wallet() or provide a private key",
        )


class InvalidKeyFormatError(AuthError):
    """Raised when a private key is not a 0x-prefixed 32-byte hex string."""

    def __init__(self, key: Optional[str] = None):
        context = {}
        if isinstance(key, str) and key:
            context["provided_key"] = f"{key[:6]}..." if len(key) > 6 else key
        super().__init__(
            "Invalid private key format",
            suggestion="Private key must be 66 characters starting with 0x",
            context=context,
        )


class ChallengeRequestFailedError(AuthError):
    """
    Raised when the nonce endpoint does not return a usable challenge.

    Attributes:
        status: HTTP status code returned by the nonce endpoint.
    """

    def __init__(self, status: int, body: str = ""):
        super().__init__(
            f"Nonce request failed: {status}",
            context={"status": status, "response": body[:200]},
        )
        self.status = status
        self.body = body


class WalletError(AuthError):
    """Raised when an external wallet returns an error for a signing request."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message, context={"code": code} if code is not None else None)
        self.code = code


class UserRejectedError(WalletError):
    """Raised when the wallet user declines a signature request (EIP-1193 code 4001)."""

    def __init__(self, message: str = "User rejected the signature request"):
        super().__init__(message, code=4001)


# ============================================================================
# Payment
# ============================================================================

class PaymentError(GrapevineError):
    """Base exception for x402 payment negotiation failures."""


class MalformedPaymentResponseError(PaymentError):
    """Raised when a 402 body lacks a usable ``accepts`` list."""

    def __init__(self, reason: str = "Invalid payment requirements in 402 response"):
        super().__init__(reason)


class NoMatchingPaymentRequirementError(PaymentError):
    """
    Raised when no advertised requirement matches the active network.

    Attributes:
        network: The client's configured x402 network.
        offered: Networks the server advertised.
    """

    def __init__(self, network: str, offered: Optional[list] = None):
        super().__init__(
            f"No payment requirements match network: {network}",
            context={"network": network, "offered": offered or []},
        )
        self.network = network
        self.offered = offered or []


class UnsupportedNetworkError(PaymentError):
    """Raised when an x402 network name has no known chain id."""

    def __init__(self, network: str):
        super().__init__(f"Unsupported x402 network: {network}", context={"network": network})
        self.network = network


# ============================================================================
# API
# ============================================================================

class ApiError(GrapevineError):
    """Base exception for unsuccessful HTTP outcomes."""


class RequestFailedError(ApiError):
    """
    Raised for any terminal non-success HTTP response.

    Attributes:
        status: HTTP status code.
        body: Raw response text.
        url: Requested URL.
    """

    def __init__(self, status: int, body: str, url: Optional[str] = None):
        super().__init__(
            f"API request failed with status {status}",
            suggestion=_suggestion_for_status(status),
            context={
                "status": status,
                "url": url or "unknown",
                "response": body if len(body) <= 200 else body[:200] + "...",
            },
        )
        self.status = status
        self.body = body
        self.url = url


def _suggestion_for_status(status: int) -> str:
    if status >= 500:
        return "This is a server error. Please try again later"
    if status == 401:
        return "Authentication failed. Check your wallet connection or private key"
    if status == 402:
        return "Payment required for this operation"
    if status == 404:
        return "The requested resource was not found. Check your feed/entry IDs"
    return "Check your request parameters and try again"


class InvalidTransition(Exception):
    """
    Raised when the request dispatcher attempts an illegal state transition.

    Indicates a programming error inside the pipeline rather than a remote
    failure, so it does not derive from GrapevineError.
    """
