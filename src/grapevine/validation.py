"""
Client-side argument validation.

Each helper returns the value unchanged when valid (``None`` for an omitted
optional) and raises ``ValidationError`` otherwise, so malformed input is
reported before any request is dispatched.
"""

import re
import time
from typing import Any, List, Optional

from eth_utils import is_address

from .exceptions import ContentError, ValidationError

UUID_RE = re.compile(
    r"^([0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[1-8][0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}"
    r"|00000000-0000-0000-0000-000000000000"
    r"|ffffffff-ffff-ffff-ffff-ffffffffffff)$"
)
URL_RE = re.compile(r"^https?://.+")
BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")

# Timestamps further out than this are most likely milliseconds
MAX_FUTURE_SECONDS = 365 * 24 * 60 * 60

_OMIT_HINT = "Pass None or omit the field instead of an empty string"


def validate_required_string(field: str, value: Any) -> str:
    if value is None or value == "":
        raise ValidationError(field, value, "non-empty string", "This field is required and cannot be empty")
    if not isinstance(value, str):
        raise ValidationError(field, value, "string", "Provide a valid string value")
    return value


def validate_optional_string(field: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if value == "":
        raise ValidationError(field, value, "non-empty string or omit the field entirely", _OMIT_HINT)
    if not isinstance(value, str):
        raise ValidationError(field, value, "string", "Provide a valid string value")
    return value


def validate_optional_uuid(field: str, value: Any, entity: Optional[str] = None) -> Optional[str]:
    """Validate an optional resource id; ``entity`` names the resource in hints."""
    hint = f"Get valid {entity} IDs from the appropriate API endpoint" if entity else "Use a properly formatted UUID"
    if value is None:
        return None
    if value == "":
        raise ValidationError(field, value, "valid UUID or omit the field entirely", _OMIT_HINT)
    if not isinstance(value, str):
        raise ValidationError(field, value, "UUID string", hint)
    if not UUID_RE.match(value):
        raise ValidationError(
            field,
            value,
            'valid UUID format (e.g., "123e4567-e89b-12d3-a456-426614174000")',
            hint,
        )
    return value


def validate_optional_url(field: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if value == "":
        raise ValidationError(field, value, "valid URL or omit the field entirely", _OMIT_HINT)
    if not isinstance(value, str):
        raise ValidationError(
            field, value, "URL string", "Provide a valid URL string starting with http:// or https://"
        )
    if not URL_RE.match(value):
        raise ValidationError(
            field,
            value,
            "valid URL starting with http:// or https://",
            "Ensure the URL is properly formatted with protocol",
        )
    return value


def validate_optional_string_list(field: str, value: Any) -> Optional[List[str]]:
    """An empty list is valid and distinct from ``None``."""
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise ValidationError(
            field, value, "list of strings", 'Provide a list of string values, e.g. ["tag1", "tag2"]'
        )
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise ValidationError(f"{field}[{index}]", item, "string", "All list items must be strings")
        if item == "":
            raise ValidationError(
                f"{field}[{index}]", item, "non-empty string", "List items cannot be empty strings"
            )
    return list(value)


def validate_optional_timestamp(field: str, value: Any) -> Optional[int]:
    """Unix seconds, positive and no more than a year ahead."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(
            field, value, "Unix timestamp (number)", "Provide a Unix timestamp in seconds, e.g. int(time.time())"
        )
    if value <= 0:
        raise ValidationError(
            field,
            value,
            "positive Unix timestamp",
            "Timestamp must be a positive number of seconds since the Unix epoch",
        )
    if value > time.time() + MAX_FUTURE_SECONDS:
        raise ValidationError(
            field,
            value,
            "reasonable future timestamp",
            "Timestamp appears to be too far in the future. Ensure you are using seconds, not milliseconds",
        )
    return int(value)


def validate_optional_bool(field: str, value: Any) -> Optional[bool]:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(field, value, "boolean (True or False)", "Provide True, False, or omit the field")
    return value


def validate_base64(field: str, value: Any) -> str:
    """Raises ``ContentError`` for anything that is not a plain base64 string."""
    if not isinstance(value, str):
        raise ContentError(
            field, type(value).__name__, "base64 string", "Ensure your base64 conversion returns a string"
        )
    if not BASE64_RE.match(value):
        raise ContentError.invalid_base64(field)
    return value


def validate_wallet_address(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.startswith("0x") or not is_address(value):
        raise ValidationError(
            field,
            value,
            "0x-prefixed 40-hex-character wallet address",
            "Provide a valid EVM address",
        )
    return value
