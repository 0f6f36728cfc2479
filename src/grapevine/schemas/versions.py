from typing import Any

#: x402 protocol version assumed when a 402 body omits or garbles ``x402Version``
BASELINE_X402_VERSION = 1


def parse_x402_version(value: Any) -> int:
    """Parse ``x402Version`` from a 402 body, falling back to the baseline."""
    if isinstance(value, bool):
        return BASELINE_X402_VERSION
    if isinstance(value, int):
        return value if value > 0 else BASELINE_X402_VERSION
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return BASELINE_X402_VERSION
    return parsed if parsed > 0 else BASELINE_X402_VERSION
