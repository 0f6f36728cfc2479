from .exact import (
    ExactEvmScheme,
    PaymentScheme,
    TransferAuthorization,
    decode_payment_header,
    encode_payment_header,
)
from .negotiator import PaymentNegotiator, select_payment_requirement

__all__ = [
    "ExactEvmScheme",
    "PaymentScheme",
    "TransferAuthorization",
    "PaymentNegotiator",
    "select_payment_requirement",
    "encode_payment_header",
    "decode_payment_header",
]
