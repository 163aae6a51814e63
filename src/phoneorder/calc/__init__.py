"""Order total calculation engine for phoneorder.

Pure functions only: no I/O, no logging, no shared state.
"""

from .order_total import calculate_order_total
from .payment_fee import (
    BANK_TRANSFER,
    CASH_ON_DELIVERY,
    COD_MAX_AMOUNT,
    CREDIT_CARD,
    DEFERRED,
    PAYMENT_METHODS,
    calculate_payment_fee,
)
from .shipping import build_delivery_key, calculate_shipping_fees, group_by_destination
from .wrapping import (
    MAX_WRAPPING_FEE_PER_LINE,
    NOSHI_TYPES,
    WRAPPING_TYPES,
    calculate_wrapping_fee,
)

__all__ = [
    # Aggregator
    "calculate_order_total",
    # Payment fee
    "calculate_payment_fee",
    "PAYMENT_METHODS",
    "CASH_ON_DELIVERY",
    "CREDIT_CARD",
    "BANK_TRANSFER",
    "DEFERRED",
    "COD_MAX_AMOUNT",
    # Shipping
    "calculate_shipping_fees",
    "build_delivery_key",
    "group_by_destination",
    # Wrapping
    "calculate_wrapping_fee",
    "NOSHI_TYPES",
    "WRAPPING_TYPES",
    "MAX_WRAPPING_FEE_PER_LINE",
]
