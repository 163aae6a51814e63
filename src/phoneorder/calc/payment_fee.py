"""Payment fee by payment method.

Cash on delivery is tiered by amount and refused at or above 300,000.
Deferred invoice is a flat 250. Credit card and bank transfer are free.
"""

from ..models import PaymentFeeResult

CASH_ON_DELIVERY = "cash_on_delivery"
CREDIT_CARD = "credit_card"
BANK_TRANSFER = "bank_transfer"
DEFERRED = "deferred"

PAYMENT_METHODS: tuple[str, ...] = (
    CASH_ON_DELIVERY,
    CREDIT_CARD,
    BANK_TRANSFER,
    DEFERRED,
)

# (inclusive upper bound, fee)
COD_FEE_TABLE: tuple[tuple[int, int], ...] = (
    (9999, 330),
    (29999, 440),
    (99999, 660),
    (299999, 1100),
)

COD_MAX_AMOUNT = 300000
DEFERRED_PAYMENT_FEE = 250

COD_LIMIT_MESSAGE = "Cash on delivery is not available for orders of 300,000 or more"


def _cod_fee(total_before_fee: int) -> int:
    for upper_bound, fee in COD_FEE_TABLE:
        if total_before_fee <= upper_bound:
            return fee
    return COD_FEE_TABLE[-1][1]


def calculate_payment_fee(method: str, total_before_fee: int) -> PaymentFeeResult:
    """
    Calculate the payment fee for a method and a pre-fee total.

    A refused method is reported through ``error`` rather than raised so the
    caller can still show the rest of the breakdown.

    Args:
        method: One of PAYMENT_METHODS.
        total_before_fee: Subtotal plus shipping plus wrapping, minus discount.

    Returns:
        PaymentFeeResult with the fee, and an error message if refused.
    """
    if method == CASH_ON_DELIVERY:
        if total_before_fee >= COD_MAX_AMOUNT:
            return PaymentFeeResult(fee=0, error=COD_LIMIT_MESSAGE)
        return PaymentFeeResult(fee=_cod_fee(total_before_fee))
    if method == DEFERRED:
        return PaymentFeeResult(fee=DEFERRED_PAYMENT_FEE)
    # credit card, bank transfer, and anything request validation let through
    return PaymentFeeResult(fee=0)
