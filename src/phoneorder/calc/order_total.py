"""Order total calculation shared by the live preview and server-side submission."""

from ..models import (
    DEFAULT_FREE_SHIPPING_THRESHOLD,
    DEFAULT_SHIPPING_FEE,
    CalculationResult,
    LineItem,
    ShippingDetail,
)
from .payment_fee import calculate_payment_fee
from .shipping import calculate_shipping_fees
from .wrapping import calculate_wrapping_fee


def calculate_order_total(
    details: list[LineItem],
    payment_method: str,
    discount: int = 0,
    default_shipping_fee: int = DEFAULT_SHIPPING_FEE,
    free_shipping_threshold: int = DEFAULT_FREE_SHIPPING_THRESHOLD,
) -> CalculationResult:
    """
    Calculate line totals, fees and the invoice total for an order.

    Pure arithmetic: nothing is validated and nothing is raised. A payment
    method refused for the computed total is reported in
    ``payment_fee_error`` alongside the full breakdown.

    Args:
        details: Order lines with resolved unit prices.
        payment_method: One of PAYMENT_METHODS.
        discount: Amount subtracted before the payment fee is computed.
        default_shipping_fee: Fee charged once per paying destination.
        free_shipping_threshold: Destination total at which shipping is free.

    Returns:
        CalculationResult whose per-line lists follow the order of ``details``.
    """
    # 1. line totals
    line_totals = [d.line_total for d in details]

    # 2. shipping, correlated back by line_index
    shipping_details = [
        ShippingDetail(
            line_index=d.line_index,
            destination_postal_code=d.destination_postal_code,
            destination_address1=d.destination_address1,
            destination_name=d.destination_name,
            line_total=line_total,
            is_free_shipping=d.is_free_shipping,
        )
        for d, line_total in zip(details, line_totals)
    ]
    shipping_results = calculate_shipping_fees(
        shipping_details, default_shipping_fee, free_shipping_threshold
    )
    fee_by_index: dict[int, int] = {}
    for r in shipping_results:
        fee_by_index.setdefault(r.line_index, r.shipping_fee)
    shipping_fees = [fee_by_index.get(d.line_index, 0) for d in details]

    # 3. wrapping is strictly per line
    wrapping_fees = [calculate_wrapping_fee(d.noshi_type, d.wrapping_type) for d in details]

    # 4. aggregates
    subtotal = sum(line_totals)
    total_shipping_fee = sum(shipping_fees)
    total_wrapping_fee = sum(wrapping_fees)

    # 5. payment fee on the post-discount amount; no lines, no payment rule
    total_before_fee = subtotal + total_shipping_fee + total_wrapping_fee - discount
    if details:
        payment = calculate_payment_fee(payment_method, total_before_fee)
        total_fee, payment_fee_error = payment.fee, payment.error
    else:
        total_fee, payment_fee_error = 0, None

    # 6. invoice total
    total_amount = total_before_fee + total_fee

    return CalculationResult(
        line_totals=line_totals,
        shipping_fees=shipping_fees,
        wrapping_fees=wrapping_fees,
        subtotal=subtotal,
        total_shipping_fee=total_shipping_fee,
        total_wrapping_fee=total_wrapping_fee,
        total_fee=total_fee,
        total_amount=total_amount,
        payment_fee_error=payment_fee_error,
    )
