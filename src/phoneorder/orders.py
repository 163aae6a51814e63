"""Server-side order pricing for phoneorder.

Everything the client sends about money is ignored: unit prices come from the
catalog and the settings, and totals come from the calculation engine.
"""

import logging
from datetime import datetime, timezone

from .calc import PAYMENT_METHODS, calculate_order_total
from .catalog import ProductCatalog
from .errors import (
    InsufficientStockError,
    InvalidPaymentMethodError,
    PaymentMethodRejectedError,
)
from .models import AppSettings, LineItem, OrderLine, OrderQuote, QuotedLine
from .pricing import is_early_price_period, parse_deadline, resolve_unit_price

logger = logging.getLogger("phoneorder")


def quote_order(
    lines: list[OrderLine],
    payment_method: str,
    discount: int,
    catalog: ProductCatalog,
    settings: AppSettings,
    now: datetime | None = None,
) -> OrderQuote:
    """
    Price an order from the catalog and run the calculation engine.

    A payment method refused for the total is reported on the quote, not
    raised; see submit_order() for the blocking variant.

    Args:
        lines: Lines as entered by the operator.
        payment_method: One of PAYMENT_METHODS.
        discount: Order-level discount.
        catalog: Source of product prices and stock.
        settings: Shipping settings and the early price deadline.
        now: Pricing time (defaults to the current time).

    Raises:
        InvalidPaymentMethodError: If the payment method is unknown.
        ProductNotFoundError: If a line refers to an unknown product.
        InsufficientStockError: If a line orders more than is in stock.
    """
    if payment_method not in PAYMENT_METHODS:
        raise InvalidPaymentMethodError(payment_method)

    now = now or datetime.now(timezone.utc)
    deadline = parse_deadline(settings.early_price_deadline)
    early_period = is_early_price_period(now, deadline)

    products = []
    items: list[LineItem] = []
    for i, line in enumerate(lines):
        product = catalog.get(line.product_code)
        if product.stock_quantity is not None and line.quantity > product.stock_quantity:
            raise InsufficientStockError(
                product.code, product.name, product.stock_quantity, line.quantity
            )

        products.append(product)
        items.append(
            LineItem(
                line_index=i,
                unit_price=resolve_unit_price(product, now, deadline),
                quantity=line.quantity,
                destination_postal_code=line.destination_postal_code,
                destination_address1=line.destination_address1,
                destination_name=line.destination_name,
                is_free_shipping=product.is_free_shipping,
                noshi_type=line.noshi_type,
                wrapping_type=line.wrapping_type,
            )
        )

    result = calculate_order_total(
        items,
        payment_method,
        discount,
        settings.default_shipping_fee,
        settings.free_shipping_threshold,
    )

    quoted = [
        QuotedLine(
            line_number=line.line_number,
            product_code=product.code,
            product_name=product.name,
            unit_price=item.unit_price,
            quantity=item.quantity,
            line_total=result.line_totals[i],
            is_free_shipping=product.is_free_shipping,
            shipping_fee=result.shipping_fees[i],
            wrapping_fee=result.wrapping_fees[i],
        )
        for i, (line, product, item) in enumerate(zip(lines, products, items))
    ]

    logger.info(
        "Quoted order lines=%d method=%s total=%d",
        len(lines),
        payment_method,
        result.total_amount,
    )
    return OrderQuote(
        payment_method=payment_method,
        discount=discount,
        lines=quoted,
        result=result,
        early_price_applied=early_period and any(p.early_price for p in products),
    )


def submit_order(
    lines: list[OrderLine],
    payment_method: str,
    discount: int,
    catalog: ProductCatalog,
    settings: AppSettings,
    now: datetime | None = None,
) -> OrderQuote:
    """
    Produce the authoritative totals for an order about to be persisted.

    Raises:
        PaymentMethodRejectedError: If the payment method is refused for the total.
        Any error quote_order() raises.
    """
    quote = quote_order(lines, payment_method, discount, catalog, settings, now)
    if quote.result.payment_fee_error:
        logger.warning(
            "Rejected order method=%s total=%d: %s",
            payment_method,
            quote.result.total_amount,
            quote.result.payment_fee_error,
        )
        raise PaymentMethodRejectedError(payment_method, quote.result.payment_fee_error)
    return quote
