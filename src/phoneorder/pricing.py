"""Unit price resolution for phoneorder."""

from datetime import datetime, timezone

from .errors import InvalidSettingError
from .models import Product


def parse_deadline(value: str) -> datetime:
    """
    Parse an ISO 8601 deadline such as "2025-11-28T23:59:59+09:00".

    Naive timestamps are taken as UTC.

    Raises:
        InvalidSettingError: If the value is not a valid timestamp.
    """
    try:
        deadline = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidSettingError(
            "early_price_deadline", value, "expected an ISO 8601 timestamp"
        ) from None
    if deadline.tzinfo is None:
        deadline = deadline.replace(tzinfo=timezone.utc)
    return deadline


def is_early_price_period(now: datetime, deadline: datetime) -> bool:
    """Check whether ``now`` falls on or before the early price deadline."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now <= deadline


def resolve_unit_price(product: Product, now: datetime, deadline: datetime) -> int:
    """
    Decide the unit price the server charges for a product.

    The early price applies up to and including the deadline, for products
    that have a non-zero one. Otherwise the regular price applies.
    """
    if product.early_price and is_early_price_period(now, deadline):
        return product.early_price
    return product.regular_price
