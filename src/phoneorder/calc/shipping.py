"""Shipping fee allocation across delivery destinations.

Lines are grouped by delivery key (postal code | address line 1 | name).
Within a group:
1. group total >= free shipping threshold -> every line ships free
2. any free-shipping product in the group -> every line ships free
3. otherwise the line with the lowest line_index carries the default fee
"""

from ..models import (
    DEFAULT_FREE_SHIPPING_THRESHOLD,
    DEFAULT_SHIPPING_FEE,
    ShippingDetail,
    ShippingResult,
)


def build_delivery_key(postal_code: str, address1: str, name: str) -> str:
    """Build the grouping key. No normalization: keys match on exact strings."""
    return f"{postal_code}|{address1}|{name}"


def group_by_destination(details: list[ShippingDetail]) -> dict[str, list[ShippingDetail]]:
    """Partition details by delivery key, keeping first-seen order."""
    groups: dict[str, list[ShippingDetail]] = {}
    for detail in details:
        key = build_delivery_key(
            detail.destination_postal_code,
            detail.destination_address1,
            detail.destination_name,
        )
        groups.setdefault(key, []).append(detail)
    return groups


def calculate_shipping_fees(
    details: list[ShippingDetail],
    default_shipping_fee: int = DEFAULT_SHIPPING_FEE,
    free_shipping_threshold: int = DEFAULT_FREE_SHIPPING_THRESHOLD,
) -> list[ShippingResult]:
    """
    Allocate shipping fees to lines.

    Args:
        details: Lines with their destination and line total.
        default_shipping_fee: Fee charged once per paying destination.
        free_shipping_threshold: Group total at which shipping becomes free.

    Returns:
        One ShippingResult per detail, in input order.
    """
    charged: dict[int, int] = {}

    for group in group_by_destination(details).values():
        group_total = sum(d.line_total for d in group)
        has_free_shipping_product = any(d.is_free_shipping for d in group)

        if group_total >= free_shipping_threshold or has_free_shipping_product:
            continue

        representative = min(group, key=lambda d: d.line_index)
        charged[representative.line_index] = default_shipping_fee

    # A line_index shared by several lines charges only the first of them.
    results: list[ShippingResult] = []
    for detail in details:
        fee = charged.pop(detail.line_index, 0)
        results.append(ShippingResult(line_index=detail.line_index, shipping_fee=fee))
    return results
