"""Data models for phoneorder."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

DEFAULT_SHIPPING_FEE = 880
DEFAULT_FREE_SHIPPING_THRESHOLD = 5000
DEFAULT_EARLY_PRICE_DEADLINE = "2025-11-28T23:59:59+09:00"


def _utc_now() -> str:
    """Return current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


# Models for the order total engine


@dataclass(frozen=True)
class LineItem:
    """One ordered product going to one destination, with its unit price resolved."""

    line_index: int  # stable ordinal for result correlation
    unit_price: int
    quantity: int
    destination_postal_code: str
    destination_address1: str
    destination_name: str
    is_free_shipping: bool = False
    noshi_type: str | None = None  # "none" | "sticker" | "standard"
    wrapping_type: str | None = None  # "none" | "simple" | "full"

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineItem":
        return cls(
            line_index=data["line_index"],
            unit_price=data["unit_price"],
            quantity=data["quantity"],
            destination_postal_code=data.get("destination_postal_code", ""),
            destination_address1=data.get("destination_address1", ""),
            destination_name=data.get("destination_name", ""),
            is_free_shipping=data.get("is_free_shipping", False),
            noshi_type=data.get("noshi_type"),
            wrapping_type=data.get("wrapping_type"),
        )


@dataclass(frozen=True)
class ShippingDetail:
    """The slice of a line the shipping allocator needs."""

    line_index: int
    destination_postal_code: str
    destination_address1: str
    destination_name: str
    line_total: int
    is_free_shipping: bool = False


@dataclass(frozen=True)
class ShippingResult:
    line_index: int
    shipping_fee: int


@dataclass(frozen=True)
class PaymentFeeResult:
    fee: int
    error: str | None = None  # set when the method is refused for this total


@dataclass
class CalculationResult:
    """Totals breakdown for an order; per-line lists follow input order."""

    line_totals: list[int]
    shipping_fees: list[int]
    wrapping_fees: list[int]
    subtotal: int
    total_shipping_fee: int
    total_wrapping_fee: int
    total_fee: int
    total_amount: int
    payment_fee_error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_totals": list(self.line_totals),
            "shipping_fees": list(self.shipping_fees),
            "wrapping_fees": list(self.wrapping_fees),
            "subtotal": self.subtotal,
            "total_shipping_fee": self.total_shipping_fee,
            "total_wrapping_fee": self.total_wrapping_fee,
            "total_fee": self.total_fee,
            "total_amount": self.total_amount,
            "payment_fee_error": self.payment_fee_error,
        }


# Models for application settings and the product catalog


@dataclass
class AppSettings:
    """Key-value application settings."""

    default_shipping_fee: int = DEFAULT_SHIPPING_FEE
    free_shipping_threshold: int = DEFAULT_FREE_SHIPPING_THRESHOLD
    early_price_deadline: str = DEFAULT_EARLY_PRICE_DEADLINE
    updated_at: str = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "default_shipping_fee": self.default_shipping_fee,
            "free_shipping_threshold": self.free_shipping_threshold,
            "early_price_deadline": self.early_price_deadline,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppSettings":
        return cls(
            default_shipping_fee=data.get("default_shipping_fee", DEFAULT_SHIPPING_FEE),
            free_shipping_threshold=data.get(
                "free_shipping_threshold", DEFAULT_FREE_SHIPPING_THRESHOLD
            ),
            early_price_deadline=data.get("early_price_deadline", DEFAULT_EARLY_PRICE_DEADLINE),
            updated_at=data.get("updated_at", ""),
        )


@dataclass
class Product:
    """A catalog product."""

    code: str
    name: str
    regular_price: int
    early_price: int | None = None  # applies until the early price deadline
    is_free_shipping: bool = False
    stock_quantity: int | None = None  # None means stock is not tracked
    is_active: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "regular_price": self.regular_price,
            "early_price": self.early_price,
            "is_free_shipping": self.is_free_shipping,
            "stock_quantity": self.stock_quantity,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        return cls(
            code=data["code"],
            name=data["name"],
            regular_price=data["regular_price"],
            early_price=data.get("early_price"),
            is_free_shipping=data.get("is_free_shipping", False),
            stock_quantity=data.get("stock_quantity"),
            is_active=data.get("is_active", True),
        )


# Models for order quoting


@dataclass(frozen=True)
class OrderLine:
    """A line as keyed in by the operator, before server-side pricing."""

    line_number: int
    product_code: str
    quantity: int
    destination_postal_code: str
    destination_address1: str
    destination_name: str
    noshi_type: str | None = None
    wrapping_type: str | None = None


@dataclass
class QuotedLine:
    """An order line with the figures the server computed for it."""

    line_number: int
    product_code: str
    product_name: str
    unit_price: int
    quantity: int
    line_total: int
    is_free_shipping: bool
    shipping_fee: int
    wrapping_fee: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_number": self.line_number,
            "product_code": self.product_code,
            "product_name": self.product_name,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "line_total": self.line_total,
            "is_free_shipping": self.is_free_shipping,
            "shipping_fee": self.shipping_fee,
            "wrapping_fee": self.wrapping_fee,
        }


@dataclass
class OrderQuote:
    """Authoritative pricing of an order."""

    payment_method: str
    discount: int
    lines: list[QuotedLine]
    result: CalculationResult
    early_price_applied: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "payment_method": self.payment_method,
            "discount": self.discount,
            "early_price_applied": self.early_price_applied,
            "lines": [line.to_dict() for line in self.lines],
            "totals": self.result.to_dict(),
        }
