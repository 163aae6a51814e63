"""Request schemas shared by the API and the CLI order files."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from .models import LineItem, OrderLine

PaymentMethod = Literal["cash_on_delivery", "credit_card", "bank_transfer", "deferred"]
NoshiType = Literal["none", "sticker", "standard"]
WrappingType = Literal["none", "simple", "full"]


class LineItemSchema(BaseModel):
    """A priced line for the live preview."""

    line_index: Optional[int] = Field(
        default=None, description="Stable ordinal; defaults to the line's position"
    )
    unit_price: int = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    destination_postal_code: str = ""
    destination_address1: str = ""
    destination_name: str = ""
    is_free_shipping: bool = False
    noshi_type: Optional[NoshiType] = None
    wrapping_type: Optional[WrappingType] = None


class CalculateRequest(BaseModel):
    """Request body for the live preview."""

    payment_method: PaymentMethod
    discount: int = Field(default=0, ge=0)
    lines: list[LineItemSchema] = Field(default_factory=list)
    default_shipping_fee: Optional[int] = Field(
        default=None, ge=0, description="Overrides the stored setting"
    )
    free_shipping_threshold: Optional[int] = Field(
        default=None, ge=0, description="Overrides the stored setting"
    )

    def to_line_items(self) -> list[LineItem]:
        """Convert to engine line items, numbering lines without a line_index by position."""
        items = []
        for i, line in enumerate(self.lines):
            data = line.model_dump()
            if data["line_index"] is None:
                data["line_index"] = i
            items.append(LineItem.from_dict(data))
        return items


class OrderLineSchema(BaseModel):
    """An order line as entered by the operator; prices come from the catalog."""

    line_number: int = Field(..., ge=1)
    product_code: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    destination_postal_code: str = Field(..., pattern=r"^\d{7}$")
    destination_address1: str = Field(..., min_length=1)
    destination_name: str = Field(..., min_length=1)
    noshi_type: Optional[NoshiType] = None
    wrapping_type: Optional[WrappingType] = None


class OrderRequest(BaseModel):
    """Request body for quoting and submitting an order."""

    payment_method: PaymentMethod
    discount: int = Field(default=0, ge=0)
    lines: list[OrderLineSchema] = Field(..., min_length=1)

    def to_order_lines(self) -> list[OrderLine]:
        return [OrderLine(**line.model_dump()) for line in self.lines]
