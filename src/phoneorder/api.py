"""FastAPI REST API for phoneorder order pricing."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .calc import PAYMENT_METHODS, calculate_order_total
from .catalog import ProductCatalog
from .errors import (
    CatalogNotFoundError,
    CorruptDataFileError,
    InsufficientStockError,
    InvalidOrderFileError,
    InvalidPaymentMethodError,
    InvalidSchemaVersionError,
    InvalidSettingError,
    PaymentMethodRejectedError,
    PhoneorderError,
    ProductNotFoundError,
    SettingsNotFoundError,
)
from .models import AppSettings, CalculationResult, OrderQuote
from .orders import quote_order, submit_order
from .schemas import CalculateRequest, OrderRequest
from .settings_store import SettingsStore

logger = logging.getLogger("phoneorder")


# --- Pydantic Schemas ---


class CalculationResultSchema(BaseModel):
    line_totals: list[int]
    shipping_fees: list[int]
    wrapping_fees: list[int]
    subtotal: int
    total_shipping_fee: int
    total_wrapping_fee: int
    total_fee: int
    total_amount: int
    payment_fee_error: Optional[str] = None


class QuotedLineSchema(BaseModel):
    line_number: int
    product_code: str
    product_name: str
    unit_price: int
    quantity: int
    line_total: int
    is_free_shipping: bool
    shipping_fee: int
    wrapping_fee: int


class QuoteResponse(BaseModel):
    payment_method: str
    discount: int
    early_price_applied: bool
    lines: list[QuotedLineSchema]
    totals: CalculationResultSchema


class SettingsSchema(BaseModel):
    default_shipping_fee: int
    free_shipping_threshold: int
    early_price_deadline: str
    updated_at: str = ""


class SettingsResponse(BaseModel):
    settings: SettingsSchema


class SettingsUpdateRequest(BaseModel):
    """Request body for updating settings; unknown keys are ignored."""

    settings: dict[str, int | str]


class PaymentMethodListResponse(BaseModel):
    payment_methods: list[str]


class ErrorResponse(BaseModel):
    detail: str
    error_type: str


# --- App Setup ---


app = FastAPI(
    title="phoneorder API",
    description="Order total calculation for phone-order entry",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Global Exception Handler ---


# Map exception types to HTTP status codes
ERROR_STATUS_CODES: dict[type, int] = {
    SettingsNotFoundError: 409,
    InvalidSchemaVersionError: 500,
    CorruptDataFileError: 500,
    InvalidSettingError: 400,
    CatalogNotFoundError: 409,
    ProductNotFoundError: 400,
    InsufficientStockError: 400,
    InvalidPaymentMethodError: 400,
    PaymentMethodRejectedError: 422,
    InvalidOrderFileError: 400,
}


@app.exception_handler(PhoneorderError)
async def phoneorder_error_handler(request: Request, exc: PhoneorderError) -> JSONResponse:
    """Map PhoneorderError subclasses to appropriate HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


# --- Helper Functions ---


def get_settings_store() -> SettingsStore:
    """Get the SettingsStore for the configured data directory."""
    return SettingsStore()


def get_catalog() -> ProductCatalog:
    """Get the ProductCatalog for the configured data directory."""
    return ProductCatalog()


def result_to_schema(result: CalculationResult) -> CalculationResultSchema:
    """Convert dataclass CalculationResult to Pydantic schema."""
    return CalculationResultSchema(**result.to_dict())


def quote_to_schema(quote: OrderQuote) -> QuoteResponse:
    """Convert dataclass OrderQuote to Pydantic schema."""
    return QuoteResponse(
        payment_method=quote.payment_method,
        discount=quote.discount,
        early_price_applied=quote.early_price_applied,
        lines=[QuotedLineSchema(**line.to_dict()) for line in quote.lines],
        totals=result_to_schema(quote.result),
    )


def settings_to_response(settings: AppSettings) -> SettingsResponse:
    return SettingsResponse(settings=SettingsSchema(**settings.to_dict()))


# --- Endpoints ---


@app.get("/api/health")
def health_check():
    """
    Health check endpoint.

    Reports whether the settings and catalog files are present.
    """
    return {
        "status": "ok",
        "version": __version__,
        "settings_initialized": get_settings_store().exists(),
        "catalog_available": get_catalog().exists(),
    }


@app.get("/api/payment-methods", response_model=PaymentMethodListResponse)
def list_payment_methods():
    """List the supported payment methods."""
    return PaymentMethodListResponse(payment_methods=list(PAYMENT_METHODS))


@app.get("/api/settings", response_model=SettingsResponse)
def get_settings():
    """Get the application settings (defaults if never saved)."""
    return settings_to_response(get_settings_store().load())


@app.put("/api/settings", response_model=SettingsResponse)
def update_settings(request: SettingsUpdateRequest):
    """Update the allowed settings keys; other keys are ignored."""
    settings = get_settings_store().update(request.settings)
    return settings_to_response(settings)


@app.post("/api/orders/calculate", response_model=CalculationResultSchema)
def calculate_order(request: CalculateRequest):
    """
    Live preview of the totals breakdown.

    A refused payment method is returned in ``payment_fee_error`` with
    status 200 so the breakdown can still be shown.
    """
    settings = get_settings_store().load()
    default_shipping_fee = request.default_shipping_fee
    if default_shipping_fee is None:
        default_shipping_fee = settings.default_shipping_fee
    free_shipping_threshold = request.free_shipping_threshold
    if free_shipping_threshold is None:
        free_shipping_threshold = settings.free_shipping_threshold

    items = request.to_line_items()
    result = calculate_order_total(
        items,
        request.payment_method,
        request.discount,
        default_shipping_fee,
        free_shipping_threshold,
    )
    return result_to_schema(result)


@app.post("/api/orders/quote", response_model=QuoteResponse)
def quote(request: OrderRequest):
    """Price an order from the catalog without blocking on payment rejection."""
    result = quote_order(
        request.to_order_lines(),
        request.payment_method,
        request.discount,
        get_catalog(),
        get_settings_store().load(),
    )
    return quote_to_schema(result)


@app.post("/api/orders/submit", response_model=QuoteResponse)
def submit(request: OrderRequest):
    """
    Authoritative totals for an order about to be persisted.

    Responds 422 when the payment method is refused for the order total.
    """
    result = submit_order(
        request.to_order_lines(),
        request.payment_method,
        request.discount,
        get_catalog(),
        get_settings_store().load(),
    )
    return quote_to_schema(result)
