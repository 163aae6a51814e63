"""Pytest fixtures for phoneorder tests."""

import json
import tempfile
from pathlib import Path

import pytest

from phoneorder.models import LineItem

PRODUCTS = [
    {
        "code": "A001",
        "name": "Apple Box",
        "regular_price": 3000,
        "early_price": 2700,
        "is_free_shipping": False,
        "stock_quantity": 10,
    },
    {
        "code": "B002",
        "name": "Melon",
        "regular_price": 1000,
        "is_free_shipping": False,
    },
    {
        "code": "C003",
        "name": "Premium Set",
        "regular_price": 150000,
        "is_free_shipping": True,
    },
    {
        "code": "Z999",
        "name": "Discontinued",
        "regular_price": 500,
        "is_active": False,
    },
]


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def data_dir(temp_dir, monkeypatch):
    """A data directory with a product catalog, selected via PHONEORDER_DATA_DIR."""
    data = temp_dir / "data"
    data.mkdir()
    write_products(data, PRODUCTS)
    monkeypatch.setenv("PHONEORDER_DATA_DIR", str(data))
    yield data


def write_products(data: Path, products: list[dict]) -> None:
    """Write a products.json file."""
    (data / "products.json").write_text(
        json.dumps({"schema_version": 1, "products": products}), encoding="utf-8"
    )


def make_line(
    line_index: int = 0,
    unit_price: int = 1000,
    quantity: int = 1,
    postal_code: str = "1000001",
    address1: str = "1-1 Chiyoda",
    name: str = "Taro Yamada",
    is_free_shipping: bool = False,
    noshi_type: str | None = None,
    wrapping_type: str | None = None,
) -> LineItem:
    """Build a LineItem with sensible defaults for a single destination."""
    return LineItem(
        line_index=line_index,
        unit_price=unit_price,
        quantity=quantity,
        destination_postal_code=postal_code,
        destination_address1=address1,
        destination_name=name,
        is_free_shipping=is_free_shipping,
        noshi_type=noshi_type,
        wrapping_type=wrapping_type,
    )
