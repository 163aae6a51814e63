"""Tests for ProductCatalog."""

import json

import pytest

from phoneorder.catalog import ProductCatalog
from phoneorder.errors import (
    CatalogNotFoundError,
    CorruptDataFileError,
    InvalidSchemaVersionError,
    ProductNotFoundError,
)


class TestProductCatalog:
    def test_get_product(self, data_dir):
        product = ProductCatalog().get("A001")

        assert product.name == "Apple Box"
        assert product.regular_price == 3000
        assert product.early_price == 2700
        assert product.stock_quantity == 10

    def test_defaults_for_optional_fields(self, data_dir):
        product = ProductCatalog(data_dir).get("B002")

        assert product.early_price is None
        assert product.stock_quantity is None
        assert product.is_active is True

    def test_unknown_product(self, data_dir):
        with pytest.raises(ProductNotFoundError):
            ProductCatalog().get("NOPE")

    def test_inactive_product_not_found(self, data_dir):
        with pytest.raises(ProductNotFoundError):
            ProductCatalog().get("Z999")

    def test_list_products(self, data_dir):
        catalog = ProductCatalog()

        assert [p.code for p in catalog.list_products()] == ["A001", "B002", "C003"]
        assert len(catalog.list_products(include_inactive=True)) == 4

    def test_missing_catalog(self, temp_dir):
        catalog = ProductCatalog(temp_dir)

        assert not catalog.exists()
        with pytest.raises(CatalogNotFoundError):
            catalog.get("A001")

    def test_unsupported_schema_version(self, temp_dir):
        (temp_dir / "products.json").write_text(json.dumps({"schema_version": 2, "products": []}))

        with pytest.raises(InvalidSchemaVersionError):
            ProductCatalog(temp_dir).list_products()

    def test_corrupt_file(self, temp_dir):
        (temp_dir / "products.json").write_text('{"products": [')

        with pytest.raises(CorruptDataFileError, match="not valid JSON"):
            ProductCatalog(temp_dir).list_products()
