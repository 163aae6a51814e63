"""Read-only product catalog for phoneorder."""

import json
import logging
from pathlib import Path
from typing import Any

from .errors import (
    CatalogNotFoundError,
    CorruptDataFileError,
    InvalidSchemaVersionError,
    ProductNotFoundError,
)
from .models import Product
from .settings_store import get_data_dir

logger = logging.getLogger("phoneorder")

SCHEMA_VERSION = 1
PRODUCTS_FILE = "products.json"


class ProductCatalog:
    """Looks up products from products.json."""

    def __init__(self, config_dir: Path | None = None):
        """
        Initialize ProductCatalog.

        Args:
            config_dir: Override data directory (for testing).
        """
        self.config_dir = config_dir or get_data_dir()
        self.config_path = self.config_dir / PRODUCTS_FILE
        self._products: dict[str, Product] | None = None

    def exists(self) -> bool:
        """Check if the catalog file exists."""
        return self.config_path.exists()

    def _load_data(self) -> dict[str, Any]:
        if not self.exists():
            raise CatalogNotFoundError(str(self.config_path))

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CorruptDataFileError(str(self.config_path), f"not valid JSON ({e.msg})") from None
        if not isinstance(data, dict):
            raise CorruptDataFileError(str(self.config_path), "expected a JSON object")

        version = data.get("schema_version", SCHEMA_VERSION)
        if version != SCHEMA_VERSION:
            raise InvalidSchemaVersionError(version, SCHEMA_VERSION)
        return data

    def _index(self) -> dict[str, Product]:
        if self._products is None:
            data = self._load_data()
            products = [Product.from_dict(p) for p in data.get("products", [])]
            self._products = {p.code: p for p in products}
            logger.debug("Loaded %d products from %s", len(products), self.config_path)
        return self._products

    def list_products(self, include_inactive: bool = False) -> list[Product]:
        """List catalog products, active ones only unless asked otherwise."""
        products = list(self._index().values())
        if include_inactive:
            return products
        return [p for p in products if p.is_active]

    def get(self, code: str) -> Product:
        """
        Get an active product by code.

        Raises:
            ProductNotFoundError: If the code is unknown or the product inactive.
        """
        product = self._index().get(code)
        if product is None or not product.is_active:
            raise ProductNotFoundError(code)
        return product
