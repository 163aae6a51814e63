"""Custom exceptions for phoneorder."""


class PhoneorderError(Exception):
    """Base exception for all phoneorder errors."""

    pass


class SettingsNotFoundError(PhoneorderError):
    """Raised when settings.json doesn't exist and defaults are not allowed."""

    def __init__(self, path: str | None = None):
        self.path = path
        msg = "Settings not initialized. Run 'phoneorder settings set' first."
        if path:
            msg = f"Settings not found at {path}. Run 'phoneorder settings set' first."
        super().__init__(msg)


class InvalidSchemaVersionError(PhoneorderError):
    """Raised when a data file has an unsupported schema version."""

    def __init__(self, found: int, supported: int):
        self.found = found
        self.supported = supported
        super().__init__(
            f"Unsupported schema version {found}. This tool supports version {supported}."
        )


class CorruptDataFileError(PhoneorderError):
    """Raised when a data file cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt data file {path}: {reason}")


class InvalidSettingError(PhoneorderError):
    """Raised when a setting key or value is rejected."""

    def __init__(self, key: str, value: object, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid setting {key}={value!r}: {reason}")


class CatalogNotFoundError(PhoneorderError):
    """Raised when products.json doesn't exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Product catalog not found at {path}")


class ProductNotFoundError(PhoneorderError):
    """Raised when a product code is unknown or inactive."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Product not found: {code}")


class InsufficientStockError(PhoneorderError):
    """Raised when a line orders more than the product has in stock."""

    def __init__(self, code: str, name: str, stock: int, requested: int):
        self.code = code
        self.name = name
        self.stock = stock
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {name} ({code}): stock {stock}, requested {requested}"
        )


class InvalidPaymentMethodError(PhoneorderError):
    """Raised when a payment method is not one of the supported methods."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unsupported payment method: {method}")


class PaymentMethodRejectedError(PhoneorderError):
    """Raised when an order is submitted with a payment method the total rules out."""

    def __init__(self, method: str, message: str):
        self.method = method
        self.message = message
        super().__init__(message)


class InvalidOrderFileError(PhoneorderError):
    """Raised when an order JSON file cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid order file {path}: {reason}")
