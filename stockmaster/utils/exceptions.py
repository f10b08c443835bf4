"""Custom exception classes for the application."""


class BaseAppException(Exception):
    """Base exception class for all application exceptions."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(BaseAppException):
    """Raised when there's a configuration error."""
    pass


class NotFoundError(BaseAppException):
    """Raised when a referenced entity does not exist in the store."""
    pass


class ProductNotFoundError(NotFoundError):
    """Raised when a product id is not in the store."""
    pass


class OperationNotFoundError(NotFoundError):
    """Raised when an operation id is not in the store."""
    pass


class ContactNotFoundError(NotFoundError):
    """Raised when a contact id is not in the store."""
    pass


class WarehouseNotFoundError(NotFoundError):
    """Raised when a warehouse name has no registered coordinate."""
    pass


class InvalidOperationError(BaseAppException):
    """Raised when an operation or entity payload is malformed."""
    pass


class InvalidQuantityError(BaseAppException):
    """Raised when a stock quantity is not acceptable for the requested action."""
    pass


class NegativeStockError(BaseAppException):
    """Raised when an audited stock write would leave a product below zero."""
    pass


class AuthenticationError(BaseAppException):
    """Raised when login credentials are missing."""
    pass


class AIServiceError(BaseAppException):
    """Raised when the hosted generative model call fails."""
    pass


class RateLimitError(BaseAppException):
    """Raised when API rate limit is exceeded."""
    pass
