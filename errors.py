"""Exceptions raised by the coffee shop service layer."""

from typing import Dict, List, Optional


class CoffeeShopError(Exception):
    """Base class for service errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CoffeeShopError):
    """Input does not satisfy the coffee shop schema.

    ``errors`` holds one ``{"field": ..., "message": ...}`` entry per
    offending field.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(CoffeeShopError):
    def __init__(self, message: str = "Coffee shop not found"):
        super().__init__(message)


class StorageError(CoffeeShopError):
    """The database rejected the operation or could not be reached."""
