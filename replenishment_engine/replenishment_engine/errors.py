from __future__ import annotations

from typing import Optional


PRODUCT_NOT_FOUND = "product_not_found"
NO_SUPPLIER_OFFERS_PRODUCT = "no_supplier_offers_product"
NO_SUPPLIER_MEETS_MOQ = "no_supplier_meets_moq"
PURCHASE_ORDER_NOT_FOUND = "purchase_order_not_found"


class ReplenishmentError(Exception):
    """Base class for failures reported back to the caller."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(ReplenishmentError):
    pass


class NotFound(ReplenishmentError):
    """A referenced entity is missing, or no supplier can serve the request.

    ``reason`` tells the distinct failure points apart so callers can log
    "nobody sells this" differently from "nobody sells this few".
    """

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.reason = reason


class DataQualityError(ReplenishmentError):
    """A stored record holds a value the engine cannot interpret."""
