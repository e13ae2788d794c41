"""Error types raised by the item store and the alert reconciler.

The HTTP layer maps each one onto a status code through ``status_code``.
"""


class InventoryError(Exception):
    """Base exception for inventory tracking errors."""

    status_code = 500
    default_message = "An error occurred while processing the inventory request"

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self):
        error_dict = {
            "success": False,
            "message": self.message,
        }

        if self.details:
            error_dict["details"] = self.details

        return error_dict


class ValidationError(InventoryError):
    """Missing or malformed input. Nothing was written."""

    status_code = 400
    default_message = "Validation error"


class NotFoundError(InventoryError):
    """Unknown item or alert id."""

    status_code = 404
    default_message = "Resource not found"


class ConflictError(InventoryError):
    """Unique constraint violated (duplicate sku)."""

    status_code = 409
    default_message = "SKU already exists"


class StorageError(InventoryError):
    """Unexpected database failure."""

    status_code = 500
    default_message = "Database error"
