"""Error taxonomy for the stock manager.

Only ValidationError and ProductNotFound ever reach a caller. Remote errors
are caught inside the persistence gateway and logged.
"""


class StockManagerError(Exception):
    """Base class for all stock manager errors."""


class RemoteUnavailable(StockManagerError):
    """Raised when a remote client cannot be constructed.

    Treated as local-only mode, never surfaced to the user.
    """


class RemoteOperationFailed(StockManagerError):
    """Raised when a read or write against the remote store fails."""

    def __init__(self, operation: str, table: str, detail: str) -> None:
        self.operation = operation
        self.table = table
        self.detail = detail
        super().__init__(f"Remote {operation} on '{table}' failed: {detail}")


class ValidationError(StockManagerError):
    """Raised when a user action is rejected, e.g. a category name collision.

    The message is meant to be shown to the user as-is.
    """


class ProductNotFound(StockManagerError):
    """Raised when editing or deleting a product id unknown to the session."""

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product '{product_id}' not found")
