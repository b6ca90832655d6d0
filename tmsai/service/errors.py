"""Service-layer exceptions."""


class StoreError(Exception):
    """The backend data store rejected or failed a request."""

    def __init__(self, operation: str, table: str, message: str | None = None) -> None:
        self.operation = operation
        self.table = table
        super().__init__(message or f"Data store {operation} on '{table}' failed")


class ContextError(Exception):
    """The operational context for a user could not be built."""

    def __init__(self, user_id: str, message: str | None = None) -> None:
        self.user_id = user_id
        super().__init__(message or f"Failed to build context for user {user_id}")
