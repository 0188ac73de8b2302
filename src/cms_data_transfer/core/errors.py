"""
Custom exceptions for the data transfer providers.
"""


class TransferError(Exception):
    """Base exception for all data transfer errors."""
    pass


class ProviderNotReadyError(TransferError):
    """
    A provider operation was called before its backing instance exists.

    Raised when:
    - A stream is requested before ``bootstrap()`` completed
    - ``bootstrap()`` failed and the caller kept going
    """

    def __init__(self, operation: str, backing: str = "Backing"):
        super().__init__(f"Not able to {operation}. {backing} instance not found")
        self.operation = operation
        self.backing = backing


class SnapshotValidationError(TransferError):
    """
    A snapshot document does not conform to the snapshot schema.

    Raised when:
    - Required top-level sections are missing
    - A content type or component schema has no uid
    - Data rows are not objects
    """

    def __init__(self, message: str, path: str = "root"):
        super().__init__(message)
        self.path = path
