"""
Errors raised by the data-access layer.
"""
from typing import Optional


class StorageError(Exception):
    """Raised when the underlying database connection or query fails"""
    def __init__(self, message: Optional[str] = None, operation: Optional[str] = None):
        self.operation = operation
        self.message = message or "Storage operation failed"
        if operation:
            self.message = f"{operation}: {self.message}"
        super().__init__(self.message)
