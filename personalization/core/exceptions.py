"""
Custom exceptions for the personalization engine.

This provides:
1. Specific exception types for different error scenarios
2. HTTP status code mapping
3. Error context preservation
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """Base exception class for engine errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Raised when input validation fails. Nothing has been mutated."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details)


class NotFoundError(AppException):
    """Raised when requested resource is not found."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ServiceError(AppException):
    """Raised when business logic operation fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=500, details=details)


class StorageError(AppException):
    """
    Raised when the snapshot store fails to load or persist.

    The in-memory state change that triggered the save stays applied;
    callers use this type to tell a durability failure apart from a
    logic failure.
    """

    def __init__(self, operation: str, collection: str, message: str = "Storage failure"):
        self.operation = operation
        self.collection = collection
        super().__init__(
            f"{message} ({operation} {collection})",
            status_code=503,
            details={"operation": operation, "collection": collection},
        )
