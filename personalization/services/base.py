"""
Base Service - Common service functionality and patterns.

This provides:
1. Common service initialization patterns
2. Input validation helpers
3. Error handling utilities
4. Logging helpers
"""

import logging
from typing import Any

from personalization.config import Settings
from personalization.core.exceptions import AppException, ServiceError, ValidationError

logger = logging.getLogger(__name__)


class BaseService:
    """
    Base service class providing common functionality.

    This establishes patterns for:
    - Settings injection
    - Validation before any state mutation
    - Error handling
    - Logging
    """

    def __init__(self, settings: Settings):
        """
        Initialize service with engine settings.

        Args:
            settings: Engine configuration
        """
        self.settings = settings
        self.logger = logger

    def _require_id(self, value: Any, field: str) -> str:
        """Reject missing or blank identifiers."""
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{field} must be a non-empty string", {"field": field})
        return value

    def _require_limit(self, limit: Any, maximum: int) -> int:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ValidationError("limit must be a positive integer", {"field": "limit"})
        if limit > maximum:
            raise ValidationError(f"limit cannot exceed {maximum}", {"field": "limit"})
        return limit

    def _handle_service_error(self, error: Exception, operation: str) -> None:
        """
        Centralized error handling for services.

        Args:
            error: The exception that occurred
            operation: Description of the operation that failed
        """
        self.logger.error(f"Service error in {operation}: {str(error)}")

        # Engine errors keep their type; anything else becomes a ServiceError
        if isinstance(error, AppException):
            raise error
        raise ServiceError(f"Failed to {operation}: {str(error)}") from error

    def _log_operation(self, operation: str, **kwargs) -> None:
        """
        Log service operations for debugging and monitoring.

        Args:
            operation: Description of the operation
            **kwargs: Additional context to log
        """
        context = " ".join([f"{k}={v}" for k, v in kwargs.items()])
        self.logger.info(f"Service operation: {operation} {context}")
