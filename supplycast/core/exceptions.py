#!/usr/bin/env python3
"""
Domain exceptions raised by services and translated to HTTP errors by the routers
"""


class SupplyCastError(Exception):
    """Base exception for forecasting and replenishment errors."""

    default_message = "An error occurred"
    default_code = None

    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
        """
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {
            'error': self.__class__.__name__,
            'message': self.message,
        }

        if self.code:
            error_dict['code'] = self.code

        if self.details:
            error_dict['details'] = self.details

        return error_dict


class InsufficientDataError(SupplyCastError):
    """Raised when a demand series is too short to forecast from."""

    default_message = "Insufficient historical data for forecasting"
    default_code = "INSUFFICIENT_DATA"


class NotFoundError(SupplyCastError):
    """Raised when a requested resource is not found."""

    default_message = "Resource not found"
    default_code = "NOT_FOUND"


class ValidationError(SupplyCastError):
    """Raised for invalid input values."""

    default_message = "Validation error"
    default_code = "VALIDATION_ERROR"


class InvalidStateError(SupplyCastError):
    """Raised when an operation does not apply to the current status."""

    default_message = "Invalid status for this operation"
    default_code = "INVALID_STATUS"
