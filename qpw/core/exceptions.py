"""
Custom exceptions for qpw.

This module defines the exception hierarchy shared by the session,
authorization and criteria layers. HTTP failures live in
``qpw.core.api.errors`` and derive from the same base.
"""
from typing import Optional


class QPWException(Exception):
    """Base exception for all qpw errors."""

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            operation: Name of the operation that failed (if known)
        """
        self.operation = operation
        super().__init__(message)


class AuthenticationRequiredError(QPWException):
    """
    Raised when a call needs a session that is not there.

    Token or region is missing. Not retryable: the caller has to
    authenticate again before issuing any API call.
    """

    def __init__(self, missing: str, operation: Optional[str] = None) -> None:
        self.missing = missing
        message = f"Not authenticated: {missing} not set"
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message, operation)


# Alias
PreconditionError = AuthenticationRequiredError


class AuthFragmentInvalid(QPWException):
    """Redirect fragment is present but cannot be used as a login response."""
    pass


class CriteriaValidationError(QPWException, ValueError):
    """Raised when a Criteria value is structurally inconsistent."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}", 'criteria.validate')
