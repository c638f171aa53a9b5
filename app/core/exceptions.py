"""
Base exception classes for application-wide error handling.

Every domain error carries a human-readable message, a machine-readable
error code and optional details, and renders to the same JSON body:

    {"error": "...", "error_code": "...", "details": {...}}

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Rejected input (HTTP 400)
    ├── NotFoundError - Referenced record does not exist (HTTP 404)
    └── ConflictError - Operation clashes with current state (HTTP 409)

Usage:
    from core.exceptions import NotFoundError, ValidationError

    raise ValidationError("Amount must be positive", error_code="INVALID_AMOUNT")

    raise NotFoundError(
        f"Invoice {invoice_id} not found",
        error_code="INVOICE_NOT_FOUND",
        details={"invoice_id": str(invoice_id)},
    )

    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=400)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (ids, allowed values, etc.)

    Subclasses set default_error_code; callers may override it per raise.
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error and error_code keys, plus details when present

        Example:
            {
                "error": "Account 42 not found",
                "error_code": "INVALID_ACCOUNT",
                "details": {"account_id": "42"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when service-layer input validation fails.

    Example:
        raise ValidationError(
            "payment_date must be a date",
            error_code="INVALID_PAYMENT_DATE",
            details={"payment_date": repr(value)},
        )

    Note:
        Request shape is validated by DRF serializers. Use this for rules
        every caller must obey, whether it comes through the API or not.
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """Raised when a referenced record does not exist."""

    default_error_code: str = "NOT_FOUND"


class ConflictError(BaseApplicationError):
    """
    Raised when an operation conflicts with current resource state.

    Use for:
    - Edits to records that are immutable once referenced
    - Concurrent writers contending for the same lock
    """

    default_error_code: str = "CONFLICT"
