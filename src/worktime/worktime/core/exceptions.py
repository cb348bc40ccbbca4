class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidInput(ValidationError):
    """Raised when a work session cannot be evaluated (missing or negative timing fields)."""
