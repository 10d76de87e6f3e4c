class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when an operation would duplicate an existing record or state.

    Callers may treat it as non-fatal: the competing write already happened.
    """


class NotFoundError(DomainError):
    """Raised when a referenced employee, payroll or job does not exist."""
