from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class FormValidationError(ValidationError):
    """Validation failure reported per form field."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(next(iter(self.errors.values()), "Dados inválidos"))


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class SessionExpiredError(AuthenticationError):
    """The API answered 401: stored credentials are no longer accepted."""


class ApiError(DomainError):
    """The remote API rejected a call or could not be reached."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    def user_message(self, default: str) -> str:
        return self.detail or default


class ApiUnavailableError(ApiError):
    """Timeout or connection failure."""


class ApiSchemaError(ApiError):
    """Response body does not have the expected shape."""
