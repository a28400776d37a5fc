"""
Custom exceptions for repository and verifier operations.
"""

from typing import Iterable

# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for repository/verifier errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['username'])
    - error_code: canonical short code (e.g., 'invalid_input', 'security_violation') used by callers
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message  # user-friendly message
        self.fields = list(fields) if fields else None
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict describing the error.
        Standard shape:
            {
                "detail": "A human-friendly message",
                "code": "security_violation",  # optional canonical code
                "fields": ["username"],        # optional list
            }
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


# Subclasses pin their canonical error_code

class InvalidArgumentError(RepositoryError):
    """Raised when a required argument (e.g. the value to check) is missing."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_input")


class SecurityViolationError(RepositoryError):
    """Raised when an identifier fails the SQL injection guard."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="security_violation")


class InvalidFieldError(RepositoryError):
    """Raised when a field/column is not part of the mapped model."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


__all__ = [
    "RepositoryError",
    "InvalidArgumentError",
    "SecurityViolationError",
    "InvalidFieldError",
]
