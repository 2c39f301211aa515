# src/products_api/domain/errors.py
from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    CONFLICT = "conflict"
    INTERNAL = "internal"


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class ProductApiError(Exception):
    """
    Operational error raised by the store, the query layer and the security
    dependency. The kind decides the HTTP status.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        resource: str | None = None,
        details: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.resource = resource
        self.details = details or []

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]

    @classmethod
    def not_found(cls, resource: str = "Resource") -> ProductApiError:
        return cls(ErrorKind.NOT_FOUND, f"{resource}: {resource} not found", resource=resource)

    @classmethod
    def validation(
        cls, message: str = "Validation failed", details: list[str] | None = None
    ) -> ProductApiError:
        return cls(ErrorKind.VALIDATION, message, details=details)

    @classmethod
    def authentication(cls, message: str = "Authentication required") -> ProductApiError:
        return cls(ErrorKind.AUTHENTICATION, message)
