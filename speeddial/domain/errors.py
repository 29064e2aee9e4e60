"""Domain-level error types for use-case and adapter mapping.

This module is the shared home for errors that must cross layer boundaries
without leaking storage- or transport-specific exception details. Every error
is user-presentable: ``code`` is stable for programmatic handling and
``message`` is safe to show in a toast or dialog.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta or {}


class ValidationError(UseCaseError):
    """Bad user input; the operation was aborted and state is untouched."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__("VALIDATION_FAILED", message, meta={"field": field} if field else None)
        self.field = field


class NotFound(UseCaseError):
    """A referenced tile or page id does not exist."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__("NOT_FOUND", f"{kind} '{entity_id}' not found.")
        self.kind = kind
        self.entity_id = entity_id


class ConstraintViolation(UseCaseError):
    """A structural rule refused the operation (last page, city cap)."""

    def __init__(self, code: str, message: str):
        super().__init__(code, message)


class ImportDocumentError(UseCaseError):
    """An imported document was malformed; state is untouched."""

    def __init__(self, message: str = "Invalid file format."):
        super().__init__("IMPORT_FAILED", message)


class StoreError(UseCaseError):
    """Persisting failed. The in-memory mutation that triggered it is kept."""


class QuotaExceeded(StoreError):
    """The store rejected a write because of its size limit."""

    def __init__(self, key: str, detail: str = ""):
        super().__init__(
            "STORAGE_QUOTA_EXCEEDED",
            detail or f"Storage quota exceeded while writing '{key}'.",
            meta={"key": key},
        )
        self.key = key


class StoreUnavailable(StoreError):
    """Any other write failure (store disabled, unwritable, corrupted)."""

    def __init__(self, key: str, detail: str = ""):
        super().__init__(
            "STORAGE_UNAVAILABLE",
            detail or f"Storage unavailable while writing '{key}'.",
            meta={"key": key},
        )
        self.key = key


def storage_error_message(err: StoreError) -> str:
    """Return the diagnostic a UI should surface for a failed save."""
    if isinstance(err, QuotaExceeded):
        return (
            "Local storage is full! This is usually caused by a very large "
            "background image file. Please use a smaller image (under 2MB) or "
            "host it online and use the URL instead."
        )
    return "An error occurred while saving. Please check the log for details."


__all__ = [
    "ConstraintViolation",
    "ImportDocumentError",
    "NotFound",
    "QuotaExceeded",
    "StoreError",
    "StoreUnavailable",
    "UseCaseError",
    "ValidationError",
    "storage_error_message",
]
