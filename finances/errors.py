# finances/errors.py
"""
Typed failures raised by the services.

Routers don't catch these; main.py maps each class to an HTTP status.
A raised error always means the requested change did not happen.
"""

from __future__ import annotations


class FinancesError(Exception):
    """Base class; `status_code` is used by the HTTP exception handlers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(FinancesError):
    """Malformed identifier, non-numeric year, password mismatch..."""

    status_code = 400


class NotAuthenticatedError(FinancesError):
    status_code = 401


class NotFoundError(FinancesError):
    # Also used when the row exists but belongs to someone else.
    status_code = 404


class ConflictError(FinancesError):
    status_code = 409


class StorageError(FinancesError):
    """Store unreachable or a transaction could not start/commit."""

    status_code = 500


__all__ = [
    "FinancesError",
    "InvalidInputError",
    "NotAuthenticatedError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
]
