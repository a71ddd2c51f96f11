# backend/inspection_payroll/domain/errors.py
from __future__ import annotations


class DomainError(Exception):
    """Base for errors that are reported to the caller with a readable message."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    status_code = 404


class ValidationFailedError(DomainError):
    status_code = 400


class ConflictError(DomainError):
    """Stale row version, or an operation the current state forbids (re-completing a task)."""

    status_code = 409
