"""Error taxonomy for payroll portal actions.

Every error carries a short human-readable message and a stable code. The API
layer maps them onto HTTP responses; nothing here knows about HTTP.
"""

from __future__ import annotations

from typing import Any


class PayrollPortalError(Exception):
    """Base class for all expected action failures."""

    code = "ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ValidationFailure(PayrollPortalError):
    """Input rejected before touching the store (e.g. duplicate email)."""

    code = "VALIDATION_FAILED"


class HasDependents(PayrollPortalError):
    """Delete refused because other records still reference the target."""

    code = "HAS_DEPENDENTS"

    def __init__(self, message: str, dependents: int | None = None):
        super().__init__(message, {"dependents": dependents} if dependents is not None else None)
        self.dependents = dependents


class NotFound(PayrollPortalError):
    """Referenced record is missing."""

    code = "NOT_FOUND"


class Unauthorized(PayrollPortalError):
    """Requester may not perform the action or see the record."""

    code = "UNAUTHORIZED"


class AuthenticationRequired(Unauthorized):
    """No valid access token: missing, forged, expired or for an unknown login."""


class StoreFailure(PayrollPortalError):
    """External store call failed. Passed through, never retried here."""

    code = "STORE_FAILURE"


class StoreIntegrityError(StoreFailure):
    """Store rejected a write because of a constraint."""
