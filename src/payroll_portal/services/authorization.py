"""Payslip authorization and per-request access state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from payroll_portal.models.user import UserRole

if TYPE_CHECKING:
    from payroll_portal.models import Employee, Payroll, User


@dataclass(frozen=True)
class Identity:
    """The requesting login, passed explicitly into every check."""

    id: UUID
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_user(cls, user: User) -> Identity:
        return cls(id=user.id, role=user.role)


class PayslipAccess(str, Enum):
    """States of one payslip view request."""

    LOADING = "loading"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    AUTHORIZED = "authorized"


class InvalidTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: str, to_state: str):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Invalid transition from '{from_state}' to '{to_state}'")


class PayslipAccessStateMachine:
    """State machine for a payslip view request.

    Allowed transitions:
    - loading → not_found
    - loading → forbidden
    - loading → authorized

    All three outcomes are terminal; there are no retries.
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        PayslipAccess.LOADING: [
            PayslipAccess.NOT_FOUND,
            PayslipAccess.FORBIDDEN,
            PayslipAccess.AUTHORIZED,
        ],
        PayslipAccess.NOT_FOUND: [],
        PayslipAccess.FORBIDDEN: [],
        PayslipAccess.AUTHORIZED: [],
    }

    TERMINAL = {
        PayslipAccess.NOT_FOUND,
        PayslipAccess.FORBIDDEN,
        PayslipAccess.AUTHORIZED,
    }

    @classmethod
    def can_transition(cls, from_state: str, to_state: str) -> bool:
        """Check if a transition is valid."""
        return to_state in cls.VALID_TRANSITIONS.get(from_state, [])

    @classmethod
    def validate_transition(cls, from_state: str, to_state: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        if not cls.can_transition(from_state, to_state):
            raise InvalidTransitionError(from_state, to_state)

    @classmethod
    def is_terminal(cls, state: str) -> bool:
        return state in cls.TERMINAL


class PayslipAuthorizer:
    """Decides who may see a payslip and who may manage records."""

    @staticmethod
    def is_authorized(identity: Identity, employee: Employee) -> bool:
        """Admins see everything; otherwise only the employee's own login."""
        if identity.is_admin:
            return True
        return employee.is_owned_by(identity.id)

    @staticmethod
    def can_manage(identity: Identity) -> bool:
        """Employee and payroll management is admin-only."""
        return identity.is_admin

    @classmethod
    def decide(
        cls,
        identity: Identity,
        payroll: Payroll | None,
        employee: Employee | None,
    ) -> PayslipAccess:
        """Resolve a view request that has finished loading.

        A missing payroll or employee is NOT_FOUND, checked before
        authorization so the two outcomes never mix.
        """
        state = PayslipAccess.LOADING
        if payroll is None or employee is None:
            outcome = PayslipAccess.NOT_FOUND
        elif cls.is_authorized(identity, employee):
            outcome = PayslipAccess.AUTHORIZED
        else:
            outcome = PayslipAccess.FORBIDDEN

        PayslipAccessStateMachine.validate_transition(state, outcome)
        return outcome
