"""Tests for payslip authorization and the access state machine."""

from decimal import Decimal
from uuid import uuid4

import pytest

from payroll_portal.models import Employee, Payroll
from payroll_portal.services.authorization import (
    Identity,
    InvalidTransitionError,
    PayslipAccess,
    PayslipAccessStateMachine,
    PayslipAuthorizer,
)


def make_employee(user_id=None) -> Employee:
    return Employee(
        id=uuid4(),
        user_id=user_id,
        name="Eve",
        position="Developer",
        department="Engineering",
        email="eve@example.com",
        salary=Decimal("100"),
    )


class TestPayslipAuthorizer:
    """Test who may view a payslip."""

    def test_admin_sees_any_payslip(self):
        admin = Identity(id=uuid4(), role="admin")

        assert PayslipAuthorizer.is_authorized(admin, make_employee()) is True
        assert PayslipAuthorizer.is_authorized(admin, make_employee(user_id=uuid4())) is True

    def test_owner_sees_own_payslip(self):
        me = Identity(id=uuid4(), role="employee")

        assert PayslipAuthorizer.is_authorized(me, make_employee(user_id=me.id)) is True

    def test_other_employee_denied(self):
        me = Identity(id=uuid4(), role="employee")

        assert PayslipAuthorizer.is_authorized(me, make_employee(user_id=uuid4())) is False

    def test_unlinked_employee_denied_to_non_admin(self):
        me = Identity(id=uuid4(), role="employee")

        assert PayslipAuthorizer.is_authorized(me, make_employee(user_id=None)) is False

    def test_can_manage(self):
        assert PayslipAuthorizer.can_manage(Identity(id=uuid4(), role="admin")) is True
        assert PayslipAuthorizer.can_manage(Identity(id=uuid4(), role="employee")) is False


class TestDecide:
    """Test the outcome of a loaded view request."""

    def test_missing_payroll_is_not_found(self):
        admin = Identity(id=uuid4(), role="admin")

        assert PayslipAuthorizer.decide(admin, None, None) == PayslipAccess.NOT_FOUND

    def test_missing_employee_is_not_found_even_for_owner(self):
        me = Identity(id=uuid4(), role="employee")
        payroll = Payroll(id=uuid4(), employee_id=uuid4())

        assert PayslipAuthorizer.decide(me, payroll, None) == PayslipAccess.NOT_FOUND

    def test_forbidden_and_authorized(self):
        me = Identity(id=uuid4(), role="employee")
        mine = make_employee(user_id=me.id)
        theirs = make_employee(user_id=uuid4())
        payroll = Payroll(id=uuid4(), employee_id=mine.id)

        assert PayslipAuthorizer.decide(me, payroll, mine) == PayslipAccess.AUTHORIZED
        assert PayslipAuthorizer.decide(me, payroll, theirs) == PayslipAccess.FORBIDDEN


class TestPayslipAccessStateMachine:
    """Test state machine transitions."""

    def test_loading_reaches_every_outcome(self):
        for outcome in ("not_found", "forbidden", "authorized"):
            assert PayslipAccessStateMachine.can_transition("loading", outcome) is True

    def test_outcomes_are_terminal(self):
        for outcome in ("not_found", "forbidden", "authorized"):
            assert PayslipAccessStateMachine.is_terminal(outcome) is True
            assert PayslipAccessStateMachine.can_transition(outcome, "loading") is False
            assert PayslipAccessStateMachine.can_transition(outcome, "authorized") is False

        assert PayslipAccessStateMachine.is_terminal("loading") is False

    def test_validate_transition_raises(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            PayslipAccessStateMachine.validate_transition("forbidden", "authorized")

        assert exc_info.value.from_state == "forbidden"
        assert exc_info.value.to_state == "authorized"
