"""Employee model."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_portal.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from payroll_portal.models.payroll import Payroll
    from payroll_portal.models.user import User


class Employee(Base, TimestampMixin):
    """Employee record, optionally owned by a login identity."""

    __tablename__ = "employee"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("app_user.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    position: Mapped[str] = mapped_column(String, nullable=False)
    department: Mapped[str] = mapped_column(String, nullable=False)
    # Stored lower-cased so uniqueness is case-insensitive
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    salary: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    __table_args__ = (
        CheckConstraint("salary >= 0", name="employee_salary_non_negative"),
    )

    # Relationships
    user: Mapped[User | None] = relationship(back_populates="employee")
    payrolls: Mapped[list[Payroll]] = relationship(
        back_populates="employee",
        passive_deletes="all",
    )

    def is_owned_by(self, user_id: UUID) -> bool:
        """Check whether the given identity is this employee's login."""
        return self.user_id is not None and self.user_id == user_id
