"""Login identity model."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_portal.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from payroll_portal.models.employee import Employee


class UserRole(str, Enum):
    """Identity roles."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class User(Base, TimestampMixin):
    """A login account. The first one ever registered is an admin."""

    __tablename__ = "app_user"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=UserRole.EMPLOYEE.value)

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'employee')", name="app_user_role_check"),
    )

    # Relationships
    employee: Mapped[Employee | None] = relationship(
        back_populates="user",
        passive_deletes=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
