"""
Employee and approver-role database models.

An employee row doubles as the credential record: it stores the password
hash, the registered push device token and references to the employee's
first-level (FLA) and second-level (SLA) approver entries.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leaveflow.models.base import Base

__all__ = [
    "Employee",
    "FlaMaster",
    "SlaMaster",
]


class FlaMaster(Base):
    """First-level approver role entry, pointing at the approver's own emp_id."""

    __tablename__ = "fla_master"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    emp_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)


class SlaMaster(Base):
    """Second-level approver role entry."""

    __tablename__ = "sla_master"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    emp_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)


class Employee(Base):
    """Employee record with credentials and approver configuration."""

    __tablename__ = "seg_employee_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    emp_id: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    emp_name: Mapped[str] = mapped_column(String(150), nullable=False)
    designation: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    password: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="bcrypt hash",
    )
    role_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    fla: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("fla_master.id", ondelete="SET NULL"),
        nullable=True,
    )
    sla: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("sla_master.id", ondelete="SET NULL"),
        nullable=True,
    )
    fcm_token: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    fla_entry: Mapped[Optional[FlaMaster]] = relationship(FlaMaster, lazy="joined")
    sla_entry: Mapped[Optional[SlaMaster]] = relationship(SlaMaster, lazy="joined")

    def __repr__(self) -> str:
        return f"Employee(emp_id={self.emp_id!r}, name={self.emp_name!r})"
