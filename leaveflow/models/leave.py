"""
Leave request database models.
"""

from datetime import date as Date, time as Time
from typing import Optional

from sqlalchemy import Date as SQLDate, Index, Integer, String, Text, Time as SQLTime
from sqlalchemy.orm import Mapped, mapped_column

from leaveflow.models.base import Base, TimestampMixin
from leaveflow.models.enums import LeaveStatus

__all__ = [
    "LeaveType",
    "LeaveRequest",
]


class LeaveType(Base):
    """Catalogue of leave types offered to employees."""

    __tablename__ = "leave_master"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    leave_type: Mapped[str] = mapped_column(String(100), nullable=False)


class LeaveRequest(TimestampMixin, Base):
    """
    A leave application and its position in the approval workflow.

    ``remarks`` carries the approver justification once a request is
    not-recommended or rejected.
    """

    __tablename__ = "leave_request"
    __table_args__ = (
        Index("ix_leave_request_employee_id", "employee_id"),
        Index("ix_leave_request_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_id: Mapped[str] = mapped_column(String(50), nullable=False)
    employee_name: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    fla: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    sla: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    leave_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    from_date: Mapped[Optional[Date]] = mapped_column(SQLDate, nullable=True)
    to_date: Mapped[Optional[Date]] = mapped_column(SQLDate, nullable=True)
    in_time: Mapped[Optional[Time]] = mapped_column(SQLTime, nullable=True)
    out_time: Mapped[Optional[Time]] = mapped_column(SQLTime, nullable=True)
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    request_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default=LeaveStatus.PENDING.value,
    )

    def __repr__(self) -> str:
        return f"LeaveRequest(id={self.id}, employee_id={self.employee_id!r}, status={self.status!r})"
