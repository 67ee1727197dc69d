"""
Leave Repository

Persistence for leave requests and the leave type catalogue. Status
changes go through ``transition_status``, a compare-and-swap update that
only touches the row while it still holds the expected status.
"""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session, aliased

from leaveflow.models.base import utcnow
from leaveflow.models.employee import Employee, FlaMaster, SlaMaster
from leaveflow.models.enums import LeaveStatus
from leaveflow.models.leave import LeaveRequest, LeaveType
from leaveflow.repositories.base import BaseRepository


class LeaveTypeRepository(BaseRepository[LeaveType]):

    model = LeaveType

    def __init__(self, session: Session):
        super().__init__(session, LeaveType)

    def list_all(self) -> Sequence[LeaveType]:
        return self.get_multi(order_by=[LeaveType.id])


class LeaveRequestRepository(BaseRepository[LeaveRequest]):
    """Leave request repository."""

    model = LeaveRequest

    def __init__(self, session: Session):
        super().__init__(session, LeaveRequest)

    # ------------------------------------------------------------------ #
    # Finders
    # ------------------------------------------------------------------ #
    def list_by_employee(self, employee_id: str) -> Sequence[LeaveRequest]:
        return self.get_multi(
            filters={"employee_id": employee_id},
            order_by=[LeaveRequest.created_at.desc(), LeaveRequest.id.desc()],
        )

    def list_all(self) -> Sequence[LeaveRequest]:
        return self.get_multi(order_by=[LeaveRequest.created_at.desc(), LeaveRequest.id.desc()])

    def list_incoming(self, approver_emp_id: str) -> List[Dict]:
        """Requests whose applicant has the given employee as FLA or SLA."""
        fla = aliased(FlaMaster)
        sla = aliased(SlaMaster)
        stmt = (
            select(
                LeaveRequest.id.label("leave_id"),
                LeaveRequest.employee_id.label("applicant_emp_id"),
                LeaveRequest.employee_name.label("applicant_name"),
                LeaveRequest.leave_type,
                LeaveRequest.from_date,
                LeaveRequest.to_date,
                LeaveRequest.status,
                fla.emp_id.label("fla_emp_id"),
                fla.name.label("fla_name"),
                sla.emp_id.label("sla_emp_id"),
                sla.name.label("sla_name"),
                LeaveRequest.reason,
                LeaveRequest.remarks,
            )
            .join(Employee, LeaveRequest.employee_id == Employee.emp_id)
            .join(fla, Employee.fla == fla.id)
            .join(sla, Employee.sla == sla.id)
            .where(or_(fla.emp_id == approver_emp_id, sla.emp_id == approver_emp_id))
            .order_by(LeaveRequest.from_date.desc(), LeaveRequest.id.desc())
        )
        rows = []
        for row in self.session.execute(stmt).mappings():
            item = dict(row)
            item["is_same_approver"] = item["fla_emp_id"] == item["sla_emp_id"]
            rows.append(item)
        return rows

    def count_by_status(self, employee_id: str, status: LeaveStatus) -> int:
        stmt = (
            select(func.count())
            .select_from(LeaveRequest)
            .where(LeaveRequest.employee_id == employee_id, LeaveRequest.status == status.value)
        )
        return self.session.execute(stmt).scalar_one()

    # ------------------------------------------------------------------ #
    # Status transitions
    # ------------------------------------------------------------------ #
    def transition_status(
        self,
        leave_id: int,
        *,
        expected_status: str,
        next_status: LeaveStatus,
        remarks: Optional[str] = None,
    ) -> int:
        """
        Move a request to ``next_status`` only if it still holds ``expected_status``.

        ``remarks`` overwrites the stored remarks when given. Returns the
        number of rows updated (0 or 1).
        """
        values = {"status": next_status.value, "updated_at": utcnow()}
        if remarks is not None:
            values["remarks"] = remarks

        stmt = (
            update(LeaveRequest)
            .where(LeaveRequest.id == leave_id, LeaveRequest.status == expected_status)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return result.rowcount or 0
