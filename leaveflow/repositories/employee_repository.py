"""
Employee Repository

Credential lookups, device-token bookkeeping and approver resolution
queries over ``seg_employee_details`` and the two approver role tables.
"""

from typing import Iterable, List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session, aliased

from leaveflow.models.employee import Employee, FlaMaster, SlaMaster
from leaveflow.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[Employee]):
    """Employee repository."""

    model = Employee

    def __init__(self, session: Session):
        super().__init__(session, Employee)

    def get_by_emp_id(self, emp_id: str) -> Optional[Employee]:
        stmt = select(Employee).where(Employee.emp_id == emp_id).limit(1)
        return self.session.execute(stmt).unique().scalar_one_or_none()

    def set_password(self, emp_id: str, password_hash: str) -> int:
        result = self.session.execute(
            update(Employee).where(Employee.emp_id == emp_id).values(password=password_hash)
        )
        return result.rowcount or 0

    def set_fcm_token(self, emp_id: str, fcm_token: Optional[str]) -> int:
        result = self.session.execute(
            update(Employee).where(Employee.emp_id == emp_id).values(fcm_token=fcm_token)
        )
        return result.rowcount or 0

    def find_fcm_tokens(self, emp_ids: Iterable[str]) -> List[str]:
        """Distinct non-null device tokens for the given employees, first-seen order."""
        emp_ids = [e for e in emp_ids if e]
        if not emp_ids:
            return []

        stmt = (
            select(Employee.fcm_token)
            .where(Employee.emp_id.in_(emp_ids), Employee.fcm_token.is_not(None))
            .order_by(Employee.id)
        )
        tokens: List[str] = []
        for token in self.session.execute(stmt).scalars():
            if token and token not in tokens:
                tokens.append(token)
        return tokens

    def clear_fcm_tokens(self, tokens: Iterable[str]) -> int:
        tokens = list(tokens)
        if not tokens:
            return 0
        result = self.session.execute(
            update(Employee).where(Employee.fcm_token.in_(tokens)).values(fcm_token=None)
        )
        return result.rowcount or 0

    def find_approvers(self, emp_id: str):
        """
        Join the employee to its FLA and SLA role entries.

        Returns a row with ``fla_emp_id, fla_name, sla_emp_id, sla_name``
        (any of which may be None), or None when the employee is unknown.
        """
        fla = aliased(FlaMaster)
        sla = aliased(SlaMaster)
        stmt = (
            select(
                fla.emp_id.label("fla_emp_id"),
                fla.name.label("fla_name"),
                sla.emp_id.label("sla_emp_id"),
                sla.name.label("sla_name"),
            )
            .select_from(Employee)
            .outerjoin(fla, Employee.fla == fla.id)
            .outerjoin(sla, Employee.sla == sla.id)
            .where(Employee.emp_id == emp_id)
            .limit(1)
        )
        return self.session.execute(stmt).first()
