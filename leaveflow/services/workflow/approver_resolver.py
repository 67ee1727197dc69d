"""
Approver resolution.

Looks up the first- and second-level approvers configured for an
applicant by joining the employee record to the FLA and SLA role tables.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.orm import Session

from leaveflow.config.logging import get_logger
from leaveflow.db.session import SessionFactory
from leaveflow.repositories.employee_repository import EmployeeRepository
from leaveflow.services.common.unit_of_work import UnitOfWork
from leaveflow.services.workflow.approval_engine import ApproverPair

logger = get_logger(__name__)


def approver_pair_from_row(row: Any, *, partial: bool = False) -> Optional[ApproverPair]:
    """
    Build an ApproverPair from a ``find_approvers`` row.

    Returns None when the row is missing or incomplete. With ``partial``
    a pair with one approver is kept, the absent side left as ``""``;
    only a row with neither approver gives None.
    """
    if row is None:
        return None
    if partial:
        if not row.fla_emp_id and not row.sla_emp_id:
            return None
    elif not row.fla_emp_id or not row.sla_emp_id:
        return None
    return ApproverPair(
        fla_emp_id=row.fla_emp_id or "",
        sla_emp_id=row.sla_emp_id or "",
        fla_name=row.fla_name,
        sla_name=row.sla_name,
    )


class ApproverResolver:
    """Resolves the ApproverPair of an applicant."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def resolve(self, applicant_emp_id: str, *, partial: bool = False) -> Optional[ApproverPair]:
        """
        Return the applicant's approvers in a short read-only transaction.

        None means the applicant is unknown or lacks an FLA or SLA. With
        ``partial`` an applicant with only one of them still resolves,
        which is what notification needs.
        """
        with UnitOfWork(self._session_factory, auto_commit=False) as uow:
            return self.resolve_in(uow.session, applicant_emp_id, partial=partial)

    def resolve_in(
        self,
        session: Session,
        applicant_emp_id: str,
        *,
        partial: bool = False,
    ) -> Optional[ApproverPair]:
        """Same as ``resolve`` but inside a caller-owned session."""
        if not applicant_emp_id:
            return None
        row = EmployeeRepository(session).find_approvers(applicant_emp_id)
        pair = approver_pair_from_row(row, partial=partial)
        if pair is None:
            logger.debug(f"No complete approver chain for employee {applicant_emp_id}")
        return pair
