"""
Leave request service.

Owns the leave_request rows: creation with approver notification, the
listings used by applicants and approvers, and the four workflow
transitions. Transition rules live in the approval engine; this service
loads the snapshot, asks the engine for a decision and applies it with a
conditional update.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple, Union

from leaveflow.config.logging import get_logger
from leaveflow.core.exceptions import NotFoundError, StateError
from leaveflow.db.session import SessionFactory
from leaveflow.models.enums import LeaveStatus, WorkflowAction
from leaveflow.models.leave import LeaveRequest, LeaveType
from leaveflow.repositories.leave_repository import LeaveRequestRepository, LeaveTypeRepository
from leaveflow.schemas.leave import LeaveRequestCreate
from leaveflow.services.common.unit_of_work import UnitOfWork
from leaveflow.services.notification.dispatcher import DeliveryReport, NotificationDispatcher
from leaveflow.services.notification.payload import build_new_leave_notification
from leaveflow.services.workflow.approval_engine import decide
from leaveflow.services.workflow.approver_resolver import ApproverResolver

logger = get_logger(__name__)


class LeaveRequestService:
    """
    Leave request operations.

    Every call runs in its own UnitOfWork built from ``session_factory``.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        dispatcher: NotificationDispatcher,
        resolver: Optional[ApproverResolver] = None,
    ) -> None:
        self._session_factory = session_factory
        self.dispatcher = dispatcher
        self.resolver = resolver or ApproverResolver(session_factory)

    # ------------------------------------------------------------------ #
    # Catalogue and listings
    # ------------------------------------------------------------------ #

    def list_leave_types(self) -> Sequence[LeaveType]:
        with UnitOfWork(self._session_factory, auto_commit=False) as uow:
            return uow.get_repo(LeaveTypeRepository).list_all()

    def list_for_employee(self, employee_id: str) -> Sequence[LeaveRequest]:
        with UnitOfWork(self._session_factory, auto_commit=False) as uow:
            return uow.get_repo(LeaveRequestRepository).list_by_employee(employee_id)

    def list_all(self) -> Sequence[LeaveRequest]:
        with UnitOfWork(self._session_factory, auto_commit=False) as uow:
            return uow.get_repo(LeaveRequestRepository).list_all()

    def list_incoming(self, approver_emp_id: str) -> List[Dict]:
        with UnitOfWork(self._session_factory, auto_commit=False) as uow:
            return uow.get_repo(LeaveRequestRepository).list_incoming(approver_emp_id)

    def leave_counts(self, employee_id: str) -> Dict[str, int]:
        with UnitOfWork(self._session_factory, auto_commit=False) as uow:
            repo = uow.get_repo(LeaveRequestRepository)
            return {
                "approved": repo.count_by_status(employee_id, LeaveStatus.APPROVED),
                "rejected": repo.count_by_status(employee_id, LeaveStatus.REJECTED),
            }

    # ------------------------------------------------------------------ #
    # Creation
    # ------------------------------------------------------------------ #

    def create_leave_request(self, payload: LeaveRequestCreate) -> Tuple[LeaveRequest, DeliveryReport]:
        """
        Persist a new Pending request, then notify its approvers.

        The transaction covers the insert only. Notification happens after
        commit and its failures end up in the returned report.
        """
        values = payload.model_dump(by_alias=False)
        values["status"] = LeaveStatus.PENDING.value

        with UnitOfWork(self._session_factory) as uow:
            leave = uow.get_repo(LeaveRequestRepository).create(values)

        logger.info(
            f"Leave request {leave.id} created for {leave.employee_id}",
            extra={"leave_id": leave.id, "employee_id": leave.employee_id},
        )

        approvers = self.resolver.resolve(leave.employee_id, partial=True)
        if approvers is None:
            logger.warning(f"No approvers configured for {leave.employee_id}, notification skipped")
            return leave, DeliveryReport()

        notification = build_new_leave_notification(leave, approvers)
        report = self.dispatcher.dispatch(notification)
        return leave, report

    # ------------------------------------------------------------------ #
    # Workflow transitions
    # ------------------------------------------------------------------ #

    def transition(
        self,
        leave_id: int,
        action: Union[str, WorkflowAction],
        actor: str,
        justification: Optional[str] = None,
    ) -> LeaveRequest:
        """
        Apply an approver action to a leave request.

        Raises:
            NotFoundError: unknown request, or the applicant has no approvers
            ValidationError / AuthorizationError / StateError: from the engine
            StateError: the status changed while the decision was made
        """
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(LeaveRequestRepository)
            leave = repo.get(leave_id)
            if leave is None:
                raise NotFoundError("Leave", leave_id)

            approvers = self.resolver.resolve_in(uow.session, leave.employee_id)
            if approvers is None:
                raise NotFoundError("Leave", leave_id, message="Leave not found or approvers not configured")

            decision = decide(action, actor, leave.status, approvers, justification)

            updated = repo.transition_status(
                leave_id,
                expected_status=leave.status,
                next_status=decision.next_status,
                remarks=decision.remarks,
            )
            if not updated:
                raise StateError(
                    "Leave status changed concurrently, reload and try again",
                    current_status=leave.status,
                )
            uow.commit()

        logger.info(
            f"Leave {leave_id}: {decision.previous_status.value} -> {decision.next_status.value} by {actor}",
            extra={"leave_id": leave_id, "action": decision.action.value, "actor": actor},
        )

        with UnitOfWork(self._session_factory, auto_commit=False) as uow:
            return uow.get_repo(LeaveRequestRepository).get(leave_id)

    def recommend(self, leave_id: int, actor: str) -> LeaveRequest:
        return self.transition(leave_id, WorkflowAction.RECOMMEND, actor)

    def not_recommend(self, leave_id: int, actor: str, justification: Optional[str]) -> LeaveRequest:
        return self.transition(leave_id, WorkflowAction.NOT_RECOMMEND, actor, justification)

    def approve(self, leave_id: int, actor: str) -> LeaveRequest:
        return self.transition(leave_id, WorkflowAction.APPROVE, actor)

    def reject(self, leave_id: int, actor: str, justification: Optional[str]) -> LeaveRequest:
        return self.transition(leave_id, WorkflowAction.REJECT, actor, justification)
