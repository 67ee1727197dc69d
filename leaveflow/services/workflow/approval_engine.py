"""
Leave approval workflow engine.

Decides whether an approver action is allowed for a leave request and what
status it leads to. The engine is pure: it reads nothing but its
arguments and never touches storage, so the same inputs always produce the
same decision.

Two routing shapes exist:

* distinct approvers: ``Pending`` -> FLA recommends / does not recommend
  -> SLA approves / rejects
* same approver (one person holds both roles): ``Pending`` -> approve /
  reject directly; recommend / not-recommend are undefined
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from leaveflow.core.exceptions import AuthorizationError, StateError, ValidationError
from leaveflow.models.enums import LeaveStatus, WorkflowAction

__all__ = [
    "ApproverPair",
    "Decision",
    "decide",
]


@dataclass(frozen=True)
class ApproverPair:
    """Resolved first- and second-level approvers of one applicant."""

    fla_emp_id: str
    sla_emp_id: str
    fla_name: Optional[str] = None
    sla_name: Optional[str] = None

    @property
    def same_approver(self) -> bool:
        return self.fla_emp_id == self.sla_emp_id

    @property
    def recipients(self) -> list[str]:
        """Deduplicated approver ids, FLA first, empty entries dropped."""
        ids: list[str] = []
        for emp_id in (self.fla_emp_id, self.sla_emp_id):
            if emp_id and emp_id not in ids:
                ids.append(emp_id)
        return ids


@dataclass(frozen=True)
class Decision:
    """
    Outcome of an allowed action.

    ``remarks`` is the text to store in the request's remarks column, or
    None when the remarks stay as they are.
    """

    action: WorkflowAction
    previous_status: LeaveStatus
    next_status: LeaveStatus
    remarks: Optional[str] = None


_NEXT_STATUS = {
    WorkflowAction.RECOMMEND: LeaveStatus.FLA_RECOMMENDED,
    WorkflowAction.NOT_RECOMMEND: LeaveStatus.FLA_NOT_RECOMMENDED,
    WorkflowAction.APPROVE: LeaveStatus.APPROVED,
    WorkflowAction.REJECT: LeaveStatus.REJECTED,
}


def _parse_inputs(
    action: Union[str, WorkflowAction],
    current_status: Union[str, LeaveStatus],
) -> tuple[WorkflowAction, LeaveStatus]:
    try:
        parsed_action = WorkflowAction.parse(action)
    except ValueError as exc:
        raise ValidationError(str(exc), field="action") from exc
    try:
        parsed_status = LeaveStatus.parse(current_status)
    except ValueError as exc:
        raise ValidationError(str(exc), field="status") from exc
    return parsed_action, parsed_status


def _decide_first_level(
    actor: str,
    status: LeaveStatus,
    approvers: ApproverPair,
) -> None:
    if approvers.same_approver:
        raise StateError(
            "FLA and SLA are the same person. Use approve or reject instead.",
            current_status=status.value,
        )
    if actor != approvers.fla_emp_id:
        raise AuthorizationError("You are not the FLA for this leave", required_role="FLA")
    if status is not LeaveStatus.PENDING:
        raise StateError("Leave already processed by FLA", current_status=status.value)


def _decide_second_level(
    actor: str,
    status: LeaveStatus,
    approvers: ApproverPair,
) -> None:
    if actor != approvers.sla_emp_id:
        raise AuthorizationError("You are not the SLA for this leave", required_role="SLA")

    if approvers.same_approver:
        if status is not LeaveStatus.PENDING:
            raise StateError("Leave already processed", current_status=status.value)
    elif status not in LeaveStatus.fla_processed_statuses():
        raise StateError("Leave must be processed by FLA first", current_status=status.value)


def decide(
    action: Union[str, WorkflowAction],
    actor: str,
    current_status: Union[str, LeaveStatus],
    approvers: ApproverPair,
    justification: Optional[str] = None,
) -> Decision:
    """
    Validate an approver action and compute the next status.

    Raises:
        ValidationError: unknown action or status, or a missing
            justification for not-recommend / reject. Checked before any
            actor or status rule.
        StateError: the action is undefined for a single approver, or the
            current status does not allow it.
        AuthorizationError: the actor does not hold the role the action
            requires (FLA for recommend / not-recommend, SLA for
            approve / reject).
    """
    parsed_action, status = _parse_inputs(action, current_status)

    text = (justification or "").strip()
    if parsed_action.requires_justification and not text:
        label = "not recommending" if parsed_action is WorkflowAction.NOT_RECOMMEND else "rejection"
        raise ValidationError(f"Reason is required for {label}", field="reason")

    actor = (actor or "").strip()
    if parsed_action.is_first_level:
        _decide_first_level(actor, status, approvers)
    else:
        _decide_second_level(actor, status, approvers)

    return Decision(
        action=parsed_action,
        previous_status=status,
        next_status=_NEXT_STATUS[parsed_action],
        remarks=text if parsed_action.requires_justification else None,
    )
