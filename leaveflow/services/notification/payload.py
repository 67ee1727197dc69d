"""
Push payload construction for leave notifications.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Union

from leaveflow.services.workflow.approval_engine import ApproverPair

__all__ = [
    "LEAVE_APPLIED",
    "NEW_LEAVE_TITLE",
    "NewLeaveNotification",
    "build_new_leave_notification",
    "date_range_suffix",
]

LEAVE_APPLIED = "LEAVE_APPLIED"
NEW_LEAVE_TITLE = "New Leave Application"

DateLike = Union[date, str, None]


def _render_date(value: DateLike) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def date_range_suffix(from_date: DateLike, to_date: DateLike) -> str:
    """
    Human readable date range appended to the notification body.

    >>> date_range_suffix(None, None)
    ''
    >>> date_range_suffix("2024-01-05", "2024-01-10")
    ' (2024-01-05 → 2024-01-10)'
    """
    if from_date and to_date:
        return f" ({_render_date(from_date)} → {_render_date(to_date)})"
    if from_date:
        return f" ({_render_date(from_date)})"
    if to_date:
        return f" (till {_render_date(to_date)})"
    return ""


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class NewLeaveNotification:
    """Message sent to approvers when a leave request is created."""

    recipients: List[str]
    title: str
    body: str
    data: Dict[str, str] = field(default_factory=dict)


def build_new_leave_notification(leave: Any, approvers: Optional[ApproverPair]) -> NewLeaveNotification:
    """
    Build the "new leave" push for a freshly created request.

    ``leave`` is any object exposing ``id``, ``employee_id``,
    ``employee_name``, ``leave_type``, ``from_date`` and ``to_date``.
    Without approvers the notification has no recipients.
    """
    recipients = approvers.recipients if approvers else []
    suffix = date_range_suffix(leave.from_date, leave.to_date)
    body = f"{_as_text(leave.employee_name)} applied for {_as_text(leave.leave_type)}{suffix}"

    return NewLeaveNotification(
        recipients=recipients,
        title=NEW_LEAVE_TITLE,
        body=body,
        data={
            "type": LEAVE_APPLIED,
            "leave_id": _as_text(leave.id),
            "applicant_emp_id": _as_text(leave.employee_id),
        },
    )
