"""
Leave workflow enumerations.

Status values are stored verbatim in the ``leave_request.status`` column.
"""

from enum import Enum
from typing import Union


class LeaveStatus(str, Enum):
    """Leave request status enumeration."""

    PENDING = "Pending"
    FLA_RECOMMENDED = "FLA Recommended"
    FLA_NOT_RECOMMENDED = "FLA Not Recommended"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union[str, "LeaveStatus"]) -> "LeaveStatus":
        """Case-insensitive lookup; raises ValueError for unknown values."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        raise ValueError(f"Unknown leave status: {value!r}")

    @classmethod
    def fla_processed_statuses(cls) -> list["LeaveStatus"]:
        return [cls.FLA_RECOMMENDED, cls.FLA_NOT_RECOMMENDED]


class WorkflowAction(str, Enum):
    """Actions an approver can take on a leave request."""

    RECOMMEND = "recommend"
    NOT_RECOMMEND = "not-recommend"
    APPROVE = "approve"
    REJECT = "reject"

    @classmethod
    def parse(cls, value: Union[str, "WorkflowAction"]) -> "WorkflowAction":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        if normalized == "notrecommend":
            normalized = "not-recommend"
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown workflow action: {value!r}")

    @property
    def requires_justification(self) -> bool:
        return self in (WorkflowAction.NOT_RECOMMEND, WorkflowAction.REJECT)

    @property
    def is_first_level(self) -> bool:
        return self in (WorkflowAction.RECOMMEND, WorkflowAction.NOT_RECOMMEND)
