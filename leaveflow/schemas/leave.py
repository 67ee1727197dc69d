# --- File: leaveflow/schemas/leave.py ---
"""
Leave request schemas.

Request bodies are validated here before any workflow logic runs.
"""

from __future__ import annotations

from datetime import date as Date, datetime, time as Time
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator

from leaveflow.schemas.base import BaseSchema

__all__ = [
    "LeaveTypeRead",
    "LeaveRequestCreate",
    "LeaveRequestRead",
    "LeaveRequestEnvelope",
    "LeaveRequestList",
    "TransitionRequest",
    "IncomingLeave",
    "LeaveCounts",
]


class LeaveTypeRead(BaseSchema):
    id: int
    leave_type: str


class LeaveRequestCreate(BaseSchema):
    """Body of ``POST /leave-request``."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "employee_id": "E100",
                "employee_name": "Asha Rao",
                "leave_type": "Casual Leave",
                "from_date": "2024-01-05",
                "to_date": "2024-01-10",
                "reason": "Family function",
                "request_type": "leave",
            }
        }
    )

    employee_id: str = Field(..., min_length=1, max_length=50)
    employee_name: Optional[str] = Field(None, max_length=150)
    fla: Optional[str] = Field(None, max_length=150)
    sla: Optional[str] = Field(None, max_length=150)
    leave_type: Optional[str] = Field(None, max_length=100)
    from_date: Optional[Date] = None
    to_date: Optional[Date] = None
    in_time: Optional[Time] = None
    out_time: Optional[Time] = None
    reason: Optional[str] = None
    remarks: Optional[str] = None
    request_type: Optional[str] = Field(None, max_length=50)

    @field_validator("employee_name", "fla", "sla", "leave_type", "reason", "remarks", "request_type")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_date_range(self) -> "LeaveRequestCreate":
        if self.from_date and self.to_date and self.to_date < self.from_date:
            raise ValueError("to_date cannot be before from_date")
        return self


class LeaveRequestRead(BaseSchema):
    id: int
    employee_id: str
    employee_name: Optional[str] = None
    fla: Optional[str] = None
    sla: Optional[str] = None
    leave_type: Optional[str] = None
    from_date: Optional[Date] = None
    to_date: Optional[Date] = None
    in_time: Optional[Time] = None
    out_time: Optional[Time] = None
    reason: Optional[str] = None
    remarks: Optional[str] = None
    request_type: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LeaveRequestEnvelope(BaseSchema):
    message: str
    data: LeaveRequestRead


class LeaveRequestList(BaseSchema):
    success: bool = True
    data: List[LeaveRequestRead]


class TransitionRequest(BaseSchema):
    """Body of the recommend / not-recommend / approve / reject endpoints."""

    emp_id: str = Field(..., alias="empId", min_length=1, description="Acting employee id")
    reason: Optional[str] = Field(
        None,
        description="Justification, required when not recommending or rejecting",
    )


class IncomingLeave(BaseSchema):
    """A leave request as seen by one of its approvers."""

    leave_id: int
    applicant_emp_id: str
    applicant_name: Optional[str] = None
    leave_type: Optional[str] = None
    from_date: Optional[Date] = None
    to_date: Optional[Date] = None
    status: str
    fla_emp_id: str
    fla_name: Optional[str] = None
    sla_emp_id: str
    sla_name: Optional[str] = None
    is_same_approver: bool
    reason: Optional[str] = None
    remarks: Optional[str] = None


class LeaveCounts(BaseSchema):
    approved: int = 0
    rejected: int = 0
