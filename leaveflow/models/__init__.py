from leaveflow.models.base import Base, TimestampMixin
from leaveflow.models.employee import Employee, FlaMaster, SlaMaster
from leaveflow.models.enums import LeaveStatus, WorkflowAction
from leaveflow.models.leave import LeaveRequest, LeaveType

__all__ = [
    "Base",
    "TimestampMixin",
    "Employee",
    "FlaMaster",
    "SlaMaster",
    "LeaveRequest",
    "LeaveType",
    "LeaveStatus",
    "WorkflowAction",
]
