from leaveflow.repositories.base import BaseRepository
from leaveflow.repositories.employee_repository import EmployeeRepository
from leaveflow.repositories.leave_repository import LeaveRequestRepository, LeaveTypeRepository

__all__ = [
    "BaseRepository",
    "EmployeeRepository",
    "LeaveRequestRepository",
    "LeaveTypeRepository",
]
