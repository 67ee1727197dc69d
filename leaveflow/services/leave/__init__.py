from leaveflow.services.leave.leave_request_service import LeaveRequestService

__all__ = ["LeaveRequestService"]
