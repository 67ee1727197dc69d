"""
Leave request endpoints.

Covers the leave type catalogue, applications, the approver inbox and the
four workflow actions.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from leaveflow.api import deps
from leaveflow.core.exceptions import ValidationError
from leaveflow.schemas.leave import (
    IncomingLeave,
    LeaveCounts,
    LeaveRequestCreate,
    LeaveRequestEnvelope,
    LeaveRequestList,
    LeaveRequestRead,
    LeaveTypeRead,
    TransitionRequest,
)
from leaveflow.services.leave.leave_request_service import LeaveRequestService

router = APIRouter(tags=["Leave Requests"])


@router.get("/leave-types", response_model=List[LeaveTypeRead])
def list_leave_types(service: LeaveRequestService = Depends(deps.get_leave_service)):
    return service.list_leave_types()


@router.post(
    "/leave-request",
    response_model=LeaveRequestEnvelope,
    status_code=status.HTTP_201_CREATED,
)
def create_leave_request(
    body: LeaveRequestCreate,
    service: LeaveRequestService = Depends(deps.get_leave_service),
) -> LeaveRequestEnvelope:
    leave, _report = service.create_leave_request(body)
    return LeaveRequestEnvelope(
        message="Leave request submitted",
        data=LeaveRequestRead.model_validate(leave),
    )


@router.get("/leave-request/{employee_id}", response_model=LeaveRequestList)
def list_employee_requests(
    employee_id: str,
    service: LeaveRequestService = Depends(deps.get_leave_service),
) -> LeaveRequestList:
    leaves = service.list_for_employee(employee_id)
    return LeaveRequestList(data=[LeaveRequestRead.model_validate(leave) for leave in leaves])


@router.get("/incoming-leaves", response_model=List[IncomingLeave])
def list_incoming_leaves(
    emp_id: Optional[str] = Query(None, alias="empId"),
    service: LeaveRequestService = Depends(deps.get_leave_service),
):
    if not emp_id or not emp_id.strip():
        raise ValidationError("empId is required", field="empId")
    return service.list_incoming(emp_id.strip())


# ------------------------------------------------------------------ #
# Workflow actions
# ------------------------------------------------------------------ #

def _envelope(message: str, leave) -> LeaveRequestEnvelope:
    return LeaveRequestEnvelope(message=message, data=LeaveRequestRead.model_validate(leave))


@router.put("/leave-requests/{leave_id}/recommend", response_model=LeaveRequestEnvelope)
def recommend(
    leave_id: int,
    body: TransitionRequest,
    service: LeaveRequestService = Depends(deps.get_leave_service),
):
    leave = service.recommend(leave_id, body.emp_id)
    return _envelope("Leave status updated to FLA Recommended", leave)


@router.put("/leave-requests/{leave_id}/not-recommend", response_model=LeaveRequestEnvelope)
def not_recommend(
    leave_id: int,
    body: TransitionRequest,
    service: LeaveRequestService = Depends(deps.get_leave_service),
):
    leave = service.not_recommend(leave_id, body.emp_id, body.reason)
    return _envelope("Leave not recommended successfully", leave)


@router.put("/leave-requests/{leave_id}/approve", response_model=LeaveRequestEnvelope)
def approve(
    leave_id: int,
    body: TransitionRequest,
    service: LeaveRequestService = Depends(deps.get_leave_service),
):
    leave = service.approve(leave_id, body.emp_id)
    return _envelope("Leave approved successfully", leave)


@router.put("/leave-requests/{leave_id}/reject", response_model=LeaveRequestEnvelope)
def reject(
    leave_id: int,
    body: TransitionRequest,
    service: LeaveRequestService = Depends(deps.get_leave_service),
):
    leave = service.reject(leave_id, body.emp_id, body.reason)
    return _envelope("Leave rejected successfully", leave)


# ------------------------------------------------------------------ #
# Reporting
# ------------------------------------------------------------------ #

@router.get("/leave-counts/{emp_id}", response_model=LeaveCounts)
def leave_counts(
    emp_id: str,
    service: LeaveRequestService = Depends(deps.get_leave_service),
):
    return service.leave_counts(emp_id)


@router.get("/leave-requests", response_model=List[LeaveRequestRead])
def list_all_requests(service: LeaveRequestService = Depends(deps.get_leave_service)):
    return service.list_all()
