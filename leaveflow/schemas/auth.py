# --- File: leaveflow/schemas/auth.py ---
"""
Authentication request/response schemas.
"""

from typing import Any, Dict, Optional

from pydantic import ConfigDict, Field, field_validator

from leaveflow.schemas.base import BaseSchema

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "EmployeeProfile",
    "ForgotPasswordRequest",
    "DeviceTokenRequest",
    "MessageResponse",
    "ProtectedResponse",
]


class LoginRequest(BaseSchema):
    # Passwords are compared exactly as sent
    model_config = ConfigDict(str_strip_whitespace=False)

    emp_id: str = Field(..., alias="empId", min_length=1)
    password: str = Field(..., min_length=1)
    fcm_token: Optional[str] = Field(
        None,
        description="Device token to register for push notifications",
    )

    @field_validator("emp_id")
    @classmethod
    def strip_emp_id(cls, v: str) -> str:
        return v.strip()


class EmployeeProfile(BaseSchema):
    """Profile returned alongside a freshly issued token."""

    id: int
    emp_id: str = Field(..., alias="empId")
    name: str
    designation: Optional[str] = None
    role_id: Optional[int] = None
    fla: Optional[str] = Field(None, description="First-level approver name")
    sla: Optional[str] = Field(None, description="Second-level approver name")
    fcm_token: Optional[str] = Field(None, alias="fcmToken")


class LoginResponse(BaseSchema):
    token: str
    user: EmployeeProfile


class ForgotPasswordRequest(BaseSchema):
    model_config = ConfigDict(str_strip_whitespace=False)

    emp_id: str = Field(..., alias="empId", min_length=1)
    new_password: str = Field(..., alias="newPassword", min_length=1)

    @field_validator("emp_id")
    @classmethod
    def strip_emp_id(cls, v: str) -> str:
        return v.strip()


class DeviceTokenRequest(BaseSchema):
    emp_id: str = Field(..., alias="empId", min_length=1)
    fcm_token: str = Field(..., alias="fcmToken", min_length=1)


class MessageResponse(BaseSchema):
    message: str
    success: Optional[bool] = None


class ProtectedResponse(BaseSchema):
    message: str
    user: Dict[str, Any]
