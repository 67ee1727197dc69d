"""
Authentication endpoints: login, password reset, token check and push
device registration.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from leaveflow.api import deps
from leaveflow.schemas.auth import (
    DeviceTokenRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProtectedResponse,
)
from leaveflow.services.auth.auth_service import AuthService

router = APIRouter(tags=["Authentication"])


@router.post("/auth/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    auth_service: AuthService = Depends(deps.get_auth_service),
) -> Dict[str, Any]:
    return auth_service.login(body.emp_id, body.password, body.fcm_token)


@router.post("/auth/forgot-password", response_model=MessageResponse, response_model_exclude_none=True)
def forgot_password(
    body: ForgotPasswordRequest,
    auth_service: AuthService = Depends(deps.get_auth_service),
) -> MessageResponse:
    auth_service.reset_password(body.emp_id, body.new_password)
    return MessageResponse(message="Password reset successful")


@router.get("/protected", response_model=ProtectedResponse)
def protected(claims: Dict[str, Any] = Depends(deps.get_token_claims)) -> ProtectedResponse:
    return ProtectedResponse(message="Protected route accessed", user=claims)


@router.post("/save-fcm-token", response_model=MessageResponse)
def save_fcm_token(
    body: DeviceTokenRequest,
    auth_service: AuthService = Depends(deps.get_auth_service),
) -> MessageResponse:
    auth_service.save_device_token(body.emp_id, body.fcm_token)
    return MessageResponse(success=True, message="Token saved successfully")
