"""
FastAPI dependencies.

Services and settings are built once by ``create_app`` and kept on
``app.state``; these callables hand them to route functions.

Example usage in a router:
    @router.get("/leave-types")
    def leave_types(service: LeaveRequestService = Depends(deps.get_leave_service)):
        ...
"""

from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from leaveflow.core.exceptions import AuthenticationError
from leaveflow.services.auth.auth_service import AuthService
from leaveflow.services.leave.leave_request_service import LeaveRequestService

_bearer = HTTPBearer(auto_error=False)


# --- Services ------------------------------------------------------------------

def get_leave_service(request: Request) -> LeaveRequestService:
    return request.app.state.leave_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


# --- Authentication ------------------------------------------------------------

def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    auth_service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Claims of the Bearer token on the request; 401 when missing or invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing token")
    return auth_service.verify(credentials.credentials)
