"""
Authentication service.

Employee login with JWT issuance, password reset, token verification and
push device registration.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from leaveflow.config.logging import get_logger
from leaveflow.config.settings import Settings
from leaveflow.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from leaveflow.core.security import (
    JWTSettings,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from leaveflow.db.session import SessionFactory
from leaveflow.models.employee import Employee
from leaveflow.repositories.employee_repository import EmployeeRepository
from leaveflow.services.common.unit_of_work import UnitOfWork

logger = get_logger(__name__)


class AuthService:
    """Credential checks and session tokens for employees."""

    def __init__(self, session_factory: SessionFactory, settings: Settings) -> None:
        self._session_factory = session_factory
        self.settings = settings
        self.jwt_settings = JWTSettings.from_settings(settings)

    @staticmethod
    def _profile(employee: Employee, fcm_token: Optional[str]) -> Dict[str, Any]:
        return {
            "id": employee.id,
            "emp_id": employee.emp_id,
            "name": employee.emp_name,
            "designation": employee.designation,
            "role_id": employee.role_id,
            "fla": employee.fla_entry.name if employee.fla_entry else None,
            "sla": employee.sla_entry.name if employee.sla_entry else None,
            "fcm_token": fcm_token or employee.fcm_token or None,
        }

    def login(self, emp_id: str, password: str, fcm_token: Optional[str] = None) -> Dict[str, Any]:
        """
        Authenticate an employee and issue an access token.

        Returns ``{"token": ..., "user": profile}``. A non-blank
        ``fcm_token`` is registered for push notifications.
        """
        fcm_token = fcm_token.strip() if fcm_token and fcm_token.strip() else None

        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(EmployeeRepository)
            employee = repo.get_by_emp_id(emp_id)
            if employee is None or not verify_password(password, employee.password):
                logger.info(f"Failed login for {emp_id}")
                raise AuthenticationError("Invalid credentials")

            if fcm_token:
                repo.set_fcm_token(emp_id, fcm_token)

            profile = self._profile(employee, fcm_token)

        token = create_access_token(
            subject=profile["id"],
            jwt_settings=self.jwt_settings,
            additional_claims={
                "empId": profile["emp_id"],
                "name": profile["name"],
                "designation": profile["designation"],
            },
        )
        logger.info(f"Employee {emp_id} logged in")
        return {"token": token, "user": profile}

    def reset_password(self, emp_id: str, new_password: str) -> None:
        if not emp_id or not new_password:
            raise ValidationError("empId and newPassword are required")
        if len(new_password) < self.settings.PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {self.settings.PASSWORD_MIN_LENGTH} characters long",
                field="newPassword",
            )

        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(EmployeeRepository)
            if repo.get_by_emp_id(emp_id) is None:
                raise NotFoundError("User", emp_id, message="User not found")
            repo.set_password(emp_id, hash_password(new_password, self.settings.PASSWORD_BCRYPT_ROUNDS))

        logger.info(f"Password reset for {emp_id}")

    def verify(self, token: str) -> Dict[str, Any]:
        """Claims of a valid token; AuthenticationError otherwise."""
        return decode_token(token, self.jwt_settings)

    def save_device_token(self, emp_id: str, fcm_token: str) -> None:
        if not emp_id or not fcm_token:
            raise ValidationError("empId and fcmToken are required")

        with UnitOfWork(self._session_factory) as uow:
            updated = uow.get_repo(EmployeeRepository).set_fcm_token(emp_id, fcm_token)
            if not updated:
                raise NotFoundError("Employee", emp_id, message="Employee not found")
