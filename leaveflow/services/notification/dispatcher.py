"""
Notification dispatcher.

Turns a notification addressed to employee ids into one multicast push:
device tokens are looked up, the gateway is called and tokens the
provider rejects as invalid are cleared. Dispatch never raises; the
outcome is returned as a DeliveryReport.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from leaveflow.config.logging import get_logger
from leaveflow.db.session import SessionFactory
from leaveflow.repositories.employee_repository import EmployeeRepository
from leaveflow.services.common.unit_of_work import UnitOfWork
from leaveflow.services.notification.payload import NewLeaveNotification
from leaveflow.services.notification.push_gateway import PushGateway

logger = get_logger(__name__)

__all__ = ["DeliveryReport", "NotificationDispatcher"]


@dataclass
class DeliveryReport:
    recipients: List[str] = field(default_factory=list)
    tokens: List[str] = field(default_factory=list)
    success_count: int = 0
    failure_count: int = 0
    invalid_tokens: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.success_count > 0


class NotificationDispatcher:
    """Sends notifications to employees' registered devices."""

    def __init__(self, session_factory: SessionFactory, gateway: PushGateway) -> None:
        self._session_factory = session_factory
        self.gateway = gateway

    def dispatch(self, notification: NewLeaveNotification) -> DeliveryReport:
        report = DeliveryReport(recipients=list(notification.recipients))
        if not report.recipients:
            logger.warning("Notification has no recipients, nothing sent")
            return report

        try:
            with UnitOfWork(self._session_factory, auto_commit=False) as uow:
                report.tokens = uow.get_repo(EmployeeRepository).find_fcm_tokens(report.recipients)

            if not report.tokens:
                logger.warning(f"No device tokens registered for {report.recipients}")
                return report

            result = self.gateway.send_multicast(
                report.tokens,
                notification.title,
                notification.body,
                notification.data,
            )
            report.success_count = result.success_count
            report.failure_count = result.failure_count
            report.invalid_tokens = list(result.invalid_tokens)

            if report.invalid_tokens:
                with UnitOfWork(self._session_factory) as uow:
                    cleared = uow.get_repo(EmployeeRepository).clear_fcm_tokens(report.invalid_tokens)
                logger.info(f"Cleared {cleared} invalid device token(s)")
        except Exception as exc:
            logger.error(f"Notification dispatch failed: {exc}", exc_info=True)
            report.error = str(exc)
            if not report.failure_count:
                report.failure_count = len(report.tokens)

        return report
