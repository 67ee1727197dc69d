"""
Push delivery gateways.

``FirebasePushGateway`` delivers through Firebase Cloud Messaging;
``LoggingPushGateway`` only logs, and is used when no Firebase
credentials are configured.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import firebase_admin
from firebase_admin import credentials, exceptions as firebase_exceptions, messaging

from leaveflow.config.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "MulticastResult",
    "PushGateway",
    "FirebasePushGateway",
    "LoggingPushGateway",
]


@dataclass
class MulticastResult:
    """Per-token outcome of one multicast send."""

    success_count: int = 0
    failure_count: int = 0
    invalid_tokens: List[str] = field(default_factory=list)


class PushGateway:
    """Interface for push delivery providers."""

    def send_multicast(
        self,
        tokens: List[str],
        title: str,
        body: str,
        data: Optional[Dict[str, str]] = None,
    ) -> MulticastResult:
        raise NotImplementedError


class FirebasePushGateway(PushGateway):
    """Firebase Cloud Messaging gateway"""

    def __init__(self, credentials_file: str):
        self.credentials_file = credentials_file
        self._init_firebase()

    def _init_firebase(self) -> None:
        if not firebase_admin._apps:
            cred = credentials.Certificate(self.credentials_file)
            firebase_admin.initialize_app(cred)
        logger.info("Firebase messaging initialized")

    @staticmethod
    def _is_invalid_token_error(exc: Optional[Exception]) -> bool:
        return isinstance(exc, (messaging.UnregisteredError, firebase_exceptions.InvalidArgumentError))

    def send_multicast(
        self,
        tokens: List[str],
        title: str,
        body: str,
        data: Optional[Dict[str, str]] = None,
    ) -> MulticastResult:
        if not tokens:
            return MulticastResult()

        message = messaging.MulticastMessage(
            tokens=tokens,
            notification=messaging.Notification(title=title, body=body),
            data=data or {},
        )
        response = messaging.send_each_for_multicast(message)

        invalid_tokens = []
        for token, send_response in zip(tokens, response.responses):
            if send_response.success:
                continue
            if self._is_invalid_token_error(send_response.exception):
                invalid_tokens.append(token)
            else:
                logger.warning(f"Push to one device failed: {send_response.exception}")

        logger.info(
            f"Push sent: {response.success_count} delivered, {response.failure_count} failed"
        )
        return MulticastResult(
            success_count=response.success_count,
            failure_count=response.failure_count,
            invalid_tokens=invalid_tokens,
        )


class LoggingPushGateway(PushGateway):
    """Dry-run gateway: logs messages and reports every token as delivered."""

    def send_multicast(
        self,
        tokens: List[str],
        title: str,
        body: str,
        data: Optional[Dict[str, str]] = None,
    ) -> MulticastResult:
        logger.info(
            f"[push dry-run] {title}: {body}",
            extra={"token_count": len(tokens), "data": data or {}},
        )
        return MulticastResult(success_count=len(tokens))
