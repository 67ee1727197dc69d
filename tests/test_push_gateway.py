from types import SimpleNamespace

import pytest
from firebase_admin import exceptions as firebase_exceptions, messaging

from leaveflow.services.notification.push_gateway import FirebasePushGateway


def _send_response(exception=None):
    return SimpleNamespace(success=exception is None, exception=exception)


@pytest.fixture
def firebase_gateway(monkeypatch):
    monkeypatch.setattr(FirebasePushGateway, "_init_firebase", lambda self: None)
    return FirebasePushGateway("unused-credentials.json")


@pytest.fixture
def sent_messages(monkeypatch):
    """Replace the FCM multicast call with a canned batch response."""
    sent = []
    responses = [
        _send_response(),
        _send_response(messaging.UnregisteredError("Requested entity was not found.")),
        _send_response(firebase_exceptions.InvalidArgumentError("Invalid registration token")),
        _send_response(firebase_exceptions.UnavailableError("Service unavailable")),
    ]

    def fake_send(message):
        sent.append(message)
        return SimpleNamespace(
            responses=responses,
            success_count=1,
            failure_count=3,
        )

    monkeypatch.setattr(messaging, "send_each_for_multicast", fake_send)
    return sent


def test_only_permanent_failures_are_invalid(firebase_gateway, sent_messages):
    result = firebase_gateway.send_multicast(
        ["tok-ok", "tok-unregistered", "tok-malformed", "tok-busy"],
        "New Leave Application",
        "Asha Rao applied for Casual Leave",
        {"type": "LEAVE_APPLIED"},
    )

    assert result.success_count == 1
    assert result.failure_count == 3
    assert result.invalid_tokens == ["tok-unregistered", "tok-malformed"]

    message = sent_messages[0]
    assert message.tokens == ["tok-ok", "tok-unregistered", "tok-malformed", "tok-busy"]
    assert message.notification.title == "New Leave Application"
    assert message.data == {"type": "LEAVE_APPLIED"}


def test_no_tokens_sends_nothing(firebase_gateway, sent_messages):
    result = firebase_gateway.send_multicast([], "title", "body")
    assert result.success_count == 0
    assert sent_messages == []
