from leaveflow.models import Employee
from leaveflow.services.notification.payload import NewLeaveNotification
from leaveflow.services.notification.push_gateway import LoggingPushGateway


def _notification(recipients):
    return NewLeaveNotification(
        recipients=recipients,
        title="New Leave Application",
        body="Asha Rao applied for Casual Leave",
        data={"type": "LEAVE_APPLIED", "leave_id": "1", "applicant_emp_id": "E100"},
    )


def _token_of(session_factory, emp_id):
    with session_factory() as session:
        return session.query(Employee).filter_by(emp_id=emp_id).one().fcm_token


def test_sends_one_multicast(org, dispatcher, gateway):
    report = dispatcher.dispatch(_notification(["M1", "D1"]))

    assert len(gateway.calls) == 1
    assert gateway.calls[0]["tokens"] == ["tok-m1", "tok-d1"]
    assert gateway.calls[0]["data"]["type"] == "LEAVE_APPLIED"
    assert report.success_count == 2
    assert report.failure_count == 0
    assert report.error is None
    assert report.delivered


def test_no_recipients(org, dispatcher, gateway):
    report = dispatcher.dispatch(_notification([]))
    assert report.recipients == []
    assert gateway.calls == []


def test_no_registered_tokens(org, dispatcher, gateway):
    report = dispatcher.dispatch(_notification(["E200"]))
    assert report.tokens == []
    assert report.success_count == 0
    assert gateway.calls == []


def test_invalid_tokens_are_cleared(org, dispatcher, gateway, session_factory):
    gateway.invalid_tokens = ["tok-d1"]

    report = dispatcher.dispatch(_notification(["M1", "D1"]))

    assert report.invalid_tokens == ["tok-d1"]
    assert report.success_count == 1
    assert report.failure_count == 1
    assert _token_of(session_factory, "D1") is None
    assert _token_of(session_factory, "M1") == "tok-m1"


def test_gateway_failure_is_reported_not_raised(org, dispatcher, gateway, session_factory):
    gateway.error = RuntimeError("provider unavailable")

    report = dispatcher.dispatch(_notification(["M1"]))

    assert report.error == "provider unavailable"
    assert report.failure_count == 1
    assert report.success_count == 0
    assert _token_of(session_factory, "M1") == "tok-m1"


def test_logging_gateway_reports_all_delivered():
    result = LoggingPushGateway().send_multicast(["a", "b"], "title", "body", {"k": "v"})
    assert result.success_count == 2
    assert result.failure_count == 0
    assert result.invalid_tokens == []
