from datetime import date
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from leaveflow.config.settings import Settings
from leaveflow.core.security import hash_password
from leaveflow.db.init_db import drop_db, init_db
from leaveflow.db.session import build_engine, build_session_factory
from leaveflow.main import create_app
from leaveflow.models import Employee, FlaMaster, LeaveRequest, LeaveType, SlaMaster
from leaveflow.services.leave.leave_request_service import LeaveRequestService
from leaveflow.services.notification.dispatcher import NotificationDispatcher
from leaveflow.services.notification.push_gateway import MulticastResult, PushGateway

PASSWORD = "secret-pass"


class RecordingPushGateway(PushGateway):
    """Fake gateway that records every multicast and can be told to fail."""

    def __init__(self) -> None:
        self.calls: List[Dict] = []
        self.invalid_tokens: List[str] = []
        self.error: Optional[Exception] = None

    def send_multicast(self, tokens, title, body, data=None) -> MulticastResult:
        self.calls.append({"tokens": list(tokens), "title": title, "body": body, "data": dict(data or {})})
        if self.error is not None:
            raise self.error
        invalid = [t for t in tokens if t in self.invalid_tokens]
        return MulticastResult(
            success_count=len(tokens) - len(invalid),
            failure_count=len(invalid),
            invalid_tokens=invalid,
        )


@pytest.fixture
def settings(tmp_path) -> Settings:
    # File-backed so the app under test and the fixtures share one database
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'leaveflow.db'}",
        JWT_SECRET_KEY="test-secret-key",
        ENVIRONMENT="testing",
        LOG_TO_FILE=False,
        LOG_LEVEL="WARNING",
        PASSWORD_BCRYPT_ROUNDS=4,
        PUSH_ENABLED=False,
        AUTO_CREATE_TABLES=True,
    )


@pytest.fixture
def engine(settings):
    engine = build_engine(settings)
    init_db(engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def gateway() -> RecordingPushGateway:
    return RecordingPushGateway()


@pytest.fixture
def dispatcher(session_factory, gateway) -> NotificationDispatcher:
    return NotificationDispatcher(session_factory, gateway)


@pytest.fixture
def leave_service(session_factory, dispatcher) -> LeaveRequestService:
    return LeaveRequestService(session_factory, dispatcher)


@pytest.fixture
def org(session_factory):
    """
    Seed a small organisation:

    * E100 (Asha Rao) reports to FLA M1 (Meera) and SLA D1 (Dev)
    * E200 (Ravi) has S1 (Sunita) as both FLA and SLA
    * E300 (Kiran) has no approvers configured
    """
    password_hash = hash_password(PASSWORD, rounds=4)
    with session_factory() as session:
        fla_m1 = FlaMaster(emp_id="M1", name="Meera")
        sla_d1 = SlaMaster(emp_id="D1", name="Dev")
        fla_s1 = FlaMaster(emp_id="S1", name="Sunita")
        sla_s1 = SlaMaster(emp_id="S1", name="Sunita")
        session.add_all([fla_m1, sla_d1, fla_s1, sla_s1])
        session.flush()

        session.add_all([
            Employee(
                emp_id="E100", emp_name="Asha Rao", designation="Engineer", role_id=3,
                password=password_hash, fla=fla_m1.id, sla=sla_d1.id, fcm_token="tok-e100",
            ),
            Employee(
                emp_id="E200", emp_name="Ravi", designation="Analyst", role_id=3,
                password=password_hash, fla=fla_s1.id, sla=sla_s1.id,
            ),
            Employee(emp_id="E300", emp_name="Kiran", password=password_hash),
            Employee(emp_id="M1", emp_name="Meera", password=password_hash, fcm_token="tok-m1"),
            Employee(emp_id="D1", emp_name="Dev", password=password_hash, fcm_token="tok-d1"),
            Employee(emp_id="S1", emp_name="Sunita", password=password_hash, fcm_token="tok-s1"),
            LeaveType(leave_type="Casual Leave"),
            LeaveType(leave_type="Sick Leave"),
        ])
        session.commit()


@pytest.fixture
def make_leave(session_factory):
    """Insert a leave request row directly, bypassing notification."""

    def _make(employee_id: str = "E100", status: str = "Pending", **values) -> int:
        with session_factory() as session:
            leave = LeaveRequest(
                employee_id=employee_id,
                employee_name=values.pop("employee_name", "Applicant"),
                leave_type=values.pop("leave_type", "Casual Leave"),
                from_date=values.pop("from_date", date(2024, 1, 5)),
                to_date=values.pop("to_date", date(2024, 1, 10)),
                status=status,
                **values,
            )
            session.add(leave)
            session.commit()
            return leave.id

    return _make


@pytest.fixture
def client(settings, gateway, engine):
    app = create_app(settings, push_gateway=gateway)
    with TestClient(app) as test_client:
        yield test_client
