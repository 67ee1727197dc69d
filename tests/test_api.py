from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from leaveflow.models import LeaveRequest

from tests.conftest import PASSWORD

API = "/api"


def _login(client, emp_id="E100"):
    response = client.post(f"{API}/auth/login", json={"empId": emp_id, "password": PASSWORD})
    assert response.status_code == 200
    return response.json()


class TestAuthEndpoints:
    def test_login(self, org, client):
        body = _login(client)
        assert body["token"]
        assert body["user"]["empId"] == "E100"
        assert body["user"]["fla"] == "Meera"
        assert body["user"]["fcmToken"] == "tok-e100"

    def test_login_bad_password(self, org, client):
        response = client.post(f"{API}/auth/login", json={"empId": "E100", "password": "nope-nope"})
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid credentials"

    def test_login_missing_fields(self, org, client):
        response = client.post(f"{API}/auth/login", json={"empId": "E100"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_protected(self, org, client):
        token = _login(client)["token"]
        response = client.get(f"{API}/protected", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["user"]["empId"] == "E100"

    def test_protected_without_token(self, client):
        assert client.get(f"{API}/protected").status_code == 401

    def test_protected_with_bad_token(self, client):
        response = client.get(f"{API}/protected", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_forgot_password(self, org, client):
        response = client.post(
            f"{API}/auth/forgot-password",
            json={"empId": "E100", "newPassword": "another-pass"},
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Password reset successful"}

    def test_forgot_password_keeps_surrounding_spaces(self, org, client):
        response = client.post(
            f"{API}/auth/forgot-password",
            json={"empId": "E100", "newPassword": "  abcdefgh  "},
        )
        assert response.status_code == 200

        exact = client.post(f"{API}/auth/login", json={"empId": "E100", "password": "  abcdefgh  "})
        assert exact.status_code == 200
        stripped = client.post(f"{API}/auth/login", json={"empId": "E100", "password": "abcdefgh"})
        assert stripped.status_code == 401

    def test_forgot_password_short(self, org, client):
        response = client.post(f"{API}/auth/forgot-password", json={"empId": "E100", "newPassword": "abc"})
        assert response.status_code == 400

    def test_forgot_password_unknown(self, org, client):
        response = client.post(
            f"{API}/auth/forgot-password",
            json={"empId": "NOBODY", "newPassword": "another-pass"},
        )
        assert response.status_code == 404

    def test_save_fcm_token(self, org, client):
        response = client.post(f"{API}/save-fcm-token", json={"empId": "E300", "fcmToken": "dev-1"})
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Token saved successfully"}

    def test_save_fcm_token_unknown(self, org, client):
        response = client.post(f"{API}/save-fcm-token", json={"empId": "NOBODY", "fcmToken": "dev-1"})
        assert response.status_code == 404


class TestLeaveEndpoints:
    def _apply(self, client, employee_id="E100"):
        response = client.post(
            f"{API}/leave-request",
            json={
                "employee_id": employee_id,
                "employee_name": "Asha Rao",
                "leave_type": "Casual Leave",
                "from_date": "2024-01-05",
                "to_date": "2024-01-10",
                "reason": "Family function",
            },
        )
        assert response.status_code == 201
        return response.json()["data"]

    def test_leave_types(self, org, client):
        response = client.get(f"{API}/leave-types")
        assert response.status_code == 200
        assert [t["leave_type"] for t in response.json()] == ["Casual Leave", "Sick Leave"]

    def test_create_notifies_approvers(self, org, client, gateway):
        data = self._apply(client)
        assert data["status"] == "Pending"
        assert gateway.calls[0]["tokens"] == ["tok-m1", "tok-d1"]

    def test_create_rejects_inverted_dates(self, org, client):
        response = client.post(
            f"{API}/leave-request",
            json={"employee_id": "E100", "from_date": "2024-01-10", "to_date": "2024-01-05"},
        )
        assert response.status_code == 400

    def test_failed_commit_rolls_back(self, org, client, gateway, session_factory, monkeypatch):
        def failing_commit(self):
            raise OperationalError("COMMIT", None, Exception("disk I/O error"))

        monkeypatch.setattr(Session, "commit", failing_commit)
        response = client.post(
            f"{API}/leave-request",
            json={"employee_id": "E100", "leave_type": "Casual Leave", "from_date": "2024-01-05"},
        )
        monkeypatch.undo()

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "Internal Server Error"
        assert gateway.calls == []
        with session_factory() as session:
            assert session.query(LeaveRequest).count() == 0

    def test_list_for_employee(self, org, client):
        created = self._apply(client)
        response = client.get(f"{API}/leave-request/E100")
        body = response.json()
        assert body["success"] is True
        assert [item["id"] for item in body["data"]] == [created["id"]]

    def test_full_workflow(self, org, client):
        leave_id = self._apply(client)["id"]

        response = client.put(f"{API}/leave-requests/{leave_id}/recommend", json={"empId": "M1"})
        assert response.status_code == 200
        assert response.json()["message"] == "Leave status updated to FLA Recommended"

        response = client.put(
            f"{API}/leave-requests/{leave_id}/reject",
            json={"empId": "D1", "reason": "Release week"},
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "Rejected"
        assert response.json()["data"]["remarks"] == "Release week"

        counts = client.get(f"{API}/leave-counts/E100").json()
        assert counts == {"approved": 0, "rejected": 1}

    def test_status_codes(self, org, client):
        leave_id = self._apply(client)["id"]

        wrong_actor = client.put(f"{API}/leave-requests/{leave_id}/approve", json={"empId": "M1"})
        assert wrong_actor.status_code == 403

        too_early = client.put(f"{API}/leave-requests/{leave_id}/approve", json={"empId": "D1"})
        assert too_early.status_code == 409
        assert too_early.json()["error"]["details"]["current_status"] == "Pending"

        no_reason = client.put(f"{API}/leave-requests/{leave_id}/not-recommend", json={"empId": "M1"})
        assert no_reason.status_code == 400

        missing = client.put(f"{API}/leave-requests/9999/approve", json={"empId": "D1"})
        assert missing.status_code == 404

    def test_incoming_leaves(self, org, client):
        self._apply(client, "E200")
        response = client.get(f"{API}/incoming-leaves", params={"empId": "S1"})
        assert response.status_code == 200
        rows = response.json()
        assert len(rows) == 1
        assert rows[0]["is_same_approver"] is True
        assert rows[0]["applicant_emp_id"] == "E200"

    def test_incoming_leaves_requires_emp_id(self, client):
        assert client.get(f"{API}/incoming-leaves").status_code == 400

    def test_list_all(self, org, client):
        self._apply(client)
        self._apply(client, "E300")
        response = client.get(f"{API}/leave-requests")
        assert response.status_code == 200
        assert len(response.json()) == 2


def test_health(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert "X-Request-ID" in response.headers
    assert "X-Process-Time" in response.headers
