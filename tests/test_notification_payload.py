from datetime import date
from types import SimpleNamespace

import pytest

from leaveflow.services.notification.payload import (
    LEAVE_APPLIED,
    NEW_LEAVE_TITLE,
    build_new_leave_notification,
    date_range_suffix,
)
from leaveflow.services.workflow.approval_engine import ApproverPair


@pytest.mark.parametrize("from_date, to_date, expected", [
    (None, None, ""),
    ("2024-01-05", None, " (2024-01-05)"),
    (None, "2024-01-10", " (till 2024-01-10)"),
    ("2024-01-05", "2024-01-10", " (2024-01-05 → 2024-01-10)"),
    (date(2024, 1, 5), date(2024, 1, 10), " (2024-01-05 → 2024-01-10)"),
])
def test_date_range_suffix(from_date, to_date, expected):
    assert date_range_suffix(from_date, to_date) == expected


def _leave(**overrides):
    values = dict(
        id=42,
        employee_id="E100",
        employee_name="Asha Rao",
        leave_type="Casual Leave",
        from_date=date(2024, 1, 5),
        to_date=None,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def test_new_leave_notification():
    approvers = ApproverPair(fla_emp_id="M1", sla_emp_id="D1")
    notification = build_new_leave_notification(_leave(), approvers)

    assert notification.recipients == ["M1", "D1"]
    assert notification.title == NEW_LEAVE_TITLE == "New Leave Application"
    assert notification.body == "Asha Rao applied for Casual Leave (2024-01-05)"
    assert notification.data == {
        "type": LEAVE_APPLIED,
        "leave_id": "42",
        "applicant_emp_id": "E100",
    }


def test_same_approver_notified_once():
    approvers = ApproverPair(fla_emp_id="S1", sla_emp_id="S1")
    assert build_new_leave_notification(_leave(), approvers).recipients == ["S1"]


def test_without_approvers_has_no_recipients():
    assert build_new_leave_notification(_leave(), None).recipients == []


def test_data_values_are_text():
    notification = build_new_leave_notification(_leave(employee_id=None), None)
    assert notification.data["applicant_emp_id"] == ""
    assert all(isinstance(v, str) for v in notification.data.values())
