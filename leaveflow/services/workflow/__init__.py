"""Leave approval workflow: decision engine and approver resolution."""

from leaveflow.services.workflow.approval_engine import (
    ApproverPair,
    Decision,
    decide,
)
from leaveflow.services.workflow.approver_resolver import ApproverResolver

__all__ = [
    "ApproverPair",
    "ApproverResolver",
    "Decision",
    "decide",
]
