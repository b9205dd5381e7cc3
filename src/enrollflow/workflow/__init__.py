"""Workflow - Drives enrollment requests through review, approval and the Archive."""

from enrollflow.workflow.models import (
    ApprovalResult,
    RejectionResult,
    RestoreResult,
    SubmissionResult,
)
from enrollflow.workflow.workflow import EnrollmentWorkflow

__all__ = [
    "ApprovalResult",
    "EnrollmentWorkflow",
    "RejectionResult",
    "RestoreResult",
    "SubmissionResult",
]
