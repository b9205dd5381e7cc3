"""Data models for the Workflow module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from enrollflow.record_store import Enrollment, EnrollmentRequest


@dataclass
class SubmissionResult:
    """Outcome of a learner's enrollment request.

    Attributes:
        request: The created pending request.
        enrollment: The pair's enrollment after submission.
        enrollment_created: Whether submission created the pending enrollment.
    """

    request: EnrollmentRequest
    enrollment: Enrollment
    enrollment_created: bool


@dataclass
class ApprovalResult:
    """Outcome of an approval.

    Attributes:
        request: The request after approval.
        already_approved: True when the call was an idempotent no-op.
        enrollment_activated: True when the pair entered ``enrolled`` for the
            first time (and the course gained a student).
        referral_credited: True when a referrer was credited by this call.
    """

    request: EnrollmentRequest
    already_approved: bool
    enrollment_activated: bool = False
    referral_credited: bool = False


@dataclass
class RejectionResult:
    """Outcome of a rejection.

    Attributes:
        request: The request after rejection.
        already_rejected: True when the call was an idempotent no-op.
    """

    request: EnrollmentRequest
    already_rejected: bool


@dataclass
class RestoreResult:
    """Outcome of a batch restore.

    Attributes:
        restored: Requests moved back into the primary store.
        conflicts: Archived IDs left in place because their payment
            reference is used by a live request.
    """

    restored: list[EnrollmentRequest] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Number of requests restored."""
        return len(self.restored)
