"""EnrollmentProgress - learner-driven mutations of enrollments."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from enrollflow.enrollments.progress import (
    days_label,
    parse_duration_days,
    progress_for,
    status_for,
    toggle_day,
    validate_progress,
)
from enrollflow.record_store import (
    ConcurrentModificationError,
    EnrollmentStatus,
    InvalidTransitionError,
)

if TYPE_CHECKING:
    from enrollflow.record_store import Enrollment, RecordStore

logger = logging.getLogger(__name__)

# Fresh re-reads before a lost compare-and-set is reported to the caller
MAX_ATTEMPTS = 3


class EnrollmentProgress:
    """Applies day completion and progress updates to active enrollments.

    Every update is a read-validate-write cycle guarded by the enrollment's
    version, retried from a fresh read when another writer wins.
    """

    def __init__(self, store: RecordStore, max_attempts: int = MAX_ATTEMPTS) -> None:
        self.store = store
        self.max_attempts = max_attempts

    def get(self, account_id: str, course_id: str) -> Enrollment:
        """Get the pair's enrollment."""
        return self.store.get_enrollment(account_id, course_id)

    def list_for_account(self, account_id: str) -> list[Enrollment]:
        """List an account's enrollments."""
        return self.store.list_enrollments(account_id=account_id)

    def set_day_completion(self, account_id: str, course_id: str, day: int, completed: bool) -> Enrollment:
        """Mark or unmark a course day and recompute progress and status.

        Raises:
            EnrollmentNotFoundError: If the pair has no enrollment.
            InvalidTransitionError: If the enrollment is still pending.
            InvalidCourseDurationError: If the course duration has no day count.
            InvalidDayError: If day is outside the course.
            OutOfOrderCompletionError: If the previous day is not complete.
            WouldBreakSequenceError: If the next day is still complete.
        """
        course = self.store.get_course(course_id)
        total_days = parse_duration_days(course.duration)

        def apply(enrollment: Enrollment) -> Enrollment:
            days = toggle_day(enrollment.completed_days, day, completed, total_days)
            progress = progress_for(len(days), total_days)
            return self.store.compare_and_set_enrollment(
                enrollment,
                status=status_for(progress),
                progress=progress,
                completed_days=days,
                days_completed_per_duration=days_label(len(days), total_days),
            )

        enrollment = self._update(account_id, course_id, apply)
        logger.info(
            "Day %d %s for %s in %s (progress=%d%%, status=%s)",
            day,
            "completed" if completed else "reopened",
            account_id,
            course_id,
            enrollment.progress,
            enrollment.status,
        )
        return enrollment

    def set_progress(
        self,
        account_id: str,
        course_id: str,
        progress: int,
        status: EnrollmentStatus | str | None = None,
    ) -> Enrollment:
        """Set progress directly, bypassing day ordering.

        Raises:
            InvalidProgressError: If progress is outside 0-100 or status is invalid.
            EnrollmentNotFoundError: If the pair has no enrollment.
            InvalidTransitionError: If the enrollment is still pending.
        """
        resolved = validate_progress(progress, status)

        def apply(enrollment: Enrollment) -> Enrollment:
            return self.store.compare_and_set_enrollment(
                enrollment,
                status=resolved,
                progress=progress,
                completed_days=enrollment.completed_days,
                days_completed_per_duration=enrollment.days_completed_per_duration,
            )

        enrollment = self._update(account_id, course_id, apply)
        logger.info("Progress for %s in %s set to %d%% (%s)", account_id, course_id, progress, resolved)
        return enrollment

    def _update(
        self,
        account_id: str,
        course_id: str,
        apply: Callable[[Enrollment], Enrollment],
    ) -> Enrollment:
        """Run a compare-and-set update, re-reading when it loses a race."""
        attempt = 0
        while True:
            attempt += 1
            enrollment = self.store.get_enrollment(account_id, course_id)
            if enrollment.enrollment_status == EnrollmentStatus.PENDING:
                raise InvalidTransitionError(
                    f"Enrollment for account '{account_id}' in course '{course_id}' "
                    "is pending approval"
                )
            try:
                return apply(enrollment)
            except ConcurrentModificationError:
                if attempt >= self.max_attempts:
                    raise
                logger.debug(
                    "Enrollment %s changed concurrently, retrying (attempt %d)",
                    enrollment.id,
                    attempt,
                )
