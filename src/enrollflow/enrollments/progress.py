"""Pure progress rules for enrollments."""

from __future__ import annotations

import re
from collections.abc import Iterable

from enrollflow.record_store import (
    EnrollmentStatus,
    InvalidCourseDurationError,
    InvalidDayError,
    InvalidProgressError,
    OutOfOrderCompletionError,
    WouldBreakSequenceError,
)
from enrollflow.record_store.derived import round_half_up

_DAY_COUNT = re.compile(r"\d+")


def parse_duration_days(duration: str | None) -> int:
    """Extract the day count from a free-text duration such as "30 days".

    The first integer in the text wins.

    Raises:
        InvalidCourseDurationError: If the text holds no positive integer.
    """
    match = _DAY_COUNT.search(duration or "")
    days = int(match.group()) if match else 0
    if days <= 0:
        raise InvalidCourseDurationError(f"Cannot read a day count from duration {duration!r}")
    return days


def toggle_day(completed_days: Iterable[int], day: int, completed: bool, total_days: int) -> list[int]:
    """Apply one day (un)completion while keeping the set contiguous from day 1.

    Args:
        completed_days: Currently completed day numbers.
        day: Day being toggled.
        completed: True to mark complete, False to unmark.
        total_days: Number of days in the course.

    Returns:
        The new sorted list of completed days.

    Raises:
        InvalidDayError: If day is outside 1..total_days.
        OutOfOrderCompletionError: If day - 1 is not complete yet.
        WouldBreakSequenceError: If day + 1 is still complete.
    """
    if not 1 <= day <= total_days:
        raise InvalidDayError(f"Day {day} is outside 1..{total_days}")

    days = set(completed_days)
    if completed:
        if day > 1 and day - 1 not in days:
            raise OutOfOrderCompletionError(f"Day {day - 1} must be completed before day {day}")
        days.add(day)
    else:
        if day + 1 in days:
            raise WouldBreakSequenceError(f"Day {day + 1} is complete, so day {day} cannot be unmarked")
        days.discard(day)
    return sorted(days)


def progress_for(completed_count: int, total_days: int) -> int:
    """Percentage of days completed, rounded half-up and capped at 100."""
    return min(100, int(round_half_up(completed_count / total_days * 100)))


def status_for(progress: int) -> EnrollmentStatus:
    """Enrollment status implied by a progress percentage."""
    if progress >= 100:
        return EnrollmentStatus.COMPLETED
    if progress > 0:
        return EnrollmentStatus.STARTED
    return EnrollmentStatus.ENROLLED


def validate_progress(progress: int, status: EnrollmentStatus | str | None = None) -> EnrollmentStatus:
    """Check a directly-set progress value and resolve its status.

    Raises:
        InvalidProgressError: If progress is outside 0-100 or status is not an
            active enrollment status.
    """
    if isinstance(progress, bool) or not 0 <= progress <= 100:
        raise InvalidProgressError(f"Progress must be between 0 and 100, got {progress!r}")
    if status is None:
        return status_for(progress)
    try:
        resolved = EnrollmentStatus(status)
    except ValueError as e:
        raise InvalidProgressError(f"Unknown enrollment status {status!r}") from e
    if resolved == EnrollmentStatus.PENDING:
        raise InvalidProgressError("Progress cannot move an enrollment back to pending")
    return resolved


def days_label(completed_count: int, total_days: int) -> str:
    """Human-readable "done/total" label."""
    return f"{completed_count}/{total_days}"
