"""Enrollments package - day completion and progress tracking."""

from enrollflow.enrollments.progress import (
    days_label,
    parse_duration_days,
    progress_for,
    status_for,
    toggle_day,
    validate_progress,
)
from enrollflow.enrollments.service import EnrollmentProgress

__all__ = [
    "EnrollmentProgress",
    "days_label",
    "parse_duration_days",
    "progress_for",
    "status_for",
    "toggle_day",
    "validate_progress",
]
