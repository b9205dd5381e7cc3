"""Enrollment progress endpoints."""

from fastapi import APIRouter

from enrollflow.api.dependencies import ProgressDep
from enrollflow.api.models import (
    APIResponse,
    DayCompletionUpdate,
    EnrollmentResponse,
    ProgressUpdate,
    enrollment_to_response,
)

router = APIRouter(prefix="/enrollments", tags=["enrollments"])


@router.get("", response_model=APIResponse[list[EnrollmentResponse]])
def list_enrollments(account_id: str, progress: ProgressDep) -> APIResponse[list[EnrollmentResponse]]:
    """List an account's enrollments."""
    enrollments = progress.list_for_account(account_id)
    return APIResponse(data=[enrollment_to_response(e) for e in enrollments])


@router.get("/{account_id}/{course_id}", response_model=APIResponse[EnrollmentResponse])
def get_enrollment(
    account_id: str, course_id: str, progress: ProgressDep
) -> APIResponse[EnrollmentResponse]:
    """Get the enrollment for an account and course."""
    return APIResponse(data=enrollment_to_response(progress.get(account_id, course_id)))


@router.put(
    "/{account_id}/{course_id}/days/{day}",
    response_model=APIResponse[EnrollmentResponse],
)
def set_day_completion(
    account_id: str,
    course_id: str,
    day: int,
    body: DayCompletionUpdate,
    progress: ProgressDep,
) -> APIResponse[EnrollmentResponse]:
    """Mark or unmark a course day as completed."""
    enrollment = progress.set_day_completion(account_id, course_id, day, body.completed)
    return APIResponse(data=enrollment_to_response(enrollment))


@router.put(
    "/{account_id}/{course_id}/progress",
    response_model=APIResponse[EnrollmentResponse],
)
def set_progress(
    account_id: str,
    course_id: str,
    body: ProgressUpdate,
    progress: ProgressDep,
) -> APIResponse[EnrollmentResponse]:
    """Set progress directly."""
    enrollment = progress.set_progress(account_id, course_id, body.progress, body.status)
    return APIResponse(data=enrollment_to_response(enrollment))
