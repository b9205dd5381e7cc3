"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from enrollflow.record_store import AccountRole, EnrollmentStatus, RequestStatus

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


class IdsRequest(BaseModel):
    """Request model for batch operations on request IDs."""

    ids: list[str] = Field(..., min_length=1)


class CountResponse(BaseModel):
    """Response model for batch operations that report a count."""

    count: int


# Account models


class AccountCreate(BaseModel):
    """Request model for creating an account."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    role: AccountRole = AccountRole.LEARNER
    external_id: str | None = Field(default=None, min_length=1, max_length=20)


class AccountResponse(BaseModel):
    """Response model for an account."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    external_id: str
    name: str
    email: str
    role: str
    status: str
    referral_count: int
    created_at: datetime


def account_to_response(account: Any) -> AccountResponse:
    """Convert an Account model to AccountResponse."""
    return AccountResponse.model_validate(account)


# Course models


class CourseCreate(BaseModel):
    """Request model for creating a course."""

    title: str = Field(..., min_length=1, max_length=255)
    duration: str = Field(..., min_length=1, max_length=100)
    slug: str | None = Field(default=None, min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")


class CourseResponse(BaseModel):
    """Response model for a course."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    slug: str
    duration: str
    students: int
    average_rating: float
    total_ratings: int
    created_at: datetime


def course_to_response(course: Any) -> CourseResponse:
    """Convert a Course model to CourseResponse."""
    return CourseResponse.model_validate(course)


# Review models


class ReviewUpsert(BaseModel):
    """Request model for creating or overwriting a review."""

    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(default="", max_length=5000)


class ReviewResponse(BaseModel):
    """Response model for a review, with the course's refreshed rating."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    account_id: str
    course_id: str
    rating: int
    comment: str
    created_at: datetime
    updated_at: datetime


class ReviewResultResponse(BaseModel):
    """Response model for review writes."""

    review: ReviewResponse | None
    course: CourseResponse


# Enrollment request models


class EnrollmentRequestCreate(BaseModel):
    """Request model for submitting an enrollment request."""

    account_id: str = Field(..., min_length=1)
    course: str = Field(..., min_length=1, description="Course ID or slug")
    payment_ref: str = Field(..., min_length=1, max_length=100, pattern=r"\S")
    evidence_ref: str = Field(..., min_length=1, max_length=500)
    referrer_code: str | None = Field(default=None, max_length=20)
    email: str | None = Field(default=None, max_length=255)
    mobile_number: str = Field(default="", max_length=30)
    amount: float | None = Field(default=None, ge=0)
    transaction_notes: str | None = Field(default=None, max_length=5000)


class RejectRequest(BaseModel):
    """Request model for rejecting an enrollment request."""

    reason: str | None = Field(default=None, max_length=5000)


class EnrollmentRequestResponse(BaseModel):
    """Response model for an enrollment request."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    account_id: str
    course_id: str
    course_title: str
    course_slug: str
    email: str
    mobile_number: str
    payment_ref: str
    evidence_ref: str
    evidence_url: str | None = None
    amount: float | None
    transaction_notes: str | None
    status: RequestStatus
    referrer_code: str | None
    rejection_reason: str | None
    approved_at: datetime | None
    rejected_at: datetime | None
    created_at: datetime
    updated_at: datetime


def request_to_response(request: Any, evidence_url: str | None = None) -> EnrollmentRequestResponse:
    """Convert an EnrollmentRequest model to EnrollmentRequestResponse."""
    response = EnrollmentRequestResponse.model_validate(request)
    response.evidence_url = evidence_url
    return response


class ApprovalResponse(BaseModel):
    """Response model for an approval."""

    request: EnrollmentRequestResponse
    already_approved: bool
    enrollment_activated: bool
    referral_credited: bool


class RejectionResponse(BaseModel):
    """Response model for a rejection."""

    request: EnrollmentRequestResponse
    already_rejected: bool


# Archive models


class ArchivedRequestResponse(EnrollmentRequestResponse):
    """Response model for an archived enrollment request.

    ``id`` is the original request ID, which is what restore and purge take.
    """

    archive_id: str
    deleted_at: datetime


def archived_to_response(entry: Any, evidence_url: str | None = None) -> ArchivedRequestResponse:
    """Convert an ArchivedEnrollmentRequest model to ArchivedRequestResponse."""
    fields = EnrollmentRequestResponse.model_validate(entry).model_dump()
    fields.update(
        id=entry.original_id,
        archive_id=entry.id,
        deleted_at=entry.deleted_at,
        evidence_url=evidence_url,
    )
    return ArchivedRequestResponse(**fields)


class RestoreResponse(BaseModel):
    """Response model for a batch restore."""

    count: int
    restored: list[EnrollmentRequestResponse]
    conflicts: list[str]


# Enrollment models


class EnrollmentResponse(BaseModel):
    """Response model for an enrollment."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    account_id: str
    course_id: str
    status: EnrollmentStatus
    progress: int
    completed_days: list[int]
    days_completed_per_duration: str
    version: int
    enrolled_at: datetime
    last_accessed_at: datetime


def enrollment_to_response(enrollment: Any) -> EnrollmentResponse:
    """Convert an Enrollment model to EnrollmentResponse."""
    return EnrollmentResponse.model_validate(enrollment)


class DayCompletionUpdate(BaseModel):
    """Request model for marking or unmarking a course day."""

    completed: bool


class ProgressUpdate(BaseModel):
    """Request model for setting progress directly."""

    progress: int = Field(..., ge=0, le=100)
    status: EnrollmentStatus | None = None
