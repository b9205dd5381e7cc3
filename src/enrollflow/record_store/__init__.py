"""Record Store - Persistent storage for accounts, courses, enrollments and requests."""

from enrollflow.record_store.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    ConcurrentModificationError,
    ConflictError,
    CourseExistsError,
    CourseNotFoundError,
    DependencyFailure,
    DuplicatePaymentReferenceError,
    EnrollflowError,
    EnrollmentNotFoundError,
    InvalidCourseDurationError,
    InvalidDayError,
    InvalidPaymentReferenceError,
    InvalidProgressError,
    InvalidRatingError,
    InvalidTransitionError,
    NotFoundError,
    OutOfOrderCompletionError,
    RequestNotFoundError,
    ReviewNotFoundError,
    ValidationError,
    WouldBreakSequenceError,
)
from enrollflow.record_store.models import (
    Account,
    AccountRole,
    AccountStatus,
    ApprovalOutcome,
    ArchivedEnrollmentRequest,
    Course,
    Enrollment,
    EnrollmentRequest,
    EnrollmentStatus,
    RequestStatus,
    Review,
)
from enrollflow.record_store.store import RecordStore

__all__ = [
    "Account",
    "AccountExistsError",
    "AccountNotFoundError",
    "AccountRole",
    "AccountStatus",
    "ApprovalOutcome",
    "ArchivedEnrollmentRequest",
    "ConcurrentModificationError",
    "ConflictError",
    "Course",
    "CourseExistsError",
    "CourseNotFoundError",
    "DependencyFailure",
    "DuplicatePaymentReferenceError",
    "EnrollflowError",
    "Enrollment",
    "EnrollmentNotFoundError",
    "EnrollmentRequest",
    "EnrollmentStatus",
    "InvalidCourseDurationError",
    "InvalidDayError",
    "InvalidPaymentReferenceError",
    "InvalidProgressError",
    "InvalidRatingError",
    "InvalidTransitionError",
    "NotFoundError",
    "OutOfOrderCompletionError",
    "RecordStore",
    "RequestNotFoundError",
    "RequestStatus",
    "Review",
    "ReviewNotFoundError",
    "ValidationError",
    "WouldBreakSequenceError",
]
