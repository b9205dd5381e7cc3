"""Custom exceptions for the record stores.

Every error raised by the engine derives from one of five categories so that
callers (and the REST layer) can decide how to surface it without knowing the
concrete type.
"""


class EnrollflowError(Exception):
    """Base exception for all enrollflow errors."""


# --- Categories ---


class NotFoundError(EnrollflowError):
    """A referenced record could not be resolved."""


class ConflictError(EnrollflowError):
    """A write would violate a uniqueness constraint."""


class InvalidTransitionError(EnrollflowError):
    """The requested state change is not allowed from the current state."""


class ValidationError(EnrollflowError):
    """An input value is malformed or out of range."""


class DependencyFailure(EnrollflowError):
    """A soft failure in a collaborator. Logged, never fatal to a transition."""


# --- Not found ---


class AccountNotFoundError(NotFoundError):
    """Account with given ID or external ID does not exist."""


class CourseNotFoundError(NotFoundError):
    """Course with given ID or slug does not exist."""


class RequestNotFoundError(NotFoundError):
    """Enrollment request with given ID does not exist."""


class EnrollmentNotFoundError(NotFoundError):
    """No enrollment exists for the account/course pair."""


class ReviewNotFoundError(NotFoundError):
    """No review exists for the account/course pair."""


# --- Conflicts ---


class AccountExistsError(ConflictError):
    """Account with the same email or external ID already exists."""


class CourseExistsError(ConflictError):
    """Course with the same slug already exists."""


class DuplicatePaymentReferenceError(ConflictError):
    """Payment reference is already used by a live enrollment request."""


class ConcurrentModificationError(ConflictError):
    """Record changed underneath a read-modify-write cycle."""


# --- Transitions ---


class OutOfOrderCompletionError(InvalidTransitionError):
    """Day N marked complete while day N-1 is not."""


class WouldBreakSequenceError(InvalidTransitionError):
    """Day N unmarked while day N+1 is still complete."""


# --- Validation ---


class InvalidProgressError(ValidationError):
    """Progress outside [0, 100] or an unknown progress status."""


class InvalidCourseDurationError(ValidationError):
    """Course duration text holds no positive day count."""


class InvalidDayError(ValidationError):
    """Day number outside the course's range."""


class InvalidRatingError(ValidationError):
    """Review rating outside [1, 5]."""


class InvalidPaymentReferenceError(ValidationError):
    """Payment reference is blank."""
