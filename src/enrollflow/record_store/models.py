"""SQLAlchemy models for the record stores."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    JSON,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class AccountRole(StrEnum):
    """Account role enum."""

    LEARNER = "learner"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"


class AccountStatus(StrEnum):
    """Account approval status enum."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EnrollmentStatus(StrEnum):
    """Enrollment status enum."""

    PENDING = "pending"
    ENROLLED = "enrolled"
    STARTED = "started"
    COMPLETED = "completed"


ACTIVE_ENROLLMENT_STATUSES = (
    EnrollmentStatus.ENROLLED,
    EnrollmentStatus.STARTED,
    EnrollmentStatus.COMPLETED,
)


class RequestStatus(StrEnum):
    """Enrollment request status enum."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (SQLite stores no offset)."""
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Account(Base):
    """Account model - identity and referral credit."""

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    external_id: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    referral_count: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __init__(
        self,
        name: str,
        email: str,
        external_id: str,
        id: str | None = None,
        role: str = AccountRole.LEARNER.value,
        status: str | None = None,
        referral_count: int = 0,
        created_at: datetime | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.name = name
        self.email = email
        self.external_id = external_id
        self.role = role
        if status is None:
            # Instructors wait for admin approval, everyone else is active at signup
            status = (
                AccountStatus.PENDING.value
                if role == AccountRole.INSTRUCTOR.value
                else AccountStatus.APPROVED.value
            )
        self.status = status
        self.referral_count = referral_count
        self.created_at = created_at if created_at is not None else utcnow()

    def __repr__(self) -> str:
        return f"<Account(id={self.id!r}, external_id={self.external_id!r}, role={self.role!r})>"


class Course(Base):
    """Course model - catalog entry with derived rating fields."""

    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    duration: Mapped[str] = mapped_column(String(100), nullable=False)
    students: Mapped[int] = mapped_column(Integer, nullable=False)
    average_rating: Mapped[float] = mapped_column(Float, nullable=False)
    total_ratings: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Relationships
    enrollments: Mapped[list[Enrollment]] = relationship(
        "Enrollment", back_populates="course", cascade="all, delete-orphan"
    )
    reviews: Mapped[list[Review]] = relationship(
        "Review", back_populates="course", cascade="all, delete-orphan"
    )

    def __init__(
        self,
        title: str,
        slug: str,
        duration: str,
        id: str | None = None,
        students: int = 0,
        created_at: datetime | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.title = title
        self.slug = slug
        self.duration = duration
        self.students = students
        self.average_rating = 0.0
        self.total_ratings = 0
        self.created_at = created_at if created_at is not None else utcnow()

    def __repr__(self) -> str:
        return f"<Course(id={self.id!r}, slug={self.slug!r}, students={self.students!r})>"


class Enrollment(Base):
    """Enrollment model - per-account, per-course membership and progress."""

    __tablename__ = "enrollments"
    __table_args__ = (UniqueConstraint("account_id", "course_id", name="uq_enrollment_pair"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    account_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    course_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    progress: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_days: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    days_completed_per_duration: Mapped[str] = mapped_column(String(20), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    enrolled_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    last_accessed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Relationships
    course: Mapped[Course] = relationship("Course", back_populates="enrollments")

    def __init__(
        self,
        account_id: str,
        course_id: str,
        id: str | None = None,
        status: str | None = None,
        progress: int = 0,
        completed_days: list[int] | None = None,
        days_completed_per_duration: str = "0/0",
        enrolled_at: datetime | None = None,
        last_accessed_at: datetime | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.account_id = account_id
        self.course_id = course_id
        self.status = status if status is not None else EnrollmentStatus.PENDING.value
        self.progress = progress
        self.completed_days = sorted(set(completed_days or []))
        self.days_completed_per_duration = days_completed_per_duration
        self.version = 1
        now = utcnow()
        self.enrolled_at = enrolled_at if enrolled_at is not None else now
        self.last_accessed_at = last_accessed_at if last_accessed_at is not None else now

    @property
    def enrollment_status(self) -> EnrollmentStatus:
        """Get status as EnrollmentStatus enum."""
        return EnrollmentStatus(self.status)

    @property
    def is_active(self) -> bool:
        """Whether the enrollment has been activated by an approval."""
        return self.enrollment_status in ACTIVE_ENROLLMENT_STATUSES

    def __repr__(self) -> str:
        return (
            f"<Enrollment(account_id={self.account_id!r}, course_id={self.course_id!r}, "
            f"status={self.status!r}, progress={self.progress!r})>"
        )


class _RequestFields:
    """Columns shared verbatim by live and archived enrollment requests."""

    account_id: Mapped[str] = mapped_column(String(36), nullable=False)
    course_id: Mapped[str] = mapped_column(String(36), nullable=False)
    course_title: Mapped[str] = mapped_column(String(255), nullable=False)
    course_slug: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    mobile_number: Mapped[str] = mapped_column(String(30), nullable=False)
    evidence_ref: Mapped[str] = mapped_column(String(500), nullable=False)
    amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    transaction_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    referrer_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    rejected_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    @property
    def request_status(self) -> RequestStatus:
        """Get status as RequestStatus enum."""
        return RequestStatus(self.status)


REQUEST_FIELDS = (
    "account_id",
    "course_id",
    "course_title",
    "course_slug",
    "email",
    "mobile_number",
    "payment_ref",
    "evidence_ref",
    "amount",
    "transaction_notes",
    "status",
    "referrer_code",
    "rejection_reason",
    "approved_at",
    "rejected_at",
    "created_at",
    "updated_at",
)


class EnrollmentRequest(_RequestFields, Base):
    """Enrollment request model - admin-reviewable claim of payment."""

    __tablename__ = "enrollment_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    payment_ref: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __init__(
        self,
        account_id: str,
        course_id: str,
        course_title: str,
        course_slug: str,
        email: str,
        mobile_number: str,
        payment_ref: str,
        evidence_ref: str,
        id: str | None = None,
        amount: float | None = None,
        transaction_notes: str | None = None,
        status: str | None = None,
        referrer_code: str | None = None,
        rejection_reason: str | None = None,
        approved_at: datetime | None = None,
        rejected_at: datetime | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.account_id = account_id
        self.course_id = course_id
        self.course_title = course_title
        self.course_slug = course_slug
        self.email = email
        self.mobile_number = mobile_number
        self.payment_ref = payment_ref
        self.evidence_ref = evidence_ref
        self.amount = amount
        self.transaction_notes = transaction_notes
        self.status = status if status is not None else RequestStatus.PENDING.value
        self.referrer_code = referrer_code
        self.rejection_reason = rejection_reason
        self.approved_at = approved_at
        self.rejected_at = rejected_at
        now = utcnow()
        self.created_at = created_at if created_at is not None else now
        self.updated_at = updated_at if updated_at is not None else self.created_at

    def __repr__(self) -> str:
        return (
            f"<EnrollmentRequest(id={self.id!r}, payment_ref={self.payment_ref!r}, "
            f"status={self.status!r})>"
        )


class ArchivedEnrollmentRequest(_RequestFields, Base):
    """Archive model - soft-deleted enrollment requests awaiting restore or purge."""

    __tablename__ = "archived_enrollment_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    original_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    # Not unique here: the token may legitimately be reused once archived
    payment_ref: Mapped[str] = mapped_column(String(100), nullable=False)
    deleted_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __init__(
        self,
        original_id: str,
        id: str | None = None,
        deleted_at: datetime | None = None,
        **fields: Any,
    ) -> None:
        super().__init__()
        self.id = id if id is not None else generate_uuid()
        self.original_id = original_id
        self.deleted_at = deleted_at if deleted_at is not None else utcnow()
        for name in REQUEST_FIELDS:
            setattr(self, name, fields.get(name))

    @classmethod
    def from_request(cls, request: EnrollmentRequest) -> ArchivedEnrollmentRequest:
        """Copy a live request verbatim into an archive entry."""
        return cls(
            original_id=request.id,
            **{name: getattr(request, name) for name in REQUEST_FIELDS},
        )

    def to_request(self) -> EnrollmentRequest:
        """Rebuild the live request with its original ID and timestamps."""
        fields = {name: getattr(self, name) for name in REQUEST_FIELDS}
        return EnrollmentRequest(id=self.original_id, **fields)

    def __repr__(self) -> str:
        return (
            f"<ArchivedEnrollmentRequest(original_id={self.original_id!r}, "
            f"status={self.status!r})>"
        )


class Review(Base):
    """Review model - one rating per account and course."""

    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("account_id", "course_id", name="uq_review_pair"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    account_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    course_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Relationships
    course: Mapped[Course] = relationship("Course", back_populates="reviews")

    def __init__(
        self,
        account_id: str,
        course_id: str,
        rating: int,
        id: str | None = None,
        comment: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.id = id if id is not None else generate_uuid()
        self.account_id = account_id
        self.course_id = course_id
        self.rating = rating
        self.comment = comment.strip()
        now = utcnow()
        self.created_at = now
        self.updated_at = now

    def __repr__(self) -> str:
        return (
            f"<Review(account_id={self.account_id!r}, course_id={self.course_id!r}, "
            f"rating={self.rating!r})>"
        )


@dataclass
class ApprovalOutcome:
    """Result of the atomic approval step.

    Attributes:
        request: The request as stored after the step.
        transitioned: True only for the call that moved the request to approved.
        activated: True when the pair entered ``enrolled`` for the first time.
    """

    request: EnrollmentRequest
    transitioned: bool
    activated: bool
