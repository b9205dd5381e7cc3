"""RecordStore - Main API for record store operations."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError

from enrollflow.record_store.database import Database
from enrollflow.record_store.derived import generate_external_id, slugify
from enrollflow.record_store.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    ConcurrentModificationError,
    CourseExistsError,
    CourseNotFoundError,
    DuplicatePaymentReferenceError,
    EnrollmentNotFoundError,
    InvalidTransitionError,
    RequestNotFoundError,
    ReviewNotFoundError,
)
from enrollflow.record_store.models import (
    Account,
    AccountRole,
    ApprovalOutcome,
    ArchivedEnrollmentRequest,
    Course,
    Enrollment,
    EnrollmentRequest,
    EnrollmentStatus,
    RequestStatus,
    Review,
    utcnow,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

# Attempts for operations that may lose a uniqueness race to a concurrent writer
MAX_WRITE_ATTEMPTS = 3


class RecordStore:
    """Main API for record store operations.

    Provides CRUD operations for Accounts, Courses, Enrollments, Enrollment
    Requests, the Archive, and Reviews. Each method runs in its own session;
    multi-record steps that must not be observed half-done share one
    transaction.
    """

    def __init__(self, db_path: str = "enrollflow.db") -> None:
        """Initialize the record store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    @property
    def database(self) -> Database:
        """The underlying connection manager."""
        return self._db

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Account Operations ---

    def create_account(
        self,
        name: str,
        email: str,
        role: AccountRole = AccountRole.LEARNER,
        external_id: str | None = None,
    ) -> Account:
        """Create a new account.

        Args:
            name: Display name
            email: Unique email address
            role: Learner, instructor or admin
            external_id: Public ID / referral code (generated when omitted)

        Returns:
            Created Account object

        Raises:
            AccountExistsError: If the email or external ID is taken
        """
        external_id = external_id or generate_external_id(role)
        session = self._db.get_session()
        try:
            account = Account(
                name=name,
                email=email.strip().lower(),
                external_id=external_id,
                role=role.value,
            )
            session.add(account)
            session.commit()
            return account
        except IntegrityError as e:
            session.rollback()
            raise AccountExistsError(
                f"Account with email '{email}' or external id '{external_id}' already exists"
            ) from e
        finally:
            session.close()

    def get_account(self, account_id: str) -> Account:
        """Get account by ID.

        Raises:
            AccountNotFoundError: If account doesn't exist
        """
        session = self._db.get_session()
        try:
            account = session.get(Account, account_id)
            if account is None:
                raise AccountNotFoundError(f"Account with id '{account_id}' not found")
            return account
        finally:
            session.close()

    def get_account_by_external_id(self, external_id: str) -> Account:
        """Get account by its external ID (referral code).

        Raises:
            AccountNotFoundError: If account doesn't exist
        """
        session = self._db.get_session()
        try:
            stmt = select(Account).where(Account.external_id == external_id)
            account = session.execute(stmt).scalar_one_or_none()
            if account is None:
                raise AccountNotFoundError(f"Account with external id '{external_id}' not found")
            return account
        finally:
            session.close()

    def increment_referral_count(self, external_id: str) -> int | None:
        """Atomically add one referral credit to an account.

        Args:
            external_id: The referrer's external ID

        Returns:
            The new referral count, or None if no account matches
        """
        session = self._db.get_session()
        try:
            stmt = (
                update(Account)
                .where(Account.external_id == external_id)
                .values(referral_count=Account.referral_count + 1)
                .execution_options(synchronize_session=False)
            )
            if session.execute(stmt).rowcount == 0:
                return None
            # Same transaction, so the read sees exactly our increment
            count_stmt = select(Account.referral_count).where(Account.external_id == external_id)
            new_count = session.execute(count_stmt).scalar_one()
            session.commit()
            return new_count
        finally:
            session.close()

    # --- Course Operations ---

    def create_course(
        self,
        title: str,
        duration: str,
        slug: str | None = None,
    ) -> Course:
        """Create a new course.

        Args:
            title: Course title
            duration: Free-text duration, e.g. "30 days"
            slug: URL slug (derived from the title when omitted)

        Returns:
            Created Course object

        Raises:
            CourseExistsError: If the slug is taken
        """
        slug = slug or slugify(title)
        session = self._db.get_session()
        try:
            course = Course(title=title, slug=slug, duration=duration)
            session.add(course)
            session.commit()
            return course
        except IntegrityError as e:
            session.rollback()
            raise CourseExistsError(f"Course with slug '{slug}' already exists") from e
        finally:
            session.close()

    def get_course(self, course_id: str) -> Course:
        """Get course by ID.

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            course = session.get(Course, course_id)
            if course is None:
                raise CourseNotFoundError(f"Course with id '{course_id}' not found")
            return course
        finally:
            session.close()

    def resolve_course(self, course_ref: str) -> Course:
        """Get course by ID, falling back to its slug.

        Raises:
            CourseNotFoundError: If neither matches
        """
        session = self._db.get_session()
        try:
            course = session.get(Course, course_ref)
            if course is None:
                stmt = select(Course).where(Course.slug == course_ref)
                course = session.execute(stmt).scalar_one_or_none()
            if course is None:
                raise CourseNotFoundError(f"Course '{course_ref}' not found")
            return course
        finally:
            session.close()

    def list_courses(self) -> list[Course]:
        """List all courses ordered by title."""
        session = self._db.get_session()
        try:
            stmt = select(Course).order_by(Course.title)
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def delete_course(self, course_id: str) -> None:
        """Delete a course together with its enrollments and reviews.

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            course = session.get(Course, course_id)
            if course is None:
                raise CourseNotFoundError(f"Course with id '{course_id}' not found")
            session.delete(course)
            session.commit()
        finally:
            session.close()

    def recompute_course_rating(
        self,
        course_id: str,
        aggregate: Callable[[list[int]], tuple[float, int]],
    ) -> Course:
        """Rewrite a course's derived rating fields from its current reviews.

        The reviews are read and the course is written in one transaction, so
        a concurrent review write lands either before or after the recompute.

        Args:
            course_id: Course to recompute
            aggregate: Maps the course's ratings to (average, count)

        Raises:
            CourseNotFoundError: If course doesn't exist
        """
        session = self._db.get_session()
        try:
            course = session.get(Course, course_id)
            if course is None:
                raise CourseNotFoundError(f"Course with id '{course_id}' not found")
            course.average_rating, course.total_ratings = aggregate(self._ratings(session, course_id))
            session.commit()
            return course
        finally:
            session.close()

    # --- Review Operations ---

    def upsert_review(self, account_id: str, course_id: str, rating: int, comment: str = "") -> Review:
        """Create a review, or overwrite the pair's existing one.

        Raises:
            AccountNotFoundError: If account doesn't exist
            CourseNotFoundError: If course doesn't exist
        """
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            session = self._db.get_session()
            try:
                self._require_pair(session, account_id, course_id)
                stmt = select(Review).where(
                    Review.account_id == account_id,
                    Review.course_id == course_id,
                )
                review = session.execute(stmt).scalar_one_or_none()
                if review is None:
                    review = Review(
                        account_id=account_id,
                        course_id=course_id,
                        rating=rating,
                        comment=comment.strip(),
                    )
                    session.add(review)
                else:
                    review.rating = rating
                    review.comment = comment.strip()
                    review.updated_at = utcnow()
                session.commit()
                return review
            except IntegrityError:
                # Lost the insert race, the next pass sees the winner and updates it
                session.rollback()
                logger.debug("Review insert race for %s/%s (attempt %d)", account_id, course_id, attempt)
            finally:
                session.close()
        raise ConcurrentModificationError(
            f"Could not write review for account '{account_id}' on course '{course_id}'"
        )

    def delete_review(self, account_id: str, course_id: str) -> None:
        """Delete the pair's review.

        Raises:
            ReviewNotFoundError: If no review exists
        """
        session = self._db.get_session()
        try:
            stmt = delete(Review).where(
                Review.account_id == account_id,
                Review.course_id == course_id,
            )
            result = session.execute(stmt)
            if result.rowcount == 0:
                raise ReviewNotFoundError(
                    f"Review by account '{account_id}' on course '{course_id}' not found"
                )
            session.commit()
        finally:
            session.close()

    def list_ratings(self, course_id: str) -> list[int]:
        """Every rating currently stored for a course."""
        session = self._db.get_session()
        try:
            return self._ratings(session, course_id)
        finally:
            session.close()

    # --- Enrollment Operations ---

    def find_enrollment(self, account_id: str, course_id: str) -> Enrollment | None:
        """Get the pair's enrollment, or None."""
        session = self._db.get_session()
        try:
            return self._find_enrollment(session, account_id, course_id)
        finally:
            session.close()

    def get_enrollment(self, account_id: str, course_id: str) -> Enrollment:
        """Get the pair's enrollment.

        Raises:
            EnrollmentNotFoundError: If the pair has no enrollment
        """
        enrollment = self.find_enrollment(account_id, course_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(
                f"Enrollment for account '{account_id}' in course '{course_id}' not found"
            )
        return enrollment

    def list_enrollments(
        self,
        account_id: str | None = None,
        course_id: str | None = None,
        status: EnrollmentStatus | None = None,
    ) -> list[Enrollment]:
        """List enrollments with optional filters, most recent first."""
        session = self._db.get_session()
        try:
            stmt = select(Enrollment)
            if account_id is not None:
                stmt = stmt.where(Enrollment.account_id == account_id)
            if course_id is not None:
                stmt = stmt.where(Enrollment.course_id == course_id)
            if status is not None:
                stmt = stmt.where(Enrollment.status == status.value)
            stmt = stmt.order_by(Enrollment.enrolled_at.desc())
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def ensure_pending_enrollment(self, account_id: str, course_id: str) -> tuple[Enrollment, bool]:
        """Create a pending enrollment unless the pair already has one.

        Check-then-insert backed by the pair's unique constraint: a caller
        that loses the race re-reads and returns the winner's row.

        Returns:
            (enrollment, created) where created is False if one already existed
        """
        for _ in range(MAX_WRITE_ATTEMPTS):
            session = self._db.get_session()
            try:
                existing = self._find_enrollment(session, account_id, course_id)
                if existing is not None:
                    return existing, False
                enrollment = Enrollment(account_id=account_id, course_id=course_id)
                session.add(enrollment)
                session.commit()
                return enrollment, True
            except IntegrityError:
                session.rollback()
                logger.debug("Enrollment insert race for %s/%s", account_id, course_id)
            finally:
                session.close()
        return self.get_enrollment(account_id, course_id), False

    def compare_and_set_enrollment(
        self,
        enrollment: Enrollment,
        *,
        status: EnrollmentStatus,
        progress: int,
        completed_days: Sequence[int],
        days_completed_per_duration: str,
    ) -> Enrollment:
        """Write progress fields only if the row is unchanged since it was read.

        Args:
            enrollment: The enrollment as previously read (its version is checked)
            status: New status
            progress: New progress percentage
            completed_days: New completed day set
            days_completed_per_duration: New "done/total" label

        Returns:
            The updated Enrollment

        Raises:
            ConcurrentModificationError: If another writer got there first
            EnrollmentNotFoundError: If the enrollment was deleted meanwhile
        """
        session = self._db.get_session()
        try:
            stmt = (
                update(Enrollment)
                .where(
                    Enrollment.id == enrollment.id,
                    Enrollment.version == enrollment.version,
                )
                .values(
                    status=status.value,
                    progress=progress,
                    completed_days=sorted(set(completed_days)),
                    days_completed_per_duration=days_completed_per_duration,
                    last_accessed_at=utcnow(),
                    version=Enrollment.version + 1,
                )
                .execution_options(synchronize_session=False)
            )
            result = session.execute(stmt)
            if result.rowcount == 0:
                session.rollback()
                if session.get(Enrollment, enrollment.id) is None:
                    raise EnrollmentNotFoundError(f"Enrollment '{enrollment.id}' no longer exists")
                raise ConcurrentModificationError(
                    f"Enrollment '{enrollment.id}' changed since version {enrollment.version}"
                )
            session.commit()
            updated = session.get(Enrollment, enrollment.id, populate_existing=True)
            assert updated is not None
            return updated
        finally:
            session.close()

    # --- Enrollment Request Operations ---

    def create_request(
        self,
        account_id: str,
        course: Course,
        email: str,
        mobile_number: str,
        payment_ref: str,
        evidence_ref: str,
        amount: float | None = None,
        transaction_notes: str | None = None,
        referrer_code: str | None = None,
    ) -> EnrollmentRequest:
        """Create a pending enrollment request.

        Raises:
            AccountNotFoundError: If account doesn't exist
            DuplicatePaymentReferenceError: If a live request already uses the token
        """
        session = self._db.get_session()
        try:
            if session.get(Account, account_id) is None:
                raise AccountNotFoundError(f"Account with id '{account_id}' not found")

            stmt = select(EnrollmentRequest.id).where(EnrollmentRequest.payment_ref == payment_ref)
            if session.execute(stmt).first() is not None:
                raise DuplicatePaymentReferenceError(
                    f"Payment reference '{payment_ref}' has already been used"
                )

            request = EnrollmentRequest(
                account_id=account_id,
                course_id=course.id,
                course_title=course.title,
                course_slug=course.slug,
                email=email,
                mobile_number=mobile_number,
                payment_ref=payment_ref,
                evidence_ref=evidence_ref,
                amount=amount,
                transaction_notes=transaction_notes,
                referrer_code=referrer_code,
            )
            session.add(request)
            session.commit()
            return request
        except IntegrityError as e:
            session.rollback()
            raise DuplicatePaymentReferenceError(
                f"Payment reference '{payment_ref}' has already been used"
            ) from e
        finally:
            session.close()

    def get_request(self, request_id: str) -> EnrollmentRequest:
        """Get enrollment request by ID.

        Raises:
            RequestNotFoundError: If request doesn't exist
        """
        session = self._db.get_session()
        try:
            request = session.get(EnrollmentRequest, request_id)
            if request is None:
                raise RequestNotFoundError(f"Enrollment request with id '{request_id}' not found")
            return request
        finally:
            session.close()

    def list_requests(self, status: RequestStatus | None = None) -> list[EnrollmentRequest]:
        """List enrollment requests, most recent first."""
        session = self._db.get_session()
        try:
            stmt = select(EnrollmentRequest)
            if status is not None:
                stmt = stmt.where(EnrollmentRequest.status == status.value)
            stmt = stmt.order_by(EnrollmentRequest.created_at.desc())
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def approve_request(self, request_id: str) -> ApprovalOutcome:
        """Approve a request and activate its enrollment in one transaction.

        The status change is a conditional update, so among concurrent callers
        exactly one sees ``transitioned=True``. The student counter moves only
        when the pair's enrollment enters ``enrolled`` for the first time.

        Raises:
            RequestNotFoundError: If request doesn't exist
            CourseNotFoundError: If a pending request's course was deleted
            InvalidTransitionError: If the request was rejected
        """
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            session = self._db.get_session()
            try:
                request = session.get(EnrollmentRequest, request_id)
                if request is None:
                    raise RequestNotFoundError(
                        f"Enrollment request with id '{request_id}' not found"
                    )
                if (
                    request.request_status == RequestStatus.PENDING
                    and session.get(Course, request.course_id) is None
                ):
                    raise CourseNotFoundError(
                        f"Course '{request.course_id}' of enrollment request '{request_id}' no longer exists"
                    )

                now = utcnow()
                result = session.execute(
                    update(EnrollmentRequest)
                    .where(
                        EnrollmentRequest.id == request_id,
                        EnrollmentRequest.status == RequestStatus.PENDING.value,
                    )
                    .values(
                        status=RequestStatus.APPROVED.value,
                        approved_at=now,
                        updated_at=now,
                    )
                    .execution_options(synchronize_session=False)
                )
                session.refresh(request)
                if result.rowcount == 0:
                    if request.request_status == RequestStatus.APPROVED:
                        session.commit()
                        return ApprovalOutcome(request=request, transitioned=False, activated=False)
                    raise InvalidTransitionError(
                        f"Enrollment request '{request_id}' is {request.status} and cannot be approved"
                    )

                activated = self._activate_enrollment(session, request.account_id, request.course_id)
                if activated:
                    session.execute(
                        update(Course)
                        .where(Course.id == request.course_id)
                        .values(students=Course.students + 1)
                        .execution_options(synchronize_session=False)
                    )
                session.commit()
                return ApprovalOutcome(request=request, transitioned=True, activated=activated)
            except IntegrityError:
                session.rollback()
                logger.warning("Approval of %s raced an enrollment insert (attempt %d)", request_id, attempt)
            finally:
                session.close()
        raise ConcurrentModificationError(f"Could not approve enrollment request '{request_id}'")

    def reject_request(self, request_id: str, reason: str | None = None) -> tuple[EnrollmentRequest, bool]:
        """Reject a pending request and drop its never-activated enrollment.

        Returns:
            (request, changed) where changed is False if it was already rejected

        Raises:
            RequestNotFoundError: If request doesn't exist
            InvalidTransitionError: If the request was already approved
        """
        session = self._db.get_session()
        try:
            request = session.get(EnrollmentRequest, request_id)
            if request is None:
                raise RequestNotFoundError(f"Enrollment request with id '{request_id}' not found")

            now = utcnow()
            result = session.execute(
                update(EnrollmentRequest)
                .where(
                    EnrollmentRequest.id == request_id,
                    EnrollmentRequest.status == RequestStatus.PENDING.value,
                )
                .values(
                    status=RequestStatus.REJECTED.value,
                    rejected_at=now,
                    rejection_reason=reason,
                    updated_at=now,
                )
                .execution_options(synchronize_session=False)
            )
            session.refresh(request)
            if result.rowcount == 0:
                if request.request_status == RequestStatus.REJECTED:
                    session.commit()
                    return request, False
                raise InvalidTransitionError(
                    f"Enrollment request '{request_id}' is {request.status} and cannot be rejected"
                )

            self._delete_pending_enrollment(session, request.account_id, request.course_id)
            session.commit()
            return request, True
        finally:
            session.close()

    # --- Archive Operations ---

    def archive_request(self, request_id: str) -> EnrollmentRequest | None:
        """Move a request into the Archive.

        The copy, the removal and the cleanup of a pending enrollment commit
        together.

        Returns:
            The request as it was before deletion, or None if it doesn't exist
        """
        session = self._db.get_session()
        try:
            request = session.get(EnrollmentRequest, request_id)
            if request is None:
                return None

            session.add(ArchivedEnrollmentRequest.from_request(request))
            session.delete(request)
            if request.request_status == RequestStatus.PENDING:
                self._delete_pending_enrollment(session, request.account_id, request.course_id)
            session.commit()
            return request
        except IntegrityError:
            # Another handler archived it first
            session.rollback()
            return None
        finally:
            session.close()

    def list_archive(self) -> list[ArchivedEnrollmentRequest]:
        """List archived requests, most recently deleted first."""
        session = self._db.get_session()
        try:
            stmt = select(ArchivedEnrollmentRequest).order_by(
                ArchivedEnrollmentRequest.deleted_at.desc()
            )
            return list(session.execute(stmt).scalars().all())
        finally:
            session.close()

    def restore_request(self, original_id: str) -> EnrollmentRequest | None:
        """Move an archived request back into the primary store.

        The request keeps its original ID and timestamps. A pending request
        gets its pending enrollment back, stamped with the submission time.

        Returns:
            The restored request, or None if the ID is not archived

        Raises:
            DuplicatePaymentReferenceError: If a live request now uses the token
        """
        session = self._db.get_session()
        try:
            stmt = select(ArchivedEnrollmentRequest).where(
                ArchivedEnrollmentRequest.original_id == original_id
            )
            entry = session.execute(stmt).scalar_one_or_none()
            if entry is None:
                return None

            clash = select(EnrollmentRequest.id).where(
                or_(
                    EnrollmentRequest.payment_ref == entry.payment_ref,
                    EnrollmentRequest.id == entry.original_id,
                )
            )
            if session.execute(clash).first() is not None:
                raise DuplicatePaymentReferenceError(
                    f"Payment reference '{entry.payment_ref}' is in use by a live request"
                )

            request = entry.to_request()
            session.add(request)
            if request.request_status == RequestStatus.PENDING:
                self._restore_pending_enrollment(session, request)
            session.delete(entry)
            session.commit()
            return request
        except IntegrityError as e:
            session.rollback()
            raise DuplicatePaymentReferenceError(
                f"Enrollment request '{original_id}' could not be restored"
            ) from e
        finally:
            session.close()

    def purge_archived(self, original_ids: Sequence[str]) -> int:
        """Permanently remove archive entries.

        Returns:
            Number of entries removed
        """
        if not original_ids:
            return 0
        session = self._db.get_session()
        try:
            stmt = delete(ArchivedEnrollmentRequest).where(
                ArchivedEnrollmentRequest.original_id.in_(list(original_ids))
            )
            result = session.execute(stmt)
            session.commit()
            return result.rowcount
        finally:
            session.close()

    def count_requests(self) -> tuple[int, int]:
        """Count live and archived requests."""
        session = self._db.get_session()
        try:
            live = session.execute(select(func.count(EnrollmentRequest.id))).scalar_one()
            archived = session.execute(select(func.count(ArchivedEnrollmentRequest.id))).scalar_one()
            return live, archived
        finally:
            session.close()

    # --- Helpers (run inside a caller's session) ---

    @staticmethod
    def _ratings(session: Session, course_id: str) -> list[int]:
        stmt = select(Review.rating).where(Review.course_id == course_id)
        return list(session.execute(stmt).scalars().all())

    @staticmethod
    def _find_enrollment(session: Session, account_id: str, course_id: str) -> Enrollment | None:
        stmt = select(Enrollment).where(
            Enrollment.account_id == account_id,
            Enrollment.course_id == course_id,
        )
        return session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _require_pair(session: Session, account_id: str, course_id: str) -> None:
        if session.get(Account, account_id) is None:
            raise AccountNotFoundError(f"Account with id '{account_id}' not found")
        if session.get(Course, course_id) is None:
            raise CourseNotFoundError(f"Course with id '{course_id}' not found")

    def _activate_enrollment(self, session: Session, account_id: str, course_id: str) -> bool:
        """Promote the pair to enrolled. True if this was its first activation."""
        result = session.execute(
            update(Enrollment)
            .where(
                Enrollment.account_id == account_id,
                Enrollment.course_id == course_id,
                Enrollment.status == EnrollmentStatus.PENDING.value,
            )
            .values(
                status=EnrollmentStatus.ENROLLED.value,
                enrolled_at=utcnow(),
                version=Enrollment.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return True
        if self._find_enrollment(session, account_id, course_id) is not None:
            # Already enrolled, started or completed
            return False
        session.add(
            Enrollment(
                account_id=account_id,
                course_id=course_id,
                status=EnrollmentStatus.ENROLLED.value,
            )
        )
        session.flush()
        return True

    @staticmethod
    def _delete_pending_enrollment(session: Session, account_id: str, course_id: str) -> bool:
        result = session.execute(
            delete(Enrollment)
            .where(
                Enrollment.account_id == account_id,
                Enrollment.course_id == course_id,
                Enrollment.status == EnrollmentStatus.PENDING.value,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    def _restore_pending_enrollment(self, session: Session, request: EnrollmentRequest) -> None:
        if self._find_enrollment(session, request.account_id, request.course_id) is not None:
            return
        if session.get(Account, request.account_id) is None or session.get(Course, request.course_id) is None:
            logger.warning(
                "Restored request %s without enrollment: account or course no longer exists",
                request.id,
            )
            return
        session.add(
            Enrollment(
                account_id=request.account_id,
                course_id=request.course_id,
                enrolled_at=request.created_at,
                last_accessed_at=request.created_at,
            )
        )
