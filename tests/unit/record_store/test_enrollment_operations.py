"""Unit tests for RecordStore enrollment operations."""

import pytest

from enrollflow.record_store import (
    Account,
    ConcurrentModificationError,
    Course,
    EnrollmentNotFoundError,
    EnrollmentStatus,
    RecordStore,
)


@pytest.fixture
def store() -> RecordStore:
    """Create an in-memory RecordStore for testing."""
    return RecordStore(":memory:")


@pytest.fixture
def account(store: RecordStore) -> Account:
    """A learner account."""
    return store.create_account(name="Asha", email="asha@example.com")


@pytest.fixture
def course(store: RecordStore) -> Course:
    """A five-day course."""
    return store.create_course(title="Python Basics", duration="5 days")


@pytest.mark.unit
class TestEnsurePendingEnrollment:
    """Tests for ensure_pending_enrollment."""

    def test_creates_pending(self, store: RecordStore, account: Account, course: Course) -> None:
        """First call creates a pending enrollment."""
        enrollment, created = store.ensure_pending_enrollment(account.id, course.id)

        assert created is True
        assert enrollment.status == EnrollmentStatus.PENDING
        assert enrollment.progress == 0
        assert enrollment.completed_days == []
        assert enrollment.version == 1

    def test_second_call_returns_existing(
        self, store: RecordStore, account: Account, course: Course
    ) -> None:
        """At most one enrollment per pair."""
        first, _ = store.ensure_pending_enrollment(account.id, course.id)

        second, created = store.ensure_pending_enrollment(account.id, course.id)

        assert created is False
        assert second.id == first.id
        assert len(store.list_enrollments(account_id=account.id)) == 1

    def test_get_enrollment_not_found(self, store: RecordStore, account: Account, course: Course) -> None:
        """EnrollmentNotFoundError when the pair has none."""
        with pytest.raises(EnrollmentNotFoundError):
            store.get_enrollment(account.id, course.id)

    def test_list_enrollments_by_status(
        self, store: RecordStore, account: Account, course: Course
    ) -> None:
        """Status filter narrows the listing."""
        other = store.create_course(title="Rust", duration="5 days")
        store.ensure_pending_enrollment(account.id, course.id)
        store.ensure_pending_enrollment(account.id, other.id)

        pending = store.list_enrollments(status=EnrollmentStatus.PENDING)
        for_course = store.list_enrollments(course_id=other.id)

        assert len(pending) == 2
        assert [e.course_id for e in for_course] == [other.id]


@pytest.mark.unit
class TestCompareAndSetEnrollment:
    """Tests for compare_and_set_enrollment."""

    def test_writes_and_bumps_version(
        self, store: RecordStore, account: Account, course: Course
    ) -> None:
        """A current read may write."""
        enrollment, _ = store.ensure_pending_enrollment(account.id, course.id)

        updated = store.compare_and_set_enrollment(
            enrollment,
            status=EnrollmentStatus.STARTED,
            progress=20,
            completed_days=[1],
            days_completed_per_duration="1/5",
        )

        assert updated.version == 2
        assert updated.status == EnrollmentStatus.STARTED
        assert updated.progress == 20
        assert updated.completed_days == [1]
        assert updated.days_completed_per_duration == "1/5"

    def test_stale_read_raises(self, store: RecordStore, account: Account, course: Course) -> None:
        """A second writer holding the old version loses."""
        enrollment, _ = store.ensure_pending_enrollment(account.id, course.id)
        store.compare_and_set_enrollment(
            enrollment,
            status=EnrollmentStatus.STARTED,
            progress=20,
            completed_days=[1],
            days_completed_per_duration="1/5",
        )

        with pytest.raises(ConcurrentModificationError):
            store.compare_and_set_enrollment(
                enrollment,
                status=EnrollmentStatus.STARTED,
                progress=40,
                completed_days=[1, 2],
                days_completed_per_duration="2/5",
            )

        assert store.get_enrollment(account.id, course.id).progress == 20

    def test_deleted_enrollment_raises(
        self, store: RecordStore, account: Account, course: Course
    ) -> None:
        """EnrollmentNotFoundError when the row is gone."""
        enrollment, _ = store.ensure_pending_enrollment(account.id, course.id)
        store.delete_course(course.id)

        with pytest.raises(EnrollmentNotFoundError):
            store.compare_and_set_enrollment(
                enrollment,
                status=EnrollmentStatus.STARTED,
                progress=20,
                completed_days=[1],
                days_completed_per_duration="1/5",
            )
