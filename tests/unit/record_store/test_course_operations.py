"""Unit tests for RecordStore course and review operations."""

import pytest

from enrollflow.record_store import (
    AccountNotFoundError,
    CourseExistsError,
    CourseNotFoundError,
    RecordStore,
    ReviewNotFoundError,
)


@pytest.fixture
def store() -> RecordStore:
    """Create an in-memory RecordStore for testing."""
    return RecordStore(":memory:")


@pytest.mark.unit
class TestCreateCourse:
    """Tests for create_course."""

    def test_create_course_derives_slug(self, store: RecordStore) -> None:
        """Slug comes from the title when not given."""
        course = store.create_course(title="Python for Data Science", duration="30 days")

        assert course.slug == "python-for-data-science"
        assert course.students == 0
        assert course.average_rating == 0.0
        assert course.total_ratings == 0

    def test_create_course_explicit_slug(self, store: RecordStore) -> None:
        """Given slug is used as is."""
        course = store.create_course(title="Python", duration="10 days", slug="py-101")

        assert course.slug == "py-101"

    def test_duplicate_slug_raises(self, store: RecordStore) -> None:
        """CourseExistsError when the slug is taken."""
        store.create_course(title="Python", duration="10 days")

        with pytest.raises(CourseExistsError) as exc_info:
            store.create_course(title="Python!", duration="20 days")

        assert "python" in str(exc_info.value)


@pytest.mark.unit
class TestResolveCourse:
    """Tests for get_course and resolve_course."""

    def test_resolve_by_id(self, store: RecordStore) -> None:
        """Course IDs resolve directly."""
        course = store.create_course(title="Python", duration="10 days")

        assert store.resolve_course(course.id).id == course.id

    def test_resolve_by_slug(self, store: RecordStore) -> None:
        """Slugs resolve when no ID matches."""
        course = store.create_course(title="Python", duration="10 days")

        assert store.resolve_course("python").id == course.id

    def test_resolve_unknown_raises(self, store: RecordStore) -> None:
        """CourseNotFoundError when neither matches."""
        with pytest.raises(CourseNotFoundError):
            store.resolve_course("no-such-course")

    def test_get_course_does_not_use_slug(self, store: RecordStore) -> None:
        """get_course only accepts IDs."""
        store.create_course(title="Python", duration="10 days")

        with pytest.raises(CourseNotFoundError):
            store.get_course("python")


@pytest.mark.unit
class TestListAndDeleteCourses:
    """Tests for list_courses and delete_course."""

    def test_list_courses_ordered_by_title(self, store: RecordStore) -> None:
        """Courses come back alphabetically."""
        store.create_course(title="Zig", duration="5 days")
        store.create_course(title="Ada", duration="5 days")

        assert [c.title for c in store.list_courses()] == ["Ada", "Zig"]

    def test_delete_course_removes_enrollments_and_reviews(self, store: RecordStore) -> None:
        """Deleting a course takes its enrollments and reviews with it."""
        account = store.create_account(name="Asha", email="asha@example.com")
        course = store.create_course(title="Python", duration="10 days")
        store.ensure_pending_enrollment(account.id, course.id)
        store.upsert_review(account.id, course.id, 5)

        store.delete_course(course.id)

        assert store.find_enrollment(account.id, course.id) is None
        assert store.list_ratings(course.id) == []
        with pytest.raises(CourseNotFoundError):
            store.get_course(course.id)

    def test_delete_course_not_found(self, store: RecordStore) -> None:
        """CourseNotFoundError for an unknown ID."""
        with pytest.raises(CourseNotFoundError):
            store.delete_course("nonexistent-id")


@pytest.mark.unit
class TestReviews:
    """Tests for upsert_review, delete_review and list_ratings."""

    def test_second_review_overwrites_first(self, store: RecordStore) -> None:
        """One review per account and course."""
        account = store.create_account(name="Asha", email="asha@example.com")
        course = store.create_course(title="Python", duration="10 days")

        first = store.upsert_review(account.id, course.id, 2, "meh")
        second = store.upsert_review(account.id, course.id, 5, "  great now  ")

        assert second.id == first.id
        assert second.rating == 5
        assert second.comment == "great now"
        assert store.list_ratings(course.id) == [5]

    def test_review_requires_account(self, store: RecordStore) -> None:
        """AccountNotFoundError for an unknown reviewer."""
        course = store.create_course(title="Python", duration="10 days")

        with pytest.raises(AccountNotFoundError):
            store.upsert_review("nonexistent-id", course.id, 4)

    def test_review_requires_course(self, store: RecordStore) -> None:
        """CourseNotFoundError for an unknown course."""
        account = store.create_account(name="Asha", email="asha@example.com")

        with pytest.raises(CourseNotFoundError):
            store.upsert_review(account.id, "nonexistent-id", 4)

    def test_delete_review(self, store: RecordStore) -> None:
        """Deleted reviews stop counting."""
        account = store.create_account(name="Asha", email="asha@example.com")
        course = store.create_course(title="Python", duration="10 days")
        store.upsert_review(account.id, course.id, 3)

        store.delete_review(account.id, course.id)

        assert store.list_ratings(course.id) == []

    def test_delete_missing_review_raises(self, store: RecordStore) -> None:
        """ReviewNotFoundError when there is nothing to delete."""
        account = store.create_account(name="Asha", email="asha@example.com")
        course = store.create_course(title="Python", duration="10 days")

        with pytest.raises(ReviewNotFoundError):
            store.delete_review(account.id, course.id)


@pytest.mark.unit
class TestRecomputeCourseRating:
    """Tests for recompute_course_rating."""

    def test_writes_aggregate_of_current_reviews(self, store: RecordStore) -> None:
        """The aggregate sees every stored rating and its result is persisted."""
        course = store.create_course(title="Python", duration="10 days")
        for i, rating in enumerate([2, 4]):
            account = store.create_account(name=f"Learner {i}", email=f"l{i}@example.com")
            store.upsert_review(account.id, course.id, rating)
        seen: list[list[int]] = []

        def aggregate(ratings: list[int]) -> tuple[float, int]:
            seen.append(sorted(ratings))
            return 3.0, len(ratings)

        updated = store.recompute_course_rating(course.id, aggregate)

        assert seen == [[2, 4]]
        assert updated.average_rating == 3.0
        stored = store.get_course(course.id)
        assert stored.average_rating == 3.0
        assert stored.total_ratings == 2

    def test_unknown_course(self, store: RecordStore) -> None:
        """CourseNotFoundError for an unknown ID."""
        with pytest.raises(CourseNotFoundError):
            store.recompute_course_rating("nonexistent-id", lambda ratings: (0.0, 0))
