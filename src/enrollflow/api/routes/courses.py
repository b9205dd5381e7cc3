"""Course catalog and review endpoints."""

from fastapi import APIRouter, status

from enrollflow.api.dependencies import RatingAggregatorDep, RecordStoreDep
from enrollflow.api.models import (
    APIResponse,
    CourseCreate,
    CourseResponse,
    ReviewResponse,
    ReviewResultResponse,
    ReviewUpsert,
    course_to_response,
)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=APIResponse[list[CourseResponse]])
def list_courses(store: RecordStoreDep) -> APIResponse[list[CourseResponse]]:
    """List all courses."""
    courses = store.list_courses()
    return APIResponse(data=[course_to_response(c) for c in courses])


@router.post(
    "",
    response_model=APIResponse[CourseResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_course(course: CourseCreate, store: RecordStoreDep) -> APIResponse[CourseResponse]:
    """Create a new course."""
    created = store.create_course(title=course.title, duration=course.duration, slug=course.slug)
    return APIResponse(data=course_to_response(created))


@router.get("/{course_ref}", response_model=APIResponse[CourseResponse])
def get_course(course_ref: str, store: RecordStoreDep) -> APIResponse[CourseResponse]:
    """Get a course by ID or slug."""
    course = store.resolve_course(course_ref)
    return APIResponse(data=course_to_response(course))


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(course_id: str, store: RecordStoreDep) -> None:
    """Delete a course with its enrollments and reviews."""
    store.delete_course(course_id)


@router.put(
    "/{course_id}/reviews/{account_id}",
    response_model=APIResponse[ReviewResultResponse],
)
def upsert_review(
    course_id: str,
    account_id: str,
    review: ReviewUpsert,
    aggregator: RatingAggregatorDep,
) -> APIResponse[ReviewResultResponse]:
    """Create or overwrite the account's review of a course."""
    saved, course = aggregator.submit_review(account_id, course_id, review.rating, review.comment)
    return APIResponse(
        data=ReviewResultResponse(
            review=ReviewResponse.model_validate(saved),
            course=course_to_response(course),
        )
    )


@router.delete(
    "/{course_id}/reviews/{account_id}",
    response_model=APIResponse[ReviewResultResponse],
)
def delete_review(
    course_id: str, account_id: str, aggregator: RatingAggregatorDep
) -> APIResponse[ReviewResultResponse]:
    """Delete the account's review of a course."""
    course = aggregator.delete_review(account_id, course_id)
    return APIResponse(data=ReviewResultResponse(review=None, course=course_to_response(course)))
