"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from enrollflow.enrollments import EnrollmentProgress
from enrollflow.ratings import RatingAggregator
from enrollflow.record_store import RecordStore
from enrollflow.workflow import EnrollmentWorkflow

# Global RecordStore instance (initialized on app startup)
_record_store: RecordStore | None = None


def init_record_store(db_path: str = "enrollflow.db") -> RecordStore:
    """Initialize the global RecordStore instance."""
    global _record_store  # noqa: PLW0603
    _record_store = RecordStore(db_path)
    return _record_store


def close_record_store() -> None:
    """Close the global RecordStore instance."""
    global _record_store  # noqa: PLW0603
    if _record_store is not None:
        _record_store.close()
        _record_store = None


def get_record_store() -> Generator[RecordStore, None, None]:
    """Dependency that provides the RecordStore instance."""
    if _record_store is None:
        raise RuntimeError("RecordStore not initialized. Call init_record_store() first.")
    yield _record_store


# Type alias for dependency injection
RecordStoreDep = Annotated[RecordStore, Depends(get_record_store)]

# Global EnrollmentWorkflow instance (initialized on app startup)
_workflow: EnrollmentWorkflow | None = None


def init_workflow(workflow: EnrollmentWorkflow) -> None:
    """Initialize the global EnrollmentWorkflow instance."""
    global _workflow  # noqa: PLW0603
    _workflow = workflow


def close_workflow() -> None:
    """Close the global EnrollmentWorkflow instance."""
    global _workflow  # noqa: PLW0603
    _workflow = None


def get_workflow() -> Generator[EnrollmentWorkflow, None, None]:
    """Dependency that provides the EnrollmentWorkflow instance."""
    if _workflow is None:
        raise RuntimeError("EnrollmentWorkflow not initialized. Call init_workflow() first.")
    yield _workflow


WorkflowDep = Annotated[EnrollmentWorkflow, Depends(get_workflow)]


def get_progress(store: RecordStoreDep) -> EnrollmentProgress:
    """Dependency that provides an EnrollmentProgress bound to the store."""
    return EnrollmentProgress(store)


ProgressDep = Annotated[EnrollmentProgress, Depends(get_progress)]


def get_rating_aggregator(store: RecordStoreDep) -> RatingAggregator:
    """Dependency that provides a RatingAggregator bound to the store."""
    return RatingAggregator(store)


RatingAggregatorDep = Annotated[RatingAggregator, Depends(get_rating_aggregator)]
