"""REST API for enrollflow."""

from enrollflow.api.app import app, create_app
from enrollflow.api.models import (
    APIResponse,
    EnrollmentRequestCreate,
    EnrollmentRequestResponse,
)

__all__ = [
    "APIResponse",
    "EnrollmentRequestCreate",
    "EnrollmentRequestResponse",
    "app",
    "create_app",
]
