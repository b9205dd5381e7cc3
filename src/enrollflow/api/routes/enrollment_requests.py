"""Enrollment request submission and review endpoints."""

from fastapi import APIRouter, status

from enrollflow.api.dependencies import WorkflowDep
from enrollflow.api.models import (
    APIResponse,
    ApprovalResponse,
    EnrollmentRequestCreate,
    EnrollmentRequestResponse,
    IdsRequest,
    RejectionResponse,
    RejectRequest,
    request_to_response,
)
from enrollflow.record_store import RequestStatus

router = APIRouter(prefix="/enrollment-requests", tags=["enrollment-requests"])


@router.post(
    "",
    response_model=APIResponse[EnrollmentRequestResponse],
    status_code=status.HTTP_201_CREATED,
)
def submit_request(
    body: EnrollmentRequestCreate, workflow: WorkflowDep
) -> APIResponse[EnrollmentRequestResponse]:
    """Submit an enrollment request for admin review."""
    result = workflow.submit(
        account_id=body.account_id,
        course_ref=body.course,
        payment_ref=body.payment_ref,
        evidence_ref=body.evidence_ref,
        referrer_code=body.referrer_code,
        email=body.email,
        mobile_number=body.mobile_number,
        amount=body.amount,
        transaction_notes=body.transaction_notes,
    )
    return APIResponse(data=request_to_response(result.request))


@router.get("", response_model=APIResponse[list[EnrollmentRequestResponse]])
def list_requests(
    workflow: WorkflowDep, status: RequestStatus | None = None
) -> APIResponse[list[EnrollmentRequestResponse]]:
    """List enrollment requests, optionally filtered by status."""
    requests = workflow.list_requests(status=status)
    return APIResponse(data=[request_to_response(r) for r in requests])


@router.post("/delete", response_model=APIResponse[list[EnrollmentRequestResponse]])
def delete_requests(
    body: IdsRequest, workflow: WorkflowDep
) -> APIResponse[list[EnrollmentRequestResponse]]:
    """Move requests to the archive. Returns the deleted requests for undo."""
    deleted = workflow.delete(body.ids)
    return APIResponse(data=[request_to_response(r) for r in deleted])


@router.get("/{request_id}", response_model=APIResponse[EnrollmentRequestResponse])
def get_request(request_id: str, workflow: WorkflowDep) -> APIResponse[EnrollmentRequestResponse]:
    """Get a request with its payment evidence URL."""
    request = workflow.get_request(request_id)
    return APIResponse(data=request_to_response(request, workflow.evidence_url(request)))


@router.post("/{request_id}/approve", response_model=APIResponse[ApprovalResponse])
def approve_request(request_id: str, workflow: WorkflowDep) -> APIResponse[ApprovalResponse]:
    """Approve a request. Approving twice is a successful no-op."""
    result = workflow.approve(request_id)
    return APIResponse(
        data=ApprovalResponse(
            request=request_to_response(result.request),
            already_approved=result.already_approved,
            enrollment_activated=result.enrollment_activated,
            referral_credited=result.referral_credited,
        )
    )


@router.post("/{request_id}/reject", response_model=APIResponse[RejectionResponse])
def reject_request(
    request_id: str, workflow: WorkflowDep, body: RejectRequest | None = None
) -> APIResponse[RejectionResponse]:
    """Reject a pending request."""
    result = workflow.reject(request_id, body.reason if body else None)
    return APIResponse(
        data=RejectionResponse(
            request=request_to_response(result.request),
            already_rejected=result.already_rejected,
        )
    )
