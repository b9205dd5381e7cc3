"""Archive endpoints for deleted enrollment requests."""

from fastapi import APIRouter

from enrollflow.api.dependencies import WorkflowDep
from enrollflow.api.models import (
    APIResponse,
    ArchivedRequestResponse,
    CountResponse,
    IdsRequest,
    RestoreResponse,
    archived_to_response,
    request_to_response,
)

router = APIRouter(prefix="/archive", tags=["archive"])


@router.get("", response_model=APIResponse[list[ArchivedRequestResponse]])
def list_archive(workflow: WorkflowDep) -> APIResponse[list[ArchivedRequestResponse]]:
    """List archived requests, most recently deleted first."""
    entries = workflow.list_archive()
    return APIResponse(data=[archived_to_response(e, workflow.evidence_url(e)) for e in entries])


@router.post("/restore", response_model=APIResponse[RestoreResponse])
def restore_requests(body: IdsRequest, workflow: WorkflowDep) -> APIResponse[RestoreResponse]:
    """Restore archived requests under their original IDs."""
    result = workflow.restore(body.ids)
    return APIResponse(
        data=RestoreResponse(
            count=result.count,
            restored=[request_to_response(r) for r in result.restored],
            conflicts=result.conflicts,
        )
    )


@router.post("/purge", response_model=APIResponse[CountResponse])
def purge_requests(body: IdsRequest, workflow: WorkflowDep) -> APIResponse[CountResponse]:
    """Permanently remove archived requests."""
    return APIResponse(data=CountResponse(count=workflow.purge(body.ids)))
