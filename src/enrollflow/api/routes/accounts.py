"""Account endpoints."""

from fastapi import APIRouter, status

from enrollflow.api.dependencies import RecordStoreDep
from enrollflow.api.models import (
    AccountCreate,
    AccountResponse,
    APIResponse,
    account_to_response,
)

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post(
    "",
    response_model=APIResponse[AccountResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_account(account: AccountCreate, store: RecordStoreDep) -> APIResponse[AccountResponse]:
    """Create a new account."""
    created = store.create_account(
        name=account.name,
        email=account.email,
        role=account.role,
        external_id=account.external_id,
    )
    return APIResponse(data=account_to_response(created))


@router.get("/{account_id}", response_model=APIResponse[AccountResponse])
def get_account(account_id: str, store: RecordStoreDep) -> APIResponse[AccountResponse]:
    """Get an account by ID."""
    account = store.get_account(account_id)
    return APIResponse(data=account_to_response(account))
