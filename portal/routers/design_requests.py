"""
API Router for Design Requests.
Forwards submissions to the design request flow and exposes this device's list.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portal.core.database import get_db
from portal.core.device import get_device_id
from portal.core.webhook import WebhookClient, get_webhook_client
from portal.schemas.common import ErrorResponse, SubmissionResponse, ValidationErrorResponse
from portal.schemas.design_request import DesignRequest, DesignRequestSubmission
from portal.services.request_repository import DesignRequestRepository
from portal.services.submission import DESIGN_REQUESTS, forward_submission

router = APIRouter(prefix="/design-requests", tags=["Design Requests"])


@router.post(
    "",
    response_model=SubmissionResponse,
    responses={422: {"model": ValidationErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_design_request(
    submission: DesignRequestSubmission,
    webhook: WebhookClient = Depends(get_webhook_client),
):
    """
    Forward a design request to the configured flow.

    **Required fields:**
    - contactName, email, requestType, description

    Returns {"status": "success"} once the flow accepted the payload.
    """
    await forward_submission(DESIGN_REQUESTS, submission, webhook)
    return SubmissionResponse()


@router.get("", response_model=List[DesignRequest])
def get_design_requests(
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
):
    """Get this device's design requests in submission order."""
    return DesignRequestRepository.get_all(db, device_id)


@router.get("/{request_id}", response_model=DesignRequest)
def get_design_request_by_id(
    request_id: str,
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
):
    """Get a single design request by ID."""
    record = DesignRequestRepository.get_by_id(db, device_id, request_id)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Design request with ID {request_id} not found"
        )
    return record
