"""
API Router for LSM (custom design) requests.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portal.core.database import get_db
from portal.core.device import get_device_id
from portal.core.webhook import WebhookClient, get_webhook_client
from portal.schemas.common import ErrorResponse, SubmissionResponse, ValidationErrorResponse
from portal.schemas.lsm_request import LsmRequest, LsmRequestSubmission
from portal.services.request_repository import LsmRequestRepository
from portal.services.submission import LSM_REQUESTS, forward_submission

router = APIRouter(prefix="/lsm-requests", tags=["LSM Requests"])


@router.post(
    "",
    response_model=SubmissionResponse,
    responses={422: {"model": ValidationErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_lsm_request(
    submission: LsmRequestSubmission,
    webhook: WebhookClient = Depends(get_webhook_client),
):
    """
    Forward an LSM request to the configured flow.

    **Required fields:**
    - storeLocation, contactName, contactEmail, lsmTypes (at least one), desiredMessage
    """
    await forward_submission(LSM_REQUESTS, submission, webhook)
    return SubmissionResponse()


@router.get("", response_model=List[LsmRequest])
def get_lsm_requests(
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
):
    """Get this device's LSM requests in submission order."""
    return LsmRequestRepository.get_all(db, device_id)


@router.get("/{request_id}", response_model=LsmRequest)
def get_lsm_request_by_id(
    request_id: str,
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
):
    record = LsmRequestRepository.get_by_id(db, device_id, request_id)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"LSM request with ID {request_id} not found"
        )
    return record
