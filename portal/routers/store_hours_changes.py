"""
API Router for Store Hours Changes.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portal.core.database import get_db
from portal.core.device import get_device_id
from portal.core.webhook import WebhookClient, get_webhook_client
from portal.schemas.common import ErrorResponse, SubmissionResponse, ValidationErrorResponse
from portal.schemas.store_hours_change import StoreHoursChange, StoreHoursChangeSubmission
from portal.services.request_repository import StoreHoursChangeRepository
from portal.services.submission import STORE_HOURS_CHANGES, forward_submission

router = APIRouter(prefix="/store-hours-changes", tags=["Store Hours Changes"])


@router.post(
    "",
    response_model=SubmissionResponse,
    responses={422: {"model": ValidationErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_store_hours_change(
    submission: StoreHoursChangeSubmission,
    webhook: WebhookClient = Depends(get_webhook_client),
):
    """
    Forward a store hours change to the configured flow.

    **changeType variants:**
    - new_hours: hours for all seven days, end after start
    - temporary_close: changeDate and changeNote
    - holiday_hours: at least one holiday with date and name

    Weekly hours are flattened to Mon_Start / Mon_End style keys and
    holidays are sent as a JSON string.
    """
    await forward_submission(STORE_HOURS_CHANGES, submission, webhook)
    return SubmissionResponse()


@router.get("", response_model=List[StoreHoursChange])
def get_store_hours_changes(
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
):
    """Get this device's store hours changes in submission order."""
    return StoreHoursChangeRepository.get_all(db, device_id)


@router.get("/{change_id}", response_model=StoreHoursChange)
def get_store_hours_change_by_id(
    change_id: str,
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
):
    """Get a single store hours change by ID."""
    record = StoreHoursChangeRepository.get_by_id(db, device_id, change_id)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Store hours change with ID {change_id} not found"
        )
    return record
