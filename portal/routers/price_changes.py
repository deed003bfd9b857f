"""
API Router for Price Changes.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from portal.core.database import get_db
from portal.core.device import get_device_id
from portal.core.webhook import WebhookClient, get_webhook_client
from portal.schemas.common import ErrorResponse, SubmissionResponse, ValidationErrorResponse
from portal.schemas.price_change import PriceChange, PriceChangeSubmission
from portal.services.request_repository import PriceChangeRepository
from portal.services.submission import PRICE_CHANGES, forward_submission

router = APIRouter(prefix="/price-changes", tags=["Price Changes"])


@router.post(
    "",
    response_model=SubmissionResponse,
    responses={422: {"model": ValidationErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_price_change(
    submission: PriceChangeSubmission,
    webhook: WebhookClient = Depends(get_webhook_client),
):
    """
    Forward a price change to the configured flow.

    storeName may be a list; it is sent joined with ", ".
    """
    await forward_submission(PRICE_CHANGES, submission, webhook)
    return SubmissionResponse()


@router.get("", response_model=List[PriceChange])
def get_price_changes(
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
):
    return PriceChangeRepository.get_all(db, device_id)


@router.get("/{change_id}", response_model=PriceChange)
def get_price_change_by_id(
    change_id: str,
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
):
    record = PriceChangeRepository.get_by_id(db, device_id, change_id)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Price change with ID {change_id} not found"
        )
    return record
