"""
Submission service.

All four request kinds go through the same steps:
validate -> forward to the kind's flow URL -> append to the device's list.
The list is only touched after the webhook confirmed the forward.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type
from pydantic import ValidationError
from sqlalchemy.orm import Session

from portal.core.config import settings
from portal.core.webhook import FORWARD_FAILED_MESSAGE, WebhookClient
from portal.schemas.common import CamelModel, field_errors
from portal.schemas.design_request import DesignRequest, DesignRequestSubmission
from portal.schemas.lsm_request import LsmRequest, LsmRequestSubmission
from portal.schemas.price_change import PriceChange, PriceChangeSubmission
from portal.schemas.store_hours_change import StoreHoursChange, StoreHoursChangeSubmission
from portal.services.request_repository import (
    DesignRequestRepository,
    LsmRequestRepository,
    PriceChangeRepository,
    RequestRepository,
    StoreHoursChangeRepository,
)

logger = logging.getLogger(__name__)


class SubmissionValidationError(Exception):
    """Form data failed validation; errors maps wire field name to message"""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Submission failed validation")
        self.errors = errors


@dataclass(frozen=True)
class RequestKind:
    """Everything that differs between the four request kinds"""
    slug: str
    title: str
    submission_model: Type[CamelModel]
    record_model: Type[CamelModel]
    repository: Type[RequestRepository]
    flow_url_setting: str
    failure_message: str = FORWARD_FAILED_MESSAGE

    def flow_url(self) -> Optional[str]:
        return getattr(settings, self.flow_url_setting)


DESIGN_REQUESTS = RequestKind(
    slug="design-requests",
    title="Design Requests",
    submission_model=DesignRequestSubmission,
    record_model=DesignRequest,
    repository=DesignRequestRepository,
    flow_url_setting="POWER_AUTOMATE_DESIGN_REQUEST_URL",
)

LSM_REQUESTS = RequestKind(
    slug="lsm-requests",
    title="Custom Design Requests",
    submission_model=LsmRequestSubmission,
    record_model=LsmRequest,
    repository=LsmRequestRepository,
    flow_url_setting="POWER_AUTOMATE_LSM_REQUEST_URL",
    failure_message="Failed to submit to Power Automate",
)

PRICE_CHANGES = RequestKind(
    slug="price-changes",
    title="Price Changes",
    submission_model=PriceChangeSubmission,
    record_model=PriceChange,
    repository=PriceChangeRepository,
    flow_url_setting="POWER_AUTOMATE_PRICE_CHANGE_URL",
)

STORE_HOURS_CHANGES = RequestKind(
    slug="store-hours-changes",
    title="Store Hours Changes",
    submission_model=StoreHoursChangeSubmission,
    record_model=StoreHoursChange,
    repository=StoreHoursChangeRepository,
    flow_url_setting="POWER_AUTOMATE_STORE_HOURS_URL",
)

REQUEST_KINDS = {
    kind.slug: kind
    for kind in (DESIGN_REQUESTS, LSM_REQUESTS, PRICE_CHANGES, STORE_HOURS_CHANGES)
}


def validate_submission(kind: RequestKind, data: Dict[str, Any]) -> CamelModel:
    """
    Validate raw form or JSON data for a request kind.

    Raises:
        SubmissionValidationError: With per-field messages
    """
    try:
        return kind.submission_model.model_validate(data)
    except ValidationError as e:
        raise SubmissionValidationError(field_errors(e, kind.submission_model)) from e


async def forward_submission(kind: RequestKind, submission: CamelModel, webhook: WebhookClient) -> None:
    """Forward a validated submission; raises WebhookError on failure"""
    await webhook.forward(kind.flow_url(), submission.to_webhook_payload(), kind.failure_message)


async def submit_request(
    kind: RequestKind,
    data: Dict[str, Any],
    db: Session,
    device_id: str,
    webhook: WebhookClient,
) -> CamelModel:
    """
    Full submission: validate, forward, then append to the device's list.

    Returns:
        The stored record (status Pending)

    Raises:
        SubmissionValidationError: If the data is invalid (nothing forwarded)
        WebhookError: If forwarding failed (nothing stored)
    """
    submission = validate_submission(kind, data)
    await forward_submission(kind, submission, webhook)

    record = kind.record_model.model_validate(submission.to_storage())
    kind.repository.save(db, device_id, record)
    logger.info(f"Stored {record.id} in {kind.slug} for device {device_id[:8]}")
    return record
