"""
Schemas for the application.

This module exports the Pydantic models used for form validation, webhook
payload shaping and the records kept in each device's local lists.
"""

from portal.schemas.common import (
    RequestStatus,
    SubmissionResponse,
    ErrorResponse,
    ValidationErrorResponse,
    field_errors,
    generate_id,
)

from portal.schemas.design_request import (
    DesignRequestForm,
    DesignRequestSubmission,
    DesignRequest,
)

from portal.schemas.store_hours_change import (
    ChangeType,
    DayHours,
    HolidayEntry,
    StoreHoursChangeForm,
    StoreHoursChangeSubmission,
    StoreHoursChange,
)

from portal.schemas.price_change import (
    PriceChangeForm,
    PriceChangeSubmission,
    PriceChange,
)

from portal.schemas.lsm_request import (
    LsmRequestForm,
    LsmRequestSubmission,
    LsmRequest,
)

__all__ = [
    # Shared
    "RequestStatus",
    "SubmissionResponse",
    "ErrorResponse",
    "ValidationErrorResponse",
    "field_errors",
    "generate_id",

    # Design requests
    "DesignRequestForm",
    "DesignRequestSubmission",
    "DesignRequest",

    # Store hours changes
    "ChangeType",
    "DayHours",
    "HolidayEntry",
    "StoreHoursChangeForm",
    "StoreHoursChangeSubmission",
    "StoreHoursChange",

    # Price changes
    "PriceChangeForm",
    "PriceChangeSubmission",
    "PriceChange",

    # LSM requests
    "LsmRequestForm",
    "LsmRequestSubmission",
    "LsmRequest",
]
