"""
Pydantic schemas for Design Requests.
Form, submission (wire) and stored record models.
"""

from typing import Any, Dict
from pydantic import Field, field_validator, model_validator

from portal.core.config import settings
from portal.schemas.common import (
    CamelModel,
    RequestStatus,
    check_choice,
    check_email,
    check_optional_date,
    default_eta,
    generate_id,
    id_pattern,
    require_text,
    today_us,
)


ID_PREFIX = "REQ"

REQUEST_TYPES = [
    "Flyer",
    "Banner",
    "Social Media Post",
    "Menu Board",
    "Window Cling",
    "Other",
]


# ============================================================================
# Design Request Schemas
# ============================================================================

class DesignRequestForm(CamelModel):
    """Fields a store manager fills in on the design request form"""
    store_number: str = Field(default_factory=lambda: settings.STORE_NUMBER, description="Store number")
    store_name: str = Field(default_factory=lambda: settings.STORE_NAME, description="Store name")
    contact_name: str = Field("", validate_default=True, description="Contact name")
    email: str = Field("", validate_default=True, description="Contact email")
    phone: str = Field("", description="Contact phone")
    request_type: str = Field("", validate_default=True, description="Kind of design asset")
    description: str = Field("", validate_default=True, description="What is needed")
    needed_by_date: str = Field("", validate_default=True, description="Due date (YYYY-MM-DD)")
    file_name: str = Field("", description="Name of the reference file (name only)")

    @field_validator("contact_name")
    @classmethod
    def validate_contact_name(cls, v):
        return require_text(v, "Contact name")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return check_email(v)

    @field_validator("request_type")
    @classmethod
    def validate_request_type(cls, v):
        return check_choice(v, REQUEST_TYPES, "Request type")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return require_text(v, "Description")

    @field_validator("needed_by_date")
    @classmethod
    def validate_needed_by_date(cls, v):
        return check_optional_date(v)


class DesignRequestSubmission(DesignRequestForm):
    """Body posted to the design request endpoint"""
    id: str = Field(default_factory=lambda: generate_id(ID_PREFIX), pattern=id_pattern(ID_PREFIX))

    def to_webhook_payload(self) -> Dict[str, Any]:
        """Flat payload forwarded to the design request flow."""
        return {
            "id": self.id,
            "storeNumber": self.store_number,
            "storeName": self.store_name,
            "contactName": self.contact_name,
            "email": self.email,
            "phone": self.phone or "",
            "requestType": self.request_type,
            "description": self.description,
            "neededByDate": self.needed_by_date or "",
            "fileName": self.file_name or "",
        }


class DesignRequest(DesignRequestSubmission):
    """Design request as kept in the device's local list"""
    status: RequestStatus = RequestStatus.PENDING
    submitted_date: str = Field(default_factory=today_us)
    eta: str = ""

    @model_validator(mode="after")
    def fill_eta(self):
        if not self.eta:
            self.eta = default_eta(self.needed_by_date)
        return self
