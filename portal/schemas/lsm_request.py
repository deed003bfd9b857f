"""
Pydantic schemas for LSM (Local Store Marketing) custom design requests.
"""

from typing import Any, Dict, List
from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from portal.schemas.common import (
    CamelModel,
    RequestStatus,
    check_choices,
    check_email,
    check_optional_date,
    generate_id,
    id_pattern,
    require_text,
    split_names,
    today_us,
)


ID_PREFIX = "LSM"

LSM_TYPES = [
    "Print Ad",
    "Web Ad",
    "Poster - 1 sided",
    "Poster - 2 sided",
    "Flyer - 8 1/2 x 11",
    "Direct Mail",
    "Billboard",
    "Banner - Outdoor",
    "Bounce Back Coupon",
    "Counter Card (easel back)",
    "Social Art/Email Art",
    "Other",
]

COLOR_OPTIONS = ["4-color", "Black & White", "Other"]

FILE_TYPE_OPTIONS = ["JPG", "PDF", "PNG", "Other"]

DATE_FIELDS = (
    "coupon_expiration_date",
    "desired_1st_round_date",
    "art_due_date",
    "publication_start_date",
)


class LsmRequestForm(CamelModel):
    """Fields of the LSM request form"""
    store_location: List[str] = Field(default_factory=list, validate_default=True, description="One or many store locations")
    contact_name: str = Field("", validate_default=True)
    contact_email: str = Field("", validate_default=True)
    contact_phone: str = ""
    lsm_types: List[str] = Field(default_factory=list, validate_default=True, description="Requested LSM pieces")
    desired_message: str = Field("", validate_default=True)
    coupon_offers: str = ""
    coupon_expiration_date: str = Field("", validate_default=True)
    special_instructions: str = ""
    size_width: str = ""
    size_height: str = ""
    color: List[str] = Field(default_factory=list, validate_default=True)
    file_type: List[str] = Field(default_factory=list, validate_default=True)
    quantity: str = ""
    file_special_instructions: str = ""
    desired_1st_round_date: str = Field("", alias="desired1stRoundDate", validate_default=True)
    art_due_date: str = Field("", validate_default=True)
    publication_start_date: str = Field("", validate_default=True)
    additional_instructions: str = ""

    @field_validator("store_location", mode="before")
    @classmethod
    def split_store_locations(cls, v):
        return split_names(v)

    @field_validator("store_location")
    @classmethod
    def validate_store_location(cls, v):
        if not v:
            raise PydanticCustomError("required", "Store location is required")
        return v

    @field_validator("contact_name")
    @classmethod
    def validate_contact_name(cls, v):
        return require_text(v, "Contact name")

    @field_validator("contact_email")
    @classmethod
    def validate_contact_email(cls, v):
        return check_email(v)

    @field_validator("lsm_types")
    @classmethod
    def validate_lsm_types(cls, v):
        if not v:
            raise PydanticCustomError("required", "Select at least one LSM type")
        return check_choices(v, LSM_TYPES, "LSM type")

    @field_validator("desired_message")
    @classmethod
    def validate_desired_message(cls, v):
        return require_text(v, "Message")

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return check_choices(v, COLOR_OPTIONS, "Color")

    @field_validator("file_type")
    @classmethod
    def validate_file_type(cls, v):
        return check_choices(v, FILE_TYPE_OPTIONS, "File type")

    @field_validator(*DATE_FIELDS)
    @classmethod
    def validate_dates(cls, v):
        return check_optional_date(v)


class LsmRequestSubmission(LsmRequestForm):
    """Body posted to the LSM request endpoint"""
    id: str = Field(default_factory=lambda: generate_id(ID_PREFIX), pattern=id_pattern(ID_PREFIX))
    request_date: str = Field(default_factory=today_us, description="Date the request was made (M/D/YYYY)")

    def to_webhook_payload(self) -> Dict[str, Any]:
        """Every form field plus id and request date; blanks sent as "" or []."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude={"status", "submitted_date"},
        )


class LsmRequest(LsmRequestSubmission):
    """LSM request as kept in the device's local list"""
    status: RequestStatus = RequestStatus.PENDING
    submitted_date: str = Field(default_factory=today_us)
