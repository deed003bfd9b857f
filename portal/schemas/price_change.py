"""
Pydantic schemas for Price Changes.
"""

from typing import Any, Dict, List
from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from portal.schemas.common import (
    CamelModel,
    RequestStatus,
    check_choice,
    check_date,
    check_email,
    check_price,
    generate_id,
    id_pattern,
    join_names,
    require_text,
    split_names,
    today_us,
)


ID_PREFIX = "PC"

REQUEST_TYPES = ["InStore", "Online", "NCR", "Others"]

POP_OPTIONS = ["Yes", "No"]


class PriceChangeForm(CamelModel):
    """Fields of the price change form"""
    store_name: List[str] = Field(default_factory=list, validate_default=True, description="One or many store names")
    manager_name: str = Field("", validate_default=True)
    manager_email: str = Field("", validate_default=True)
    price_change_request: str = Field("", validate_default=True, description="Where the price applies")
    effective_date: str = Field("", validate_default=True, description="Date the new price takes effect")
    pop_needed: str = Field("", validate_default=True, description="Whether point-of-purchase signage is needed")
    description: str = Field("", validate_default=True)
    current_price: str = Field("", validate_default=True)
    updated_price: str = Field("", validate_default=True)

    @field_validator("store_name", mode="before")
    @classmethod
    def split_store_names(cls, v):
        return split_names(v)

    @field_validator("store_name")
    @classmethod
    def validate_store_name(cls, v):
        if not v:
            raise PydanticCustomError("required", "Store name is required")
        return v

    @field_validator("manager_name")
    @classmethod
    def validate_manager_name(cls, v):
        return require_text(v, "Manager name")

    @field_validator("manager_email")
    @classmethod
    def validate_manager_email(cls, v):
        return check_email(v)

    @field_validator("price_change_request")
    @classmethod
    def validate_price_change_request(cls, v):
        return check_choice(v, REQUEST_TYPES, "Request type")

    @field_validator("effective_date")
    @classmethod
    def validate_effective_date(cls, v):
        return check_date(v, "Effective date")

    @field_validator("pop_needed")
    @classmethod
    def validate_pop_needed(cls, v):
        return check_choice(v, POP_OPTIONS, "POP needed")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return require_text(v, "Description")

    @field_validator("current_price")
    @classmethod
    def validate_current_price(cls, v):
        return check_price(v, "Current price")

    @field_validator("updated_price")
    @classmethod
    def validate_updated_price(cls, v):
        return check_price(v, "Updated price")


class PriceChangeSubmission(PriceChangeForm):
    """Body posted to the price change endpoint"""
    id: str = Field(default_factory=lambda: generate_id(ID_PREFIX), pattern=id_pattern(ID_PREFIX))

    def to_webhook_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "storeName": join_names(self.store_name),
            "managerName": self.manager_name,
            "managerEmail": self.manager_email,
            "priceChangeRequest": self.price_change_request,
            "effectiveDate": self.effective_date,
            "popNeeded": self.pop_needed,
            "description": self.description,
            "currentPrice": self.current_price,
            "updatedPrice": self.updated_price,
        }


class PriceChange(PriceChangeSubmission):
    """Price change as kept in the device's local list"""
    status: RequestStatus = RequestStatus.PENDING
    submitted_date: str = Field(default_factory=today_us)
