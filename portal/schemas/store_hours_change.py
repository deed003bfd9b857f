"""
Pydantic schemas for Store Hours Changes.

A change request is one of three variants selected by change_type:
a full weekly hours table, a temporary closure, or a list of holiday
overrides. Only the fields of the selected variant are validated and kept.
"""

import json
from enum import Enum
from typing import Any, Dict, List
from pydantic import Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from portal.schemas.common import (
    CamelModel,
    RequestStatus,
    check_date,
    check_email,
    check_optional_date,
    generate_id,
    id_pattern,
    is_blank,
    is_valid_time,
    join_names,
    require_text,
    split_names,
    today_us,
)


ID_PREFIX = "SHC"

DAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

# Day prefixes used for the flattened <Day>_Start / <Day>_End payload keys
DAY_KEYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


class ChangeType(str, Enum):
    NEW_HOURS = "new_hours"
    TEMPORARY_CLOSE = "temporary_close"
    HOLIDAY_HOURS = "holiday_hours"


CHANGE_TYPE_LABELS = {
    ChangeType.NEW_HOURS: "New Store Hours",
    ChangeType.TEMPORARY_CLOSE: "Temporary Close",
    ChangeType.HOLIDAY_HOURS: "Holiday Hours",
}


def normalize_day(value: str) -> str:
    """Map "mon", "Mon" or "Monday" to "Monday"; unknown values pass through."""
    text = (value or "").strip().lower()
    if len(text) >= 3:
        for day in DAYS:
            if day.lower().startswith(text):
                return day
    return value


def day_key(day: str) -> str:
    """Payload prefix for a day name, e.g. "Wednesday" -> "Wed"."""
    for key in DAY_KEYS:
        if day.lower().startswith(key.lower()):
            return key
    raise ValueError(f"Unknown day: {day}")


# ============================================================================
# Row Schemas
# ============================================================================

class DayHours(CamelModel):
    """Opening hours for one day of the week"""
    day: str
    start_time: str = ""
    end_time: str = ""


class HolidayEntry(CamelModel):
    """A holiday override: date, holiday name and optional hours"""
    date: str = ""
    name: str = ""
    start_time: str = ""
    end_time: str = ""

    def is_blank(self) -> bool:
        return all(is_blank(v) for v in (self.date, self.name, self.start_time, self.end_time))


# ============================================================================
# Store Hours Change Schemas
# ============================================================================

class StoreHoursChangeForm(CamelModel):
    """Fields of the store hours change form"""
    store_name: List[str] = Field(default_factory=list, validate_default=True, description="One or many store names")
    manager_name: str = Field("", validate_default=True)
    manager_email: str = Field("", validate_default=True)
    change_type: ChangeType = Field(ChangeType.NEW_HOURS, description="Which variant of change this is")
    hours: List[DayHours] = Field(default_factory=list, validate_default=True)
    change_date: str = Field("", validate_default=True)
    change_note: str = Field("", validate_default=True)
    holidays: List[HolidayEntry] = Field(default_factory=list, validate_default=True)

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

    @field_validator("hours")
    @classmethod
    def validate_hours(cls, v: List[DayHours], info: ValidationInfo):
        if info.data.get("change_type") != ChangeType.NEW_HOURS:
            return []

        by_day = {}
        for row in v:
            by_day.setdefault(normalize_day(row.day), row)

        rows = []
        for day in DAYS:
            row = by_day.get(day)
            if row is None or is_blank(row.start_time) or is_blank(row.end_time):
                raise PydanticCustomError(
                    "required", "Start and end times are required for {day}", {"day": day}
                )
            if not is_valid_time(row.start_time) or not is_valid_time(row.end_time):
                raise PydanticCustomError("time", "Invalid time for {day}", {"day": day})
            # HH:MM strings compare in clock order
            if row.end_time <= row.start_time:
                raise PydanticCustomError(
                    "time_order", "End time must be after start time for {day}", {"day": day}
                )
            rows.append(DayHours(day=day, start_time=row.start_time, end_time=row.end_time))
        return rows

    @field_validator("change_date")
    @classmethod
    def validate_change_date(cls, v, info: ValidationInfo):
        if info.data.get("change_type") != ChangeType.TEMPORARY_CLOSE:
            return ""
        return check_date(v, "Close date")

    @field_validator("change_note")
    @classmethod
    def validate_change_note(cls, v, info: ValidationInfo):
        if info.data.get("change_type") != ChangeType.TEMPORARY_CLOSE:
            return ""
        return require_text(v, "Reason").strip()

    @field_validator("holidays")
    @classmethod
    def validate_holidays(cls, v: List[HolidayEntry], info: ValidationInfo):
        if info.data.get("change_type") != ChangeType.HOLIDAY_HOURS:
            return []

        populated = [h for h in v if not h.is_blank()]
        if not populated:
            raise PydanticCustomError("required", "At least one holiday date and name is required")

        for holiday in populated:
            if is_blank(holiday.date) or is_blank(holiday.name):
                raise PydanticCustomError("required", "Each holiday needs both a date and a name")
            holiday.date = check_optional_date(holiday.date)
            holiday.name = holiday.name.strip()
            for value in (holiday.start_time, holiday.end_time):
                if value and not is_valid_time(value):
                    raise PydanticCustomError(
                        "time", "Invalid time for {name}", {"name": holiday.name}
                    )
        return populated


class StoreHoursChangeSubmission(StoreHoursChangeForm):
    """Body posted to the store hours change endpoint"""
    id: str = Field(default_factory=lambda: generate_id(ID_PREFIX), pattern=id_pattern(ID_PREFIX))

    def to_webhook_payload(self) -> Dict[str, Any]:
        """
        Flat payload forwarded to the store hours flow.

        Weekly hours become <Day>_Start / <Day>_End keys; holidays are sent
        as a single JSON-encoded string.
        """
        payload: Dict[str, Any] = {
            "id": self.id,
            "storeName": join_names(self.store_name),
            "managerName": self.manager_name,
            "managerEmail": self.manager_email,
            "changeType": self.change_type.value,
        }

        if self.change_type == ChangeType.NEW_HOURS:
            for row in self.hours:
                prefix = day_key(row.day)
                payload[f"{prefix}_Start"] = row.start_time
                payload[f"{prefix}_End"] = row.end_time

        if self.change_type == ChangeType.TEMPORARY_CLOSE:
            payload["changeDate"] = self.change_date
            payload["changeNote"] = self.change_note

        if self.change_type == ChangeType.HOLIDAY_HOURS:
            payload["holidays"] = json.dumps(
                [h.to_storage() for h in self.holidays], separators=(",", ":")
            )

        return payload


class StoreHoursChange(StoreHoursChangeSubmission):
    """Store hours change as kept in the device's local list"""
    status: RequestStatus = RequestStatus.PENDING
    submitted_date: str = Field(default_factory=today_us)

    @property
    def change_type_label(self) -> str:
        return CHANGE_TYPE_LABELS[self.change_type]
