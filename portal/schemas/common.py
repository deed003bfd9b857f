"""
Shared schema pieces for all request kinds.

Every request form is validated by the same small set of rules (required
text, email shape, dates, choices, prices). The helpers here raise
PydanticCustomError so the message a store manager sees is exactly the
message written here, without pydantic's "Value error, " prefix.
"""

import math
import re
import time
from datetime import date, timedelta
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Type
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
PRICE_PATTERN = re.compile(r"^\$?(\d+(\.\d*)?|\.\d+)$")
ID_DIGITS = 6
DEFAULT_ETA_DAYS = 7


# ============================================================================
# Enums & Base Model
# ============================================================================

class RequestStatus(str, Enum):
    """Status of a submitted request. Always Pending when created here."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class CamelModel(BaseModel):
    """Base model using camelCase on the wire and snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_null_values(cls, data: Any) -> Any:
        # null is treated like an omitted field so defaults apply
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_storage(self) -> Dict[str, Any]:
        """Dump using wire names and JSON-compatible values."""
        return self.model_dump(mode="json", by_alias=True)


# ============================================================================
# ID & Date Helpers
# ============================================================================

def generate_id(prefix: str) -> str:
    """
    Generate a record ID: prefix, dash, last six digits of the current
    millisecond timestamp (e.g. "REQ-482913").
    """
    millis = str(int(time.time() * 1000))
    return f"{prefix}-{millis[-ID_DIGITS:]}"


def id_pattern(prefix: str) -> str:
    """Regex a generated ID for this prefix must match."""
    return rf"^{re.escape(prefix)}-\d{{{ID_DIGITS}}}$"


def format_us_date(value: date) -> str:
    """Format a date as M/D/YYYY."""
    return f"{value.month}/{value.day}/{value.year}"


def today_us() -> str:
    return format_us_date(date.today())


def default_eta(needed_by: Optional[str], today: Optional[date] = None) -> str:
    """
    ETA shown for a design request: the needed-by date when one was given,
    otherwise one week from today.
    """
    if needed_by:
        return format_us_date(date.fromisoformat(needed_by))
    today = today or date.today()
    return format_us_date(today + timedelta(days=DEFAULT_ETA_DAYS))


# ============================================================================
# Field Rules
# ============================================================================

def is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def require_text(value: str, label: str) -> str:
    """Reject blank or whitespace-only text."""
    if is_blank(value):
        raise PydanticCustomError("required", "{label} is required", {"label": label})
    return value


def check_email(value: str, label: str = "Email") -> str:
    """Required email with a local part, an "@" and a dotted domain."""
    require_text(value, label)
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("email", "Invalid email address")
    return value


def check_optional_date(value: str) -> str:
    """Blank, or an ISO YYYY-MM-DD date."""
    if is_blank(value):
        return ""
    value = value.strip()
    if not DATE_PATTERN.match(value):
        raise PydanticCustomError("date", "Invalid date")
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise PydanticCustomError("date", "Invalid date")


def check_date(value: str, label: str) -> str:
    require_text(value, label)
    return check_optional_date(value)


def is_valid_time(value: str) -> bool:
    return bool(value) and bool(TIME_PATTERN.match(value))


def check_choice(value: str, options: Iterable[str], label: str) -> str:
    """Required single choice from a fixed option list."""
    require_text(value, label)
    options = list(options)
    if value not in options:
        raise PydanticCustomError(
            "choice",
            "{label} must be one of: {options}",
            {"label": label, "options": ", ".join(options)},
        )
    return value


def check_choices(values: List[str], options: Iterable[str], label: str) -> List[str]:
    """Zero or more choices from a fixed option list, duplicates dropped."""
    options = list(options)
    selected = []
    for value in values:
        if value not in options:
            raise PydanticCustomError(
                "choice",
                "{label} must be one of: {options}",
                {"label": label, "options": ", ".join(options)},
            )
        if value not in selected:
            selected.append(value)
    return selected


def check_price(value: str, label: str) -> str:
    """Required plain decimal price (optional leading "$") greater than zero."""
    require_text(value, label)
    value = value.strip()
    amount = float(value.lstrip("$")) if PRICE_PATTERN.match(value) else 0
    if not (math.isfinite(amount) and amount > 0):
        raise PydanticCustomError("price", "Price must be a positive number")
    return value


def split_names(value: Any) -> List[str]:
    """
    Normalise one-or-many store names into a list.

    Accepts a list of names or a single comma-separated string.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(name).strip() for name in value if not is_blank(name)]


def join_names(names: List[str]) -> str:
    return ", ".join(names)


# ============================================================================
# Error Mapping
# ============================================================================

def field_errors(exc: ValidationError, model: Type[BaseModel]) -> Dict[str, str]:
    """
    Flatten a ValidationError into {wire field name: first message}.

    Errors raised outside any single field are reported under "form".
    """
    aliases = {name: (field.alias or name) for name, field in model.model_fields.items()}
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        key = str(loc[0]) if loc else "form"
        key = aliases.get(key, key)
        errors.setdefault(key, error["msg"])
    return errors


# ============================================================================
# Response Schemas
# ============================================================================

class SubmissionResponse(BaseModel):
    """Returned when a payload was accepted by the webhook"""
    status: str = "success"


class ErrorResponse(BaseModel):
    """Returned when forwarding failed"""
    error: str


class ValidationErrorResponse(BaseModel):
    """Returned when a submission body fails validation"""
    detail: str = "Validation Error"
    errors: Dict[str, str] = Field(default_factory=dict)
