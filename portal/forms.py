"""
Form definitions for the portal pages.

Each request kind declares its form fields, table columns and detail rows
here; the page router and templates render them generically. Store hours
uses its own template for the weekly table and holiday rows, but its
fields are parsed here as well.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Tuple

from portal.schemas import design_request, lsm_request, price_change
from portal.schemas.common import RequestStatus, format_us_date
from portal.schemas.store_hours_change import DAYS, ChangeType, CHANGE_TYPE_LABELS

HOLIDAY_ROWS = 5


@dataclass(frozen=True)
class FormField:
    """One input on a form; name is the wire (camelCase) field name"""
    name: str
    label: str
    kind: str = "text"  # text, email, tel, textarea, select, date, checkboxes, stores, file
    required: bool = False
    options: Tuple[str, ...] = ()
    placeholder: str = ""
    help_text: str = ""

    @property
    def multiple(self) -> bool:
        return self.kind == "checkboxes"


@dataclass(frozen=True)
class FormSection:
    title: str
    fields: Tuple[FormField, ...] = field(default_factory=tuple)


STORES_HELP = "Separate multiple stores with commas"


DESIGN_REQUEST_FORM = (
    FormSection("Store", (
        FormField("storeNumber", "Store Number"),
        FormField("storeName", "Store Name"),
    )),
    FormSection("Contact", (
        FormField("contactName", "Contact Name", required=True, placeholder="Full name"),
        FormField("email", "Email", kind="email", required=True, placeholder="manager@example.com"),
        FormField("phone", "Phone", kind="tel", placeholder="(555) 555-5555"),
    )),
    FormSection("Request", (
        FormField("requestType", "Request Type", kind="select", required=True,
                  options=tuple(design_request.REQUEST_TYPES)),
        FormField("description", "Description", kind="textarea", required=True,
                  placeholder="Describe what you need..."),
        FormField("neededByDate", "Needed By", kind="date"),
        FormField("fileName", "Attachment", kind="file",
                  help_text="Only the file name is recorded"),
    )),
)

PRICE_CHANGE_FORM = (
    FormSection("Store & Manager", (
        FormField("storeName", "Store Name", kind="stores", required=True,
                  placeholder="e.g. Yogurtland - Downtown LA", help_text=STORES_HELP),
        FormField("managerName", "Manager Name", required=True, placeholder="Full name"),
        FormField("managerEmail", "Manager Email", kind="email", required=True,
                  placeholder="manager@example.com"),
    )),
    FormSection("Price Change", (
        FormField("priceChangeRequest", "Price Change Request", kind="select", required=True,
                  options=tuple(price_change.REQUEST_TYPES)),
        FormField("effectiveDate", "Effective Date", kind="date", required=True),
        FormField("popNeeded", "POP Needed", kind="select", required=True,
                  options=tuple(price_change.POP_OPTIONS),
                  help_text="Point-of-purchase signage"),
        FormField("description", "Description", kind="textarea", required=True,
                  placeholder="Which items are changing?"),
        FormField("currentPrice", "Current Price", required=True, placeholder="e.g. 0.69"),
        FormField("updatedPrice", "Updated Price", required=True, placeholder="e.g. 0.75"),
    )),
)

LSM_REQUEST_FORM = (
    FormSection("Contact Information", (
        FormField("storeLocation", "Store Location", kind="stores", required=True,
                  help_text=STORES_HELP),
        FormField("contactName", "Contact Name", required=True),
        FormField("contactEmail", "Contact Email", kind="email", required=True),
        FormField("contactPhone", "Contact Phone", kind="tel"),
    )),
    FormSection("LSM Details", (
        FormField("lsmTypes", "LSM Type", kind="checkboxes", required=True,
                  options=tuple(lsm_request.LSM_TYPES)),
        FormField("desiredMessage", "Desired Message", kind="textarea", required=True),
        FormField("couponOffers", "Coupon Offers", kind="textarea"),
        FormField("couponExpirationDate", "Coupon Expiration Date", kind="date"),
        FormField("specialInstructions", "Special Instructions", kind="textarea"),
    )),
    FormSection("File Specifications", (
        FormField("sizeWidth", "Width"),
        FormField("sizeHeight", "Height"),
        FormField("color", "Color", kind="checkboxes", options=tuple(lsm_request.COLOR_OPTIONS)),
        FormField("fileType", "File Type", kind="checkboxes",
                  options=tuple(lsm_request.FILE_TYPE_OPTIONS)),
        FormField("quantity", "Quantity"),
        FormField("fileSpecialInstructions", "File Special Instructions", kind="textarea"),
    )),
    FormSection("Timeline", (
        FormField("desired1stRoundDate", "Desired 1st Round Date", kind="date"),
        FormField("artDueDate", "Art Due Date", kind="date"),
        FormField("publicationStartDate", "Publication Start Date", kind="date"),
        FormField("additionalInstructions", "Additional Instructions", kind="textarea"),
    )),
)

STORE_HOURS_FIELDS = (
    FormField("storeName", "Store Name", kind="stores", required=True,
              placeholder="e.g. Yogurtland - Downtown LA", help_text=STORES_HELP),
    FormField("managerName", "Manager Name", required=True, placeholder="Full name"),
    FormField("managerEmail", "Manager Email", kind="email", required=True,
              placeholder="manager@example.com"),
)

FORMS = {
    "design-requests": ("New Design Request", DESIGN_REQUEST_FORM),
    "lsm-requests": ("LSM Request Form", LSM_REQUEST_FORM),
    "price-changes": ("New Price Change", PRICE_CHANGE_FORM),
    "store-hours-changes": ("New Store Hours Change", (FormSection("Store & Manager", STORE_HOURS_FIELDS),)),
}


# ============================================================================
# Parsing
# ============================================================================

def parse_form(slug: str, form: Any) -> Dict[str, Any]:
    """
    Turn posted form data into the camelCase dict the schemas validate.

    `form` is a Starlette FormData (anything with get/getlist works).
    """
    if slug == "store-hours-changes":
        return parse_store_hours_form(form)

    _, sections = FORMS[slug]
    data: Dict[str, Any] = {}
    for section in sections:
        for f in section.fields:
            if f.multiple:
                data[f.name] = form.getlist(f.name)
            else:
                data[f.name] = str(form.get(f.name) or "")
    return data


def parse_store_hours_form(form: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {f.name: str(form.get(f.name) or "") for f in STORE_HOURS_FIELDS}
    data["changeType"] = str(form.get("changeType") or ChangeType.NEW_HOURS.value)
    data["hours"] = [
        {
            "day": day,
            "startTime": str(form.get(f"hours-{day}-start") or ""),
            "endTime": str(form.get(f"hours-{day}-end") or ""),
        }
        for day in DAYS
    ]
    data["changeDate"] = str(form.get("changeDate") or "")
    data["changeNote"] = str(form.get("changeNote") or "")
    data["holidays"] = [
        {
            "date": str(form.get(f"holiday-{i}-date") or ""),
            "name": str(form.get(f"holiday-{i}-name") or ""),
            "startTime": str(form.get(f"holiday-{i}-start") or ""),
            "endTime": str(form.get(f"holiday-{i}-end") or ""),
        }
        for i in range(HOLIDAY_ROWS)
    ]
    return data


# ============================================================================
# Display
# ============================================================================

LIST_COLUMNS = {
    "design-requests": [
        ("Request ID", "id"),
        ("Type", "request_type"),
        ("Description", "description"),
        ("Submitted", "submitted_date"),
        ("ETA", "eta"),
        ("Status", "status"),
    ],
    "lsm-requests": [
        ("Request ID", "id"),
        ("Store Location", "store_location"),
        ("LSM Types", "lsm_types"),
        ("Submitted", "submitted_date"),
        ("Status", "status"),
    ],
    "price-changes": [
        ("Change ID", "id"),
        ("Store Name", "store_name"),
        ("Request", "price_change_request"),
        ("Current Price", "current_price"),
        ("Updated Price", "updated_price"),
        ("Submitted", "submitted_date"),
        ("Status", "status"),
    ],
    "store-hours-changes": [
        ("Change ID", "id"),
        ("Store Name", "store_name"),
        ("Change Type", "change_type"),
        ("Manager", "manager_name"),
        ("Submitted", "submitted_date"),
        ("Status", "status"),
    ],
}

DETAIL_ROWS = {
    "design-requests": [
        ("Store", "store_name"),
        ("Store Number", "store_number"),
        ("Contact", "contact_name"),
        ("Email", "email"),
        ("Phone", "phone"),
        ("Request Type", "request_type"),
        ("Description", "description"),
        ("Needed By", "needed_by_date"),
        ("Attachment", "file_name"),
        ("Submitted", "submitted_date"),
        ("ETA", "eta"),
    ],
    "lsm-requests": [
        ("Request Date", "request_date"),
        ("Store Location", "store_location"),
        ("Contact", "contact_name"),
        ("Email", "contact_email"),
        ("Phone", "contact_phone"),
        ("LSM Types", "lsm_types"),
        ("Desired Message", "desired_message"),
        ("Coupon Offers", "coupon_offers"),
        ("Coupon Expiration", "coupon_expiration_date"),
        ("Special Instructions", "special_instructions"),
        ("Size", "size"),
        ("Color", "color"),
        ("File Type", "file_type"),
        ("Quantity", "quantity"),
        ("File Instructions", "file_special_instructions"),
        ("Desired 1st Round", "desired_1st_round_date"),
        ("Art Due", "art_due_date"),
        ("Publication Start", "publication_start_date"),
        ("Additional Instructions", "additional_instructions"),
    ],
    "price-changes": [
        ("Store Name", "store_name"),
        ("Manager", "manager_name"),
        ("Email", "manager_email"),
        ("Request", "price_change_request"),
        ("Effective Date", "effective_date"),
        ("POP Needed", "pop_needed"),
        ("Description", "description"),
        ("Current Price", "current_price"),
        ("Updated Price", "updated_price"),
        ("Submitted", "submitted_date"),
    ],
    "store-hours-changes": [
        ("Store Name", "store_name"),
        ("Change Type", "change_type"),
        ("Manager", "manager_name"),
        ("Email", "manager_email"),
        ("Submitted", "submitted_date"),
        ("Close Date", "change_date"),
        ("Reason", "change_note"),
    ],
}

STATUS_CLASSES = {
    RequestStatus.PENDING: "status-pending",
    RequestStatus.IN_PROGRESS: "status-in-progress",
    RequestStatus.COMPLETED: "status-completed",
}


def display_value(record: Any, attr: str) -> str:
    """Render one record attribute as table/detail text."""
    if attr == "size":
        width, height = record.size_width, record.size_height
        return f"{width} x {height}" if width or height else ""

    value = getattr(record, attr, "")
    if isinstance(value, RequestStatus):
        return value.value
    if isinstance(value, ChangeType):
        return CHANGE_TYPE_LABELS[value]
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if (attr == "date" or attr.endswith("_date")) and value and "-" in value:
        return format_us_date(date.fromisoformat(value))
    return value or ""
