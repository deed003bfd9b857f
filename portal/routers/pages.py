"""
Portal pages.

Server-rendered list, details and form pages for each request kind.
A form POST validates, forwards to the webhook and, only on success,
appends to this device's list and redirects back to the list.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from portal.core.config import settings
from portal.core.database import get_db
from portal.core.device import get_device_id
from portal.core.webhook import WebhookClient, WebhookError, get_webhook_client
from portal.forms import (
    DETAIL_ROWS,
    FORMS,
    HOLIDAY_ROWS,
    LIST_COLUMNS,
    STATUS_CLASSES,
    STORE_HOURS_FIELDS,
    display_value,
    parse_form,
)
from portal.schemas.store_hours_change import DAYS, CHANGE_TYPE_LABELS, ChangeType
from portal.services.submission import (
    REQUEST_KINDS,
    RequestKind,
    SubmissionValidationError,
    submit_request,
)

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["settings"] = settings
templates.env.globals["kinds"] = REQUEST_KINDS
templates.env.globals["status_classes"] = STATUS_CLASSES
templates.env.filters["display"] = display_value

router = APIRouter(tags=["Portal"], include_in_schema=False)


def get_kind(slug: str) -> RequestKind:
    kind = REQUEST_KINDS.get(slug)
    if kind is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")
    return kind


def initial_values(kind: RequestKind) -> Dict[str, Any]:
    """Values a blank form starts with."""
    if kind.slug == "design-requests":
        return {"storeNumber": settings.STORE_NUMBER, "storeName": settings.STORE_NAME}
    if kind.slug == "store-hours-changes":
        return {"changeType": ChangeType.NEW_HOURS.value}
    return {}


def render_form(
    request: Request,
    kind: RequestKind,
    values: Dict[str, Any],
    errors: Optional[Dict[str, str]] = None,
    alert: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    title, sections = FORMS[kind.slug]
    context = {
        "request": request,
        "kind": kind,
        "title": title,
        "sections": sections,
        "values": values,
        "errors": errors or {},
        "alert": alert,
    }
    template = "form.html"
    if kind.slug == "store-hours-changes":
        template = "store_hours_form.html"
        context.update(
            fields=STORE_HOURS_FIELDS,
            days=DAYS,
            holiday_rows=HOLIDAY_ROWS,
            change_types=CHANGE_TYPE_LABELS,
            hours=_rows_by_key(values.get("hours"), "day"),
            holidays=values.get("holidays") or [],
        )
    return templates.TemplateResponse(request, template, context, status_code=status_code)


def _rows_by_key(rows: Any, key: str) -> Dict[str, Dict[str, Any]]:
    return {row.get(key): row for row in rows or [] if isinstance(row, dict)}


# ============================================================================
# Pages
# ============================================================================

@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
):
    """Portal home: one tab per request kind with this device's counts."""
    counts = {
        slug: len(kind.repository.get_all(db, device_id))
        for slug, kind in REQUEST_KINDS.items()
    }
    return templates.TemplateResponse(request, "index.html", {"request": request, "counts": counts})


@router.get("/evergreen-order", response_class=HTMLResponse)
def evergreen_order(request: Request):
    """Embedded external order form for evergreen marketing assets."""
    return templates.TemplateResponse(request, "evergreen.html", {"request": request})


@router.get("/{slug}", response_class=HTMLResponse)
def list_requests(
    slug: str,
    request: Request,
    submitted: Optional[str] = None,
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
):
    kind = get_kind(slug)
    records = kind.repository.get_all(db, device_id)
    return templates.TemplateResponse(
        request,
        "list.html",
        {
            "request": request,
            "kind": kind,
            "records": records,
            "columns": LIST_COLUMNS[slug],
            "submitted": submitted,
        },
    )


@router.get("/{slug}/new", response_class=HTMLResponse)
def new_request_form(slug: str, request: Request):
    kind = get_kind(slug)
    return render_form(request, kind, initial_values(kind))


@router.post("/{slug}/new", response_class=HTMLResponse)
async def submit_request_form(
    slug: str,
    request: Request,
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
    webhook: WebhookClient = Depends(get_webhook_client),
):
    """
    Handle a form post.

    Validation errors re-render the form with inline messages. A failed
    forward re-renders the populated form with a blocking alert and stores
    nothing. Success redirects to the list.
    """
    kind = get_kind(slug)
    form = await request.form()
    values = parse_form(slug, form)

    try:
        record = await submit_request(kind, values, db, device_id, webhook)
    except SubmissionValidationError as e:
        return render_form(
            request, kind, values, errors=e.errors,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
    except WebhookError as e:
        logger.warning(f"Submission to {slug} failed: {e.message}")
        return render_form(request, kind, values, alert=e.message, status_code=e.status_code)

    return RedirectResponse(
        url=f"/{slug}?submitted={record.id}",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("/{slug}/{record_id}", response_class=HTMLResponse)
def request_details(
    slug: str,
    record_id: str,
    request: Request,
    db: Session = Depends(get_db),
    device_id: str = Depends(get_device_id),
):
    kind = get_kind(slug)
    record = kind.repository.get_by_id(db, device_id, record_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{record_id} not found"
        )
    return templates.TemplateResponse(
        request,
        "detail.html",
        {
            "request": request,
            "kind": kind,
            "record": record,
            "rows": DETAIL_ROWS[slug],
        },
    )
