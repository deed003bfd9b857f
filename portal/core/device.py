"""
Device identification.

Local storage is scoped per browser. A browser is recognised by a long-lived
device cookie; the first request from a browser without one gets a fresh ID.
"""

import re
import uuid
from fastapi import Request

from portal.core.config import settings


DEVICE_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_device_id() -> str:
    """Generate a random device ID."""
    return uuid.uuid4().hex


def resolve_device_id(request: Request) -> tuple:
    """
    Return the device ID for a request and whether it was just issued.

    Cookies with an unexpected shape are replaced rather than trusted.
    """
    cookie = request.cookies.get(settings.DEVICE_COOKIE_NAME)
    if cookie and DEVICE_ID_PATTERN.match(cookie):
        return cookie, False
    return new_device_id(), True


async def assign_device_cookie(request: Request, call_next):
    """HTTP middleware attaching the device ID to request state and cookie."""
    device_id, issued = resolve_device_id(request)
    request.state.device_id = device_id

    response = await call_next(request)

    if issued:
        response.set_cookie(
            key=settings.DEVICE_COOKIE_NAME,
            value=device_id,
            max_age=settings.DEVICE_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
        )
    return response


def get_device_id(request: Request) -> str:
    """Dependency returning the current device ID."""
    device_id = getattr(request.state, "device_id", None)
    if device_id is None:
        device_id, _ = resolve_device_id(request)
    return device_id
