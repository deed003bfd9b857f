"""
Outbound webhook forwarding.

Each submission is forwarded exactly once to its operator-configured flow URL.
There is no retry; a failure is reported to the caller as a WebhookError.
"""

import logging
from typing import Any, Dict, Optional
import httpx
from fastapi import status

from portal.core.config import settings

logger = logging.getLogger(__name__)


NOT_CONFIGURED_MESSAGE = "Power Automate URL not configured"
FORWARD_FAILED_MESSAGE = "Failed to submit to SharePoint"
SUBMIT_FAILED_MESSAGE = "Failed to submit request"


class WebhookError(Exception):
    """Forwarding failed; carries the HTTP status and message for the client."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class WebhookNotConfiguredError(WebhookError):
    """The flow URL for this request kind is missing."""

    def __init__(self):
        super().__init__(NOT_CONFIGURED_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


class WebhookClient:
    """Thin httpx wrapper that POSTs JSON payloads to flow URLs."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport

    async def forward(
        self,
        flow_url: Optional[str],
        payload: Dict[str, Any],
        failure_message: str = FORWARD_FAILED_MESSAGE,
    ) -> None:
        """
        POST a payload to the flow URL.

        Args:
            flow_url: Target URL, None or empty when not configured
            payload: Flat JSON-serialisable payload
            failure_message: Message reported when the webhook answers non-2xx

        Raises:
            WebhookNotConfiguredError: If flow_url is missing
            WebhookError: On a bad URL, network failure or a non-2xx response
        """
        if not flow_url:
            logger.error(f"Webhook URL not configured; not forwarding {payload.get('id')}")
            raise WebhookNotConfiguredError()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(flow_url, json=payload)
        except Exception as e:
            logger.error(f"Webhook request failed for {payload.get('id')}: {str(e)}")
            raise WebhookError(SUBMIT_FAILED_MESSAGE) from e

        if not response.is_success:
            logger.warning(
                f"Webhook returned {response.status_code} for {payload.get('id')}"
            )
            # Error statuses are passed through; anything else non-2xx becomes a 500
            status_code = response.status_code if response.status_code >= 400 else status.HTTP_500_INTERNAL_SERVER_ERROR
            raise WebhookError(failure_message, status_code)

        logger.info(f"Forwarded {payload.get('id')} to webhook ({response.status_code})")


def get_webhook_client() -> WebhookClient:
    """Dependency returning a webhook client configured from settings."""
    return WebhookClient(timeout=settings.WEBHOOK_TIMEOUT)
