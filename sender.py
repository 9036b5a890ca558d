"""
Outbound calls against the WhatsApp Cloud API.

Every message kind goes through one authenticated POST to
<base>/<version>/<phone_number_id>/messages. Delivery failures are logged
and swallowed: the inbound webhook is acknowledged no matter what.
"""

import httpx

import logging_utils
import metrics
from schema import OutboundRequest


class DeliveryError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class WhatsAppSender:
    def __init__(self, settings, client: httpx.AsyncClient | None = None):
        self.settings = settings
        # Default httpx timeouts; no retries
        self.client = client or httpx.AsyncClient()

    def messages_url(self, phone_number_id):
        return f"{self.settings.graph_api_base}/{self.settings.graph_api_version}/{phone_number_id}/messages"

    async def send(self, request: OutboundRequest) -> bool:
        """Returns True if the upstream API accepted the message."""
        try:
            await self._post(request)
        except DeliveryError as exc:
            metrics.inc("outbound_messages_total", {"kind": request.kind.value, "result": "failed"})
            logging_utils.log_event(
                "outbound_failed",
                level="ERROR",
                kind=request.kind.value,
                recipient=request.recipient,
                status_code=exc.status_code,
                error=str(exc),
            )
            return False

        metrics.inc("outbound_messages_total", {"kind": request.kind.value, "result": "sent"})
        logging_utils.log_event("outbound_sent", kind=request.kind.value, recipient=request.recipient)
        return True

    async def _post(self, request):
        if not self.settings.access_token:
            raise DeliveryError("access token is not configured")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.access_token}",
        }
        # phone_number_id comes from the inbound payload, so the URL itself can be invalid
        try:
            response = await self.client.post(
                self.messages_url(request.phone_number_id),
                json=request.to_body(),
                headers=headers,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise DeliveryError(f"request failed: {exc!r}") from exc

        if response.is_error:
            raise DeliveryError(response.text, status_code=response.status_code)

    async def aclose(self):
        await self.client.aclose()
