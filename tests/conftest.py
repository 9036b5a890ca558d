"""
Shared fixtures: settings, an app wired to a recording upstream and an
envelope factory shaped like real Cloud API deliveries.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

import metrics
from config import Settings
from main import create_app
from sender import WhatsAppSender

PHONE_NUMBER_ID = "106540352242922"
SENDER = "14155552671"


class RecordingUpstream:
    """httpx.MockTransport handler that records every outbound request."""

    def __init__(self, status_code=200):
        self.status_code = status_code
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code >= 400:
            return httpx.Response(self.status_code, json={"error": {"message": "Invalid parameter", "code": 100}})
        return httpx.Response(self.status_code, json={"messages": [{"id": "wamid.out"}]})


@pytest.fixture(autouse=True)
def clean_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def settings():
    return Settings(access_token="test-token", verify_token="verify-secret")


@pytest.fixture
def upstream():
    return RecordingUpstream()


def recording_sender(settings, upstream):
    return WhatsAppSender(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(upstream)))


@pytest.fixture
def client(settings, upstream):
    # Entering the TestClient runs the lifespan, which closes the sender's HTTP client on exit
    with TestClient(create_app(settings, recording_sender(settings, upstream))) as client:
        yield client


@pytest.fixture
def make_event():
    def _make_event(*messages, phone_number_id=PHONE_NUMBER_ID, name="Asha"):
        value = {
            "messaging_product": "whatsapp",
            "metadata": {"display_phone_number": "15550000000", "phone_number_id": phone_number_id},
            "contacts": [{"profile": {"name": name}, "wa_id": SENDER}],
        }
        if messages:
            value["messages"] = list(messages)
        return {
            "object": "whatsapp_business_account",
            "entry": [{"id": "WABA_ID", "changes": [{"field": "messages", "value": value}]}],
        }

    return _make_event


def text_message(body, sender=SENDER):
    return {"from": sender, "id": "wamid.in", "timestamp": "1706522400", "type": "text", "text": {"body": body}}


def list_reply(selected_id, sender=SENDER):
    return {
        "from": sender,
        "id": "wamid.in",
        "type": "interactive",
        "interactive": {"type": "list_reply", "list_reply": {"id": selected_id, "title": "row"}},
    }


def button_reply(selected_id, sender=SENDER):
    return {
        "from": sender,
        "id": "wamid.in",
        "type": "interactive",
        "interactive": {"type": "button_reply", "button_reply": {"id": selected_id, "title": "button"}},
    }
