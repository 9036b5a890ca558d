import json

from fastapi.testclient import TestClient

import metrics
from config import Settings
from conftest import RecordingUpstream, list_reply, recording_sender, text_message
from main import create_app


def sent_bodies(upstream):
    return [json.loads(request.content) for request in upstream.requests]


# --- GET /webhook ---

def test_verify_echoes_challenge(client):
    response = client.get(
        "/webhook",
        params={"hub.mode": "subscribe", "hub.verify_token": "verify-secret", "hub.challenge": "1158201444"},
    )

    assert response.status_code == 200
    assert response.text == "1158201444"
    assert metrics.get("webhook_requests_total", {"result": "verified"}) == 1


def test_verify_rejects_wrong_token(client):
    response = client.get(
        "/webhook",
        params={"hub.mode": "subscribe", "hub.verify_token": "nope", "hub.challenge": "1158201444"},
    )

    assert response.status_code == 403


def test_verify_rejects_missing_params(client):
    assert client.get("/webhook").status_code == 403


# --- POST /webhook ---

def test_event_without_messages_sends_nothing(client, upstream, make_event):
    response = client.post("/webhook", json=make_event())

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert upstream.requests == []
    assert metrics.get("webhook_requests_total", {"result": "ignored"}) == 1


def test_greeting_replies_with_menu(client, upstream, make_event):
    response = client.post("/webhook", json=make_event(text_message("hello")))

    assert response.status_code == 200
    [body] = sent_bodies(upstream)
    assert body["to"] == "14155552671"
    assert body["interactive"]["type"] == "list"


def test_thanks_replies_in_order(client, upstream, make_event):
    client.post("/webhook", json=make_event(text_message("Thanks a lot")))

    bodies = sent_bodies(upstream)
    assert len(bodies) == 2
    assert "Thank you" in bodies[0]["text"]["body"]
    assert "Contact Us" in bodies[1]["text"]["body"]


def test_service_selection_replies_with_buttons(client, upstream, make_event):
    client.post("/webhook", json=make_event(list_reply("web_dev")))

    [body] = sent_bodies(upstream)
    buttons = body["interactive"]["action"]["buttons"]
    assert [b["reply"]["id"] for b in buttons] == ["web_learn_more", "contact_us", "back_to_menu"]


def test_redelivered_event_is_sent_twice(client, upstream, make_event):
    envelope = make_event(text_message("hello"))

    client.post("/webhook", json=envelope)
    client.post("/webhook", json=envelope)

    first, second = sent_bodies(upstream)
    assert first == second


def test_invalid_json_is_acknowledged(client, upstream):
    response = client.post("/webhook", content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 200
    assert upstream.requests == []
    assert metrics.get("webhook_requests_total", {"result": "invalid_payload"}) == 1


def test_invalid_envelope_is_acknowledged(client, upstream):
    envelope = {"entry": [{"changes": [{"value": {"messages": [{"type": "text"}]}}]}]}

    response = client.post("/webhook", json=envelope)

    assert response.status_code == 200
    assert upstream.requests == []


def test_invalid_phone_number_id_is_acknowledged(client, upstream, make_event):
    envelope = make_event(text_message("hello"), phone_number_id="1065\n40")

    response = client.post("/webhook", json=envelope)

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert upstream.requests == []
    assert metrics.get("outbound_messages_total", {"kind": "list", "result": "failed"}) == 1


def test_failed_delivery_still_acknowledged(settings, make_event):
    upstream = RecordingUpstream(status_code=500)

    with TestClient(create_app(settings, recording_sender(settings, upstream))) as client:
        response = client.post("/webhook", json=make_event(text_message("hello")))

    assert response.status_code == 200
    assert len(upstream.requests) == 1
    assert metrics.get("outbound_messages_total", {"kind": "list", "result": "failed"}) == 1


# --- Health & metrics ---

def test_root_health(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "up and running" in response.text


def test_ready_when_configured(client):
    assert client.get("/health/ready").json() == {"status": "ready"}


def test_not_ready_without_token(upstream):
    settings = Settings(verify_token="verify-secret")

    with TestClient(create_app(settings, recording_sender(settings, upstream))) as client:
        response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["token"] == "missing"


def test_live(client):
    assert client.get("/health/live").json() == {"status": "alive"}


def test_metrics_exposes_counters(client):
    client.get("/health/live")

    response = client.get("/metrics")

    assert 'http_requests_total{path="/health/live",status="200"} 1' in response.text


def test_unknown_paths_share_one_series(client):
    for i in range(5):
        client.get(f"/nope-{i}")
    client.get('/a"b')

    assert metrics.get("http_requests_total", {"path": "unmatched", "status": "404"}) == 6
    assert "nope" not in metrics.generate_text()


def test_webhook_series_uses_route_template(client, make_event):
    client.post("/webhook", json=make_event())

    assert metrics.get("http_requests_total", {"path": "/webhook", "status": "200"}) == 1
