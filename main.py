import json
import time
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import PlainTextResponse

# Custom modules
import logging_utils
import metrics
from config import load_settings
from dispatcher import ChallengeRejected, Dispatcher, verify_challenge
from schema import WebhookEvent
from sender import WhatsAppSender

router = APIRouter()


async def log_middleware(request: Request, call_next):
    request_id = str(uuid.uuid4())
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time

    # Labelled by route template so unknown paths share one series
    route = request.scope.get("route")
    metrics.inc("http_requests_total", {
        "path": route.path if route else "unmatched",
        "status": str(response.status_code)
    })

    # /webhook writes its own, more detailed line
    if request.url.path != "/webhook":
        logging_utils.log_request(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            latency=process_time
        )

    return response


@router.get("/webhook")
def verify_webhook(
    request: Request,
    hub_mode: str | None = Query(None, alias="hub.mode"),
    hub_challenge: str | None = Query(None, alias="hub.challenge"),
    hub_verify_token: str | None = Query(None, alias="hub.verify_token"),
):
    start_time = time.time()
    request_id = str(uuid.uuid4())
    settings = request.app.state.settings

    try:
        challenge = verify_challenge(hub_mode, hub_verify_token, hub_challenge, settings.verify_token)
    except ChallengeRejected:
        metrics.inc("webhook_requests_total", {"result": "rejected"})
        logging_utils.log_request(
            request_id=request_id, method="GET", path="/webhook",
            status=403, latency=time.time() - start_time,
            result="rejected"
        )
        raise HTTPException(status_code=403, detail="Verification failed")

    metrics.inc("webhook_requests_total", {"result": "verified"})
    logging_utils.log_request(
        request_id=request_id, method="GET", path="/webhook",
        status=200, latency=time.time() - start_time,
        result="verified"
    )
    return PlainTextResponse(challenge)


@router.post("/webhook")
async def receive_event(request: Request):
    # Start timer for manual logging
    start_time = time.time()
    request_id = str(uuid.uuid4())

    # 1. Parsing Logic
    # A payload we cannot read is acknowledged anyway, otherwise the
    # platform keeps redelivering it.
    body_bytes = await request.body()
    try:
        event = WebhookEvent.model_validate(json.loads(body_bytes))
    except ValueError as exc:
        metrics.inc("webhook_requests_total", {"result": "invalid_payload"})
        logging_utils.log_request(
            request_id=request_id, method="POST", path="/webhook",
            status=200, latency=time.time() - start_time,
            result="invalid_payload", error=str(exc).splitlines()[0] if str(exc) else ""
        )
        return {"status": "ok"}

    # 2. Dispatch Logic
    outbound = request.app.state.dispatcher.handle_event(event)

    # 3. Delivery Logic (failures are logged by the sender, never raised)
    delivered = 0
    for outbound_request in outbound:
        if await request.app.state.sender.send(outbound_request):
            delivered += 1

    status_result = "processed" if outbound else "ignored"
    metrics.inc("webhook_requests_total", {"result": status_result})

    logging_utils.log_request(
        request_id=request_id,
        method="POST",
        path="/webhook",
        status=200,
        latency=time.time() - start_time,
        result=status_result,
        outbound=len(outbound),
        delivered=delivered
    )

    return {"status": "ok"}


@router.get("/")
def root():
    return PlainTextResponse("✅ Webhook is up and running!")


@router.get("/health/live")
def health_live():
    return {"status": "alive"}


@router.get("/health/ready")
def health_ready(request: Request, response: Response):
    settings = request.app.state.settings
    token_is_set = bool(settings.access_token)
    secret_is_set = bool(settings.verify_token)

    if token_is_set and secret_is_set:
        return {"status": "ready"}
    else:
        response.status_code = 503
        return {
            "status": "not ready",
            "token": "set" if token_is_set else "missing",
            "verify_token": "set" if secret_is_set else "missing"
        }


@router.get("/metrics")
def get_metrics():
    return PlainTextResponse(metrics.generate_text())


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The HTTP client is opened with the server, not at import time
    if app.state.sender is None:
        app.state.sender = WhatsAppSender(app.state.settings)
    yield
    await app.state.sender.aclose()


def create_app(settings=None, sender=None):
    """Builds the app with its configuration injected once, at construction."""
    settings = settings or load_settings()

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.dispatcher = Dispatcher(settings)
    app.state.sender = sender

    app.middleware("http")(log_middleware)
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    logging_utils.log_event("startup", port=app.state.settings.port)
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
