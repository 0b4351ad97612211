# routes/webhooks.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from app.providers.base import PayoutGateway
from app.webhooks.events import handle_event, parse_event
from deps.app_state import get_app_settings, get_gateway
from schemas import ErrorResponse, WebhookAck
from services.redaction import redact_text
from settings import Settings


router = APIRouter(prefix="/api", tags=["webhooks"])
logger = logging.getLogger("payouts.webhooks")

SIGNATURE_HEADER = "Stripe-Signature"

WEBHOOK_NOT_CONFIGURED = "Webhook secret not configured"
WEBHOOK_SIGNATURE_FAILED = "Webhook signature verification failed"


@router.post(
    "/webhook",
    response_model=WebhookAck,
    operation_id="receive_webhook",
    responses={400: {"model": ErrorResponse}},
)
async def receive_webhook(
    req: Request,
    settings: Settings = Depends(get_app_settings),
    gateway: PayoutGateway = Depends(get_gateway),
):
    secret = settings.webhook_secret()
    if not secret:
        logger.error("webhook_rejected reason=WEBHOOK_SECRET_NOT_CONFIGURED")
        raise HTTPException(status_code=400, detail=WEBHOOK_NOT_CONFIGURED)

    # signature covers the exact bytes, so never re-serialize the body
    raw = await req.body()
    sig_header = req.headers.get(SIGNATURE_HEADER)

    verified = gateway.construct_event(raw, sig_header, secret)
    if not verified.ok:
        logger.warning(
            "webhook_rejected reason=INVALID_SIGNATURE signature_present=%s err=%s",
            bool(sig_header),
            redact_text(verified.error.message),
        )
        raise HTTPException(status_code=400, detail=WEBHOOK_SIGNATURE_FAILED)

    event = parse_event(verified.data or {})
    branch = handle_event(event)
    logger.info("webhook_received event_id=%s branch=%s", event.event_id, branch)

    return {"received": True}
