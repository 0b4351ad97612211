from __future__ import annotations

import logging
import time

import pytest
from fastapi.testclient import TestClient

from app.providers.stripe_gateway import StripePayoutGateway
from main import create_app
from tests.conftest import WEBHOOK_SECRET, make_settings

from _webhook_signing import canonical_json_bytes, payout_event, stripe_signature_header  # noqa: E402


@pytest.fixture()
def stripe_client() -> TestClient:
    settings = make_settings()
    app = create_app(settings, StripePayoutGateway(settings.STRIPE_SECRET_KEY))
    return TestClient(app, raise_server_exceptions=False)


def _post(client: TestClient, body_bytes: bytes, headers: dict[str, str]):
    headers = {**headers, "Content-Type": "application/json"}
    return client.post("/api/webhook", content=body_bytes, headers=headers)


def test_canonical_json_bytes_stable():
    assert canonical_json_bytes({"b": 1, "a": 2}) == canonical_json_bytes({"a": 2, "b": 1})
    assert canonical_json_bytes({"b": 1, "a": 2}) == b'{"a":2,"b":1}'


def test_signed_payout_paid_accepted(stripe_client, caplog):
    caplog.set_level(logging.INFO, logger="payouts.webhooks")
    event = payout_event(
        "payout.paid",
        {"id": "po_signed", "amount": 1000, "currency": "usd", "status": "paid"},
    )
    body_bytes = canonical_json_bytes(event)

    r = _post(stripe_client, body_bytes, stripe_signature_header(WEBHOOK_SECRET, body_bytes))
    assert r.status_code == 200, r.text
    assert r.json() == {"received": True}
    assert any(
        rec.getMessage().startswith("payout_paid") and "payout_id=po_signed" in rec.getMessage()
        for rec in caplog.records
    )


def test_signed_payout_failed_logs_failure_fields(stripe_client, caplog):
    caplog.set_level(logging.INFO, logger="payouts.webhooks")
    event = payout_event(
        "payout.failed",
        {
            "id": "po_failed",
            "amount": 500,
            "currency": "usd",
            "status": "failed",
            "failure_code": "account_closed",
            "failure_message": "The bank account has been closed.",
        },
    )
    body_bytes = canonical_json_bytes(event)

    r = _post(stripe_client, body_bytes, stripe_signature_header(WEBHOOK_SECRET, body_bytes))
    assert r.status_code == 200, r.text
    assert any("failure_code=account_closed" in rec.getMessage() for rec in caplog.records)


def test_wrong_secret_rejected(stripe_client):
    body_bytes = canonical_json_bytes(payout_event("payout.paid", {"id": "po_x"}))

    r = _post(stripe_client, body_bytes, stripe_signature_header("whsec_wrong", body_bytes))
    assert r.status_code == 400, r.text
    assert r.json()["error"] == "Webhook signature verification failed"


def test_tampered_body_rejected(stripe_client, caplog):
    caplog.set_level(logging.INFO, logger="payouts.webhooks")
    original = canonical_json_bytes(payout_event("payout.paid", {"id": "po_x", "amount": 100}))
    tampered = canonical_json_bytes(payout_event("payout.paid", {"id": "po_x", "amount": 999999}))

    r = _post(stripe_client, tampered, stripe_signature_header(WEBHOOK_SECRET, original))
    assert r.status_code == 400, r.text
    assert not any(rec.getMessage().startswith("payout_paid") for rec in caplog.records)


def test_stale_timestamp_rejected(stripe_client):
    body_bytes = canonical_json_bytes(payout_event("payout.paid", {"id": "po_x"}))
    old = int(time.time()) - 3600

    r = _post(stripe_client, body_bytes, stripe_signature_header(WEBHOOK_SECRET, body_bytes, timestamp=old))
    assert r.status_code == 400, r.text


def test_missing_header_rejected(stripe_client):
    body_bytes = canonical_json_bytes(payout_event("payout.paid", {"id": "po_x"}))

    r = _post(stripe_client, body_bytes, {})
    assert r.status_code == 400, r.text
    assert r.json()["error"] == "Webhook signature verification failed"


@pytest.mark.parametrize("body_bytes", [b"[]", b'"payout.paid"', b"42"])
def test_signed_non_object_payload_rejected(stripe_client, body_bytes):
    r = _post(stripe_client, body_bytes, stripe_signature_header(WEBHOOK_SECRET, body_bytes))
    assert r.status_code == 400, r.text
    assert r.json() == {"success": False, "error": "Webhook signature verification failed"}
