import hashlib
import hmac
import json
import time


def canonical_json_bytes(payload) -> bytes:
    return json.dumps(
        payload,
        separators=(",", ":"),
        sort_keys=True,
        ensure_ascii=False,
    ).encode("utf-8")


def hmac_sha256_hex(secret: str, body_bytes: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), body_bytes, hashlib.sha256).hexdigest()


def stripe_signature(secret: str, body_bytes: bytes, timestamp: int | None = None) -> str:
    """
    Stripe-Signature value: "t=<unix>,v1=<hex hmac of '<t>.<body>'>".
    """
    ts = int(time.time()) if timestamp is None else int(timestamp)
    signed = f"{ts}.".encode("utf-8") + body_bytes
    return f"t={ts},v1={hmac_sha256_hex(secret, signed)}"


def stripe_signature_header(secret: str, body_bytes: bytes, timestamp: int | None = None) -> dict[str, str]:
    return {"Stripe-Signature": stripe_signature(secret, body_bytes, timestamp)}


def payout_event(event_type: str, payout: dict, event_id: str = "evt_test_webhook") -> dict:
    return {
        "id": event_id,
        "object": "event",
        "type": event_type,
        "created": int(time.time()),
        "data": {"object": {"object": "payout", **payout}},
    }
