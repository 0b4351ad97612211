# app/webhooks/events.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

logger = logging.getLogger("payouts.webhooks")

PAYOUT_CREATED = "payout.created"
PAYOUT_PAID = "payout.paid"
PAYOUT_FAILED = "payout.failed"


@dataclass(frozen=True)
class PayoutSnapshot:
    id: Optional[str]
    amount: Optional[int]
    currency: Optional[str]
    status: Optional[str]

    @classmethod
    def from_object(cls, obj: dict[str, Any]) -> "PayoutSnapshot":
        return cls(
            id=obj.get("id"),
            amount=obj.get("amount"),
            currency=obj.get("currency"),
            status=obj.get("status"),
        )


@dataclass(frozen=True)
class PayoutCreated:
    event_id: str
    payout: PayoutSnapshot


@dataclass(frozen=True)
class PayoutPaid:
    event_id: str
    payout: PayoutSnapshot


@dataclass(frozen=True)
class PayoutFailed:
    event_id: str
    payout: PayoutSnapshot
    failure_code: Optional[str] = None
    failure_message: Optional[str] = None


@dataclass(frozen=True)
class UnhandledEvent:
    event_id: str
    event_type: str
    data: dict[str, Any] = field(default_factory=dict)


WebhookEvent = Union[PayoutCreated, PayoutPaid, PayoutFailed, UnhandledEvent]


def _event_object(event: dict[str, Any]) -> dict[str, Any]:
    data = event.get("data")
    if isinstance(data, dict) and isinstance(data.get("object"), dict):
        return data["object"]
    return {}


def parse_event(event: dict[str, Any]) -> WebhookEvent:
    event_id = str(event.get("id") or "")
    event_type = str(event.get("type") or "")
    obj = _event_object(event)

    if event_type == PAYOUT_CREATED:
        return PayoutCreated(event_id=event_id, payout=PayoutSnapshot.from_object(obj))
    if event_type == PAYOUT_PAID:
        return PayoutPaid(event_id=event_id, payout=PayoutSnapshot.from_object(obj))
    if event_type == PAYOUT_FAILED:
        return PayoutFailed(
            event_id=event_id,
            payout=PayoutSnapshot.from_object(obj),
            failure_code=obj.get("failure_code"),
            failure_message=obj.get("failure_message"),
        )
    return UnhandledEvent(event_id=event_id, event_type=event_type, data=obj)


def _log_payout(name: str, event: PayoutCreated | PayoutPaid) -> None:
    p = event.payout
    logger.info(
        "%s event_id=%s payout_id=%s amount=%s currency=%s status=%s",
        name,
        event.event_id,
        p.id,
        p.amount,
        p.currency,
        p.status,
    )


def handle_event(event: WebhookEvent) -> str:
    """
    Log-only dispatch. Returns the name of the branch that ran.
    """
    if isinstance(event, PayoutCreated):
        _log_payout("payout_created", event)
        return "payout_created"

    if isinstance(event, PayoutPaid):
        _log_payout("payout_paid", event)
        return "payout_paid"

    if isinstance(event, PayoutFailed):
        p = event.payout
        logger.warning(
            "payout_failed event_id=%s payout_id=%s amount=%s currency=%s status=%s failure_code=%s failure_message=%s",
            event.event_id,
            p.id,
            p.amount,
            p.currency,
            p.status,
            event.failure_code,
            event.failure_message,
        )
        return "payout_failed"

    if isinstance(event, UnhandledEvent):
        logger.info("webhook_unhandled event_id=%s type=%s", event.event_id, event.event_type)
        return "unhandled"

    raise TypeError(f"Unknown webhook event variant: {type(event).__name__}")
