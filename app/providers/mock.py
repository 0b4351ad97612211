# app/providers/mock.py
from __future__ import annotations

import json
import time
from typing import Any, Optional

from app.providers.base import ProviderResult


class MockPayoutGateway:
    """
    Test/dev gateway.

    - Records every call in `calls` as (operation, argument) tuples.
    - Returns the configured result per operation, or a canned success.
    - Webhook "verification" accepts only the exact `valid_signature` string.
    """

    def __init__(
        self,
        *,
        create_result: Optional[ProviderResult] = None,
        retrieve_result: Optional[ProviderResult] = None,
        list_result: Optional[ProviderResult] = None,
        valid_signature: str = "mock-signature",
    ):
        self.create_result = create_result
        self.retrieve_result = retrieve_result
        self.list_result = list_result
        self.valid_signature = valid_signature
        self.calls: list[tuple[str, Any]] = []

    def calls_for(self, operation: str) -> list[Any]:
        return [arg for op, arg in self.calls if op == operation]

    async def create_payout(self, params: dict[str, Any]) -> ProviderResult:
        self.calls.append(("create", dict(params)))
        if self.create_result is not None:
            return self.create_result
        return ProviderResult.success(_mock_payout(params.get("amount"), params.get("currency")))

    async def retrieve_payout(self, payout_id: str) -> ProviderResult:
        self.calls.append(("retrieve", payout_id))
        if self.retrieve_result is not None:
            return self.retrieve_result
        return ProviderResult.success(_mock_payout(1000, "usd", payout_id=payout_id, status="paid"))

    async def list_payouts(self, params: dict[str, Any]) -> ProviderResult:
        self.calls.append(("list", dict(params)))
        if self.list_result is not None:
            return self.list_result
        return ProviderResult.success({"data": [_mock_payout(1000, "usd", status="paid")], "has_more": False})

    def construct_event(self, payload: bytes, signature: str | None, secret: str) -> ProviderResult:
        self.calls.append(("construct_event", signature))
        if signature != self.valid_signature:
            return ProviderResult.failure("SIGNATURE", "No signatures found matching the expected signature for payload")
        try:
            event = json.loads(payload)
        except ValueError as exc:
            return ProviderResult.failure("SIGNATURE", f"Invalid payload: {exc}")
        return ProviderResult.success(event)


def _mock_payout(
    amount: Any,
    currency: Any,
    *,
    payout_id: str = "po_mock_123",
    status: str = "pending",
) -> dict[str, Any]:
    return {
        "id": payout_id,
        "object": "payout",
        "amount": amount,
        "currency": currency,
        "method": "instant",
        "status": status,
        "created": int(time.time()),
        "mock": True,
    }
