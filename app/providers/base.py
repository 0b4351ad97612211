# app/providers/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Literal

ProviderErrorKind = Literal[
    "INVALID_REQUEST",
    "AUTHENTICATION",
    "PERMISSION",
    "RATE_LIMIT",
    "CONNECTION",
    "SIGNATURE",
    "API",
    "UNKNOWN",
]


@dataclass(frozen=True)
class ProviderError:
    kind: ProviderErrorKind
    message: str
    code: Optional[str] = None
    http_status: Optional[int] = None


@dataclass(frozen=True)
class ProviderResult:
    """
    Outcome of a single provider call: exactly one of data / error is set.
    """

    data: Optional[dict[str, Any]] = None
    error: Optional[ProviderError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: dict[str, Any]) -> "ProviderResult":
        return cls(data=data)

    @classmethod
    def failure(
        cls,
        kind: ProviderErrorKind,
        message: str,
        *,
        code: Optional[str] = None,
        http_status: Optional[int] = None,
    ) -> "ProviderResult":
        return cls(error=ProviderError(kind=kind, message=message, code=code, http_status=http_status))


class PayoutGateway(Protocol):
    async def create_payout(self, params: dict[str, Any]) -> ProviderResult: ...
    async def retrieve_payout(self, payout_id: str) -> ProviderResult: ...
    async def list_payouts(self, params: dict[str, Any]) -> ProviderResult: ...
    def construct_event(self, payload: bytes, signature: str | None, secret: str) -> ProviderResult: ...
