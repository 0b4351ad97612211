# schemas.py
from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt
from typing import Any, Optional, List, Literal


# -------- PAYOUTS --------
class PayoutCreateRequest(BaseModel):
    # validated in the route so a missing / non-positive amount gets a readable message
    amount: Optional[StrictInt] = None
    currency: Optional[str] = Field(default=None, pattern="^[A-Za-z]{3}$")
    destination: Optional[str] = Field(default=None, min_length=1, max_length=255)


class PayoutResponse(BaseModel):
    success: Literal[True] = True
    payout: dict[str, Any]


class PayoutListResponse(BaseModel):
    success: Literal[True] = True
    payouts: List[dict[str, Any]]
    has_more: bool


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str


# -------- WEBHOOKS --------
class WebhookAck(BaseModel):
    received: bool = True


# -------- SERVICE --------
class HealthResponse(BaseModel):
    status: Literal["OK"] = "OK"
    timestamp: str


class RootResponse(BaseModel):
    message: str


class VersionResponse(BaseModel):
    name: str
    version: str
    status: str = "running"
    env: str
