# app/payouts/params.py
from __future__ import annotations

from typing import Any, Optional

DEFAULT_CURRENCY = "usd"
PAYOUT_METHOD = "instant"

DEFAULT_LIST_LIMIT = 10
MIN_LIST_LIMIT = 1
MAX_LIST_LIMIT = 100

RANGE_SEPARATOR = ".."


class InvalidParams(Exception):
    pass


def build_create_params(
    amount: Optional[int],
    currency: Optional[str] = None,
    destination: Optional[str] = None,
) -> dict[str, Any]:
    """
    Provider payload for a new payout:
    {amount, currency, method="instant"} plus destination only when given.
    Currency is forwarded as given; the provider owns case handling.
    """
    if amount is None:
        raise InvalidParams("Amount is required")
    if amount <= 0:
        raise InvalidParams("Amount must be a positive integer in the smallest currency unit")

    params: dict[str, Any] = {
        "amount": amount,
        "currency": currency or DEFAULT_CURRENCY,
        "method": PAYOUT_METHOD,
    }
    if destination:
        params["destination"] = destination
    return params


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIST_LIMIT
    return max(MIN_LIST_LIMIT, min(MAX_LIST_LIMIT, int(limit)))


def _parse_bound(raw: str) -> int:
    value = raw.strip()
    try:
        return int(value)
    except ValueError:
        raise InvalidParams(f"Invalid created filter bound: {raw!r}") from None


def parse_created(raw: Optional[str]) -> Any:
    """
    "start..end" -> {"gte": start, "lte": end}, split on the first "..".
    A bare timestamp is returned as a string with surrounding whitespace removed.
    """
    if raw is None or not raw.strip():
        return None

    if RANGE_SEPARATOR in raw:
        start, end = raw.split(RANGE_SEPARATOR, 1)
        return {"gte": _parse_bound(start), "lte": _parse_bound(end)}

    value = raw.strip()
    _parse_bound(value)
    return value


def build_list_params(
    *,
    created: Optional[str] = None,
    limit: Optional[int] = None,
    starting_after: Optional[str] = None,
    ending_before: Optional[str] = None,
) -> dict[str, Any]:
    params: dict[str, Any] = {"limit": clamp_limit(limit)}

    created_filter = parse_created(created)
    if created_filter is not None:
        params["created"] = created_filter

    # cursors are opaque provider ids
    if starting_after:
        params["starting_after"] = starting_after
    if ending_before:
        params["ending_before"] = ending_before
    return params
