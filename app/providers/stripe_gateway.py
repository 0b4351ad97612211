from __future__ import annotations

import json
import logging
from typing import Any, Optional

import stripe

from app.providers.base import ProviderErrorKind, ProviderResult


logger = logging.getLogger("payouts.stripe")

# most specific first: SignatureVerificationError etc. all derive from StripeError
_ERROR_KINDS: tuple[tuple[type, ProviderErrorKind], ...] = (
    (stripe.InvalidRequestError, "INVALID_REQUEST"),
    (stripe.AuthenticationError, "AUTHENTICATION"),
    (stripe.PermissionError, "PERMISSION"),
    (stripe.RateLimitError, "RATE_LIMIT"),
    (stripe.APIConnectionError, "CONNECTION"),
    (stripe.SignatureVerificationError, "SIGNATURE"),
)


def classify_error(exc: stripe.StripeError) -> ProviderErrorKind:
    for exc_type, kind in _ERROR_KINDS:
        if isinstance(exc, exc_type):
            return kind
    return "API"


def _error_result(exc: stripe.StripeError) -> ProviderResult:
    return ProviderResult.failure(
        classify_error(exc),
        exc.user_message or str(exc),
        code=getattr(exc, "code", None),
        http_status=getattr(exc, "http_status", None),
    )


def _to_plain(obj: Any) -> dict[str, Any]:
    """
    StripeObject -> plain JSON dict (nested objects included).
    """
    if obj is None:
        return {}
    if isinstance(obj, stripe.StripeObject):
        return json.loads(str(obj))
    return dict(obj)


class StripePayoutGateway:
    """
    Payout operations backed by the Stripe SDK.

    Every method returns a ProviderResult; SDK exceptions never reach the routes.
    """

    def __init__(self, api_key: str, *, api_version: Optional[str] = None):
        self._api_key = api_key
        self._api_version = (api_version or "").strip() or None

    def _request_options(self) -> dict[str, Any]:
        opts: dict[str, Any] = {"api_key": self._api_key}
        if self._api_version:
            opts["stripe_version"] = self._api_version
        return opts

    async def create_payout(self, params: dict[str, Any]) -> ProviderResult:
        try:
            payout = await stripe.Payout.create_async(**self._request_options(), **params)
        except stripe.StripeError as exc:
            logger.warning("stripe payout create error kind=%s err=%s", classify_error(exc), exc.user_message)
            return _error_result(exc)
        return ProviderResult.success(_to_plain(payout))

    async def retrieve_payout(self, payout_id: str) -> ProviderResult:
        try:
            payout = await stripe.Payout.retrieve_async(payout_id, **self._request_options())
        except stripe.StripeError as exc:
            logger.warning(
                "stripe payout retrieve error payout_id=%s kind=%s err=%s",
                payout_id,
                classify_error(exc),
                exc.user_message,
            )
            return _error_result(exc)
        return ProviderResult.success(_to_plain(payout))

    async def list_payouts(self, params: dict[str, Any]) -> ProviderResult:
        try:
            page = await stripe.Payout.list_async(**self._request_options(), **params)
        except stripe.StripeError as exc:
            logger.warning("stripe payout list error kind=%s err=%s", classify_error(exc), exc.user_message)
            return _error_result(exc)
        return ProviderResult.success(
            {
                "data": [_to_plain(p) for p in page.data],
                "has_more": bool(page.has_more),
            }
        )

    def construct_event(self, payload: bytes, signature: str | None, secret: str) -> ProviderResult:
        if not signature or not signature.strip():
            return ProviderResult.failure("SIGNATURE", "No signatures found matching the expected signature for payload")
        try:
            event = stripe.Webhook.construct_event(payload, signature, secret)
        except stripe.SignatureVerificationError as exc:
            return _error_result(exc)
        except ValueError as exc:
            # body is not valid JSON
            return ProviderResult.failure("SIGNATURE", f"Invalid payload: {exc}")
        except (AttributeError, TypeError) as exc:
            # valid JSON but not an event object, e.g. [] or "x"
            return ProviderResult.failure("SIGNATURE", f"Invalid payload: {exc}")
        return ProviderResult.success(_to_plain(event))
