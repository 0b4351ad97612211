from __future__ import annotations

import re


# sk_live_..., sk_test_..., rk_live_..., whsec_...
_STRIPE_KEY_RE = re.compile(r"\b((?:sk|rk|pk)_(?:live|test)_|whsec_)([A-Za-z0-9]{4,})\b")

_SENSITIVE_KEY_MARKERS = (
    "authorization",
    "cookie",
    "secret",
    "signature",
    "api_key",
    "api-key",
)


def _mask_stripe_key(match: re.Match) -> str:
    prefix = match.group(1)
    tail = match.group(2)
    return f"{prefix}***{tail[-4:]}"


def redact_text(value: str) -> str:
    masked = _STRIPE_KEY_RE.sub(_mask_stripe_key, value)

    if "bearer " in masked.lower():
        return "[REDACTED]"

    return masked


def _is_sensitive_key(key: str) -> bool:
    key_l = (key or "").lower()
    return any(marker in key_l for marker in _SENSITIVE_KEY_MARKERS)


def redact_dict(headers: dict[str, str]) -> dict[str, str]:
    """Header name -> value, with secret-bearing headers replaced wholesale."""
    return {k: "[REDACTED]" if _is_sensitive_key(k) else redact_text(v) for k, v in headers.items()}
