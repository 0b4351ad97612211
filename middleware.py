import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from services.observability import reset_request_id, set_request_id
from services.redaction import redact_dict

logger = logging.getLogger("payouts.http")

REQUEST_ID_HEADER = "X-Request-ID"


def _resolve_request_id(request: Request) -> str:
    for name in (REQUEST_ID_HEADER, "X-Correlation-ID"):
        value = request.headers.get(name)
        if value and value.strip():
            return value.strip()
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        req_id = _resolve_request_id(request)
        start = time.perf_counter()

        request.state.request_id = req_id
        token = set_request_id(req_id)

        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers[REQUEST_ID_HEADER] = req_id
            return response
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.info(
                "http_request_end method=%s path=%s status=%s duration_ms=%s client=%s",
                request.method,
                request.url.path,
                status,
                duration_ms,
                request.client.host if request.client else None,
            )
            logger.debug("http_request_headers headers=%s", redact_dict(dict(request.headers)))
            reset_request_id(token)
