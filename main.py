#main.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.providers.base import PayoutGateway
from app.providers.stripe_gateway import StripePayoutGateway
from middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from routes.health import router as health_router
from routes.payouts import router as payouts_router
from routes.webhooks import router as webhooks_router
from services.logging_setup import configure_logging
from settings import Settings, settings as default_settings, validate_env_settings

logger = logging.getLogger("payouts")

DEFAULT_PORT = 4242


def _error_body(message: str) -> dict:
    return {"success": False, "error": message}


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    msg = first.get("msg") or "Invalid value"
    return f"{loc}: {msg}" if loc else msg


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=_error_body(_validation_message(exc)))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error path=%s", request.url.path)
        # runs outside RequestContextMiddleware, so the header is set here
        req_id = getattr(request.state, "request_id", None)
        return JSONResponse(
            status_code=500,
            content=_error_body("Internal server error"),
            headers={REQUEST_ID_HEADER: req_id} if req_id else None,
        )


def create_app(
    settings: Settings | None = None,
    gateway: PayoutGateway | None = None,
) -> FastAPI:
    s = settings or default_settings
    configure_logging(s.LOG_LEVEL)
    validate_env_settings(s)

    app = FastAPI(title="Payout Gateway API", version=s.APP_VERSION)

    app.state.settings = s
    app.state.gateway = gateway or StripePayoutGateway(
        s.STRIPE_SECRET_KEY,
        api_version=s.STRIPE_API_VERSION,
    )

    # -----------------------------
    # MIDDLEWARE
    # -----------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=s.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    # -----------------------------
    # ROUTERS
    # -----------------------------
    app.include_router(health_router)
    app.include_router(payouts_router)
    app.include_router(webhooks_router)

    _register_error_handlers(app)
    return app


def _resolve_port(s: Settings | None = None) -> int:
    return int((s or default_settings).PORT or DEFAULT_PORT)


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("server_start port=%s", _resolve_port())
    uvicorn.run("main:app", host="0.0.0.0", port=_resolve_port())
