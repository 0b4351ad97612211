from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from deps.app_state import get_app_settings
from schemas import HealthResponse, RootResponse, VersionResponse
from settings import Settings

router = APIRouter(tags=["health"])

SERVICE_NAME = "payout-gateway"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/", response_model=RootResponse)
def root():
    return {"message": "Payout gateway is running!"}


@router.get("/health", response_model=HealthResponse)
def health():
    return {"status": "OK", "timestamp": _utc_now_iso()}


@router.get("/version", response_model=VersionResponse)
def version(settings: Settings = Depends(get_app_settings)):
    return {
        "name": SERVICE_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "env": settings.ENV,
    }
