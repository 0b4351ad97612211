from __future__ import annotations

from fastapi import Request

from app.providers.base import PayoutGateway
from settings import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> PayoutGateway:
    return request.app.state.gateway
