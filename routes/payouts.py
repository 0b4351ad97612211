# routes/payouts.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.payouts.params import InvalidParams, build_create_params, build_list_params
from app.providers.base import PayoutGateway, ProviderResult
from deps.app_state import get_gateway
from schemas import (
    ErrorResponse,
    PayoutCreateRequest,
    PayoutListResponse,
    PayoutResponse,
)

logger = logging.getLogger("payouts.api")
router = APIRouter(
    prefix="/api",
    tags=["payouts"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

PAYOUT_NOT_FOUND = "Payout not found"
PAYOUT_ID_REQUIRED = "Payout ID is required"


def _provider_failure(result: ProviderResult) -> HTTPException:
    err = result.error
    message = err.message if err and err.message else "Payout provider error"
    return HTTPException(status_code=500, detail=message)


@router.post("/payout", response_model=PayoutResponse, operation_id="create_payout")
async def create_payout(
    body: PayoutCreateRequest,
    gateway: PayoutGateway = Depends(get_gateway),
):
    try:
        params = build_create_params(body.amount, body.currency, body.destination)
    except InvalidParams as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(
        "payout_create_start amount=%s currency=%s has_destination=%s",
        params["amount"],
        params["currency"],
        "destination" in params,
    )
    result = await gateway.create_payout(params)

    if not result.ok:
        logger.error(
            "payout_create_failed amount=%s currency=%s kind=%s err=%s",
            params["amount"],
            params["currency"],
            result.error.kind,
            result.error.message,
        )
        raise _provider_failure(result)

    payout = result.data or {}
    logger.info(
        "payout_create_ok payout_id=%s amount=%s currency=%s status=%s",
        payout.get("id"),
        payout.get("amount"),
        payout.get("currency"),
        payout.get("status"),
    )
    return {"success": True, "payout": payout}


@router.get("/payout/", response_model=PayoutResponse, include_in_schema=False)
async def get_payout_missing_id():
    raise HTTPException(status_code=400, detail=PAYOUT_ID_REQUIRED)


@router.get(
    "/payout/{payout_id}",
    response_model=PayoutResponse,
    operation_id="get_payout",
    responses={404: {"model": ErrorResponse}},
)
async def get_payout(
    payout_id: str,
    gateway: PayoutGateway = Depends(get_gateway),
):
    payout_id = (payout_id or "").strip()
    if not payout_id:
        raise HTTPException(status_code=400, detail=PAYOUT_ID_REQUIRED)

    result = await gateway.retrieve_payout(payout_id)
    if not result.ok:
        if result.error.kind == "INVALID_REQUEST":
            raise HTTPException(status_code=404, detail=PAYOUT_NOT_FOUND)
        raise _provider_failure(result)

    return {"success": True, "payout": result.data or {}}


@router.get("/payouts", response_model=PayoutListResponse, operation_id="list_payouts")
async def list_payouts(
    created: Optional[str] = Query(default=None, description="unix timestamp or start..end"),
    limit: Optional[int] = Query(default=None),
    starting_after: Optional[str] = Query(default=None),
    ending_before: Optional[str] = Query(default=None),
    gateway: PayoutGateway = Depends(get_gateway),
):
    try:
        params = build_list_params(
            created=created,
            limit=limit,
            starting_after=starting_after,
            ending_before=ending_before,
        )
    except InvalidParams as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = await gateway.list_payouts(params)
    if not result.ok:
        logger.error("payout_list_failed kind=%s err=%s", result.error.kind, result.error.message)
        raise _provider_failure(result)

    page = result.data or {}
    return {
        "success": True,
        "payouts": page.get("data") or [],
        "has_more": bool(page.get("has_more")),
    }
