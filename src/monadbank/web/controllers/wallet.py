"""Wallet connection endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Request

from monadbank.errors import SessionError
from monadbank.web.contracts.forms import StatusResponse
from monadbank.workflow import DappWorkflow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["wallet"])


def _workflow(request: Request) -> DappWorkflow:
    return request.app.state.workflow


@router.post("/wallet/connect", response_model=StatusResponse)
async def connect_wallet(request: Request) -> StatusResponse:
    """Switch to the required chain and authorize an account.

    Raises:
        HTTPException: 502 if the wallet failed for a reason other than a
            missing wallet or an unknown network
    """
    workflow = _workflow(request)
    try:
        status = await workflow.connect_wallet()
    except SessionError as e:
        logger.error(f"Wallet connection failed: {e}")
        raise HTTPException(
            status_code=502,
            detail={"status": workflow.status.text, "error": str(e)},
        )
    return StatusResponse(status=status, address=workflow.sessions.address)


@router.post("/wallet/disconnect", response_model=StatusResponse)
async def disconnect_wallet(request: Request) -> StatusResponse:
    workflow = _workflow(request)
    status = workflow.disconnect_wallet()
    return StatusResponse(status=status, address=None)


@router.get("/status", response_model=StatusResponse)
async def get_status(request: Request) -> StatusResponse:
    """Current status line and connected address."""
    workflow = _workflow(request)
    return StatusResponse(status=workflow.status.text, address=workflow.sessions.address)
