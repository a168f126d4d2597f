"""Form submission endpoints.

Every response is HTTP 200 with the status line; failures are part of the
status text, not of the HTTP status.
"""

import logging

from fastapi import APIRouter, Request

from monadbank.web.contracts.forms import (
    DepositForm,
    RegisterForm,
    StatusResponse,
    WithdrawForm,
)
from monadbank.workflow import DappWorkflow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forms", tags=["forms"])


def _workflow(request: Request) -> DappWorkflow:
    return request.app.state.workflow


def _response(workflow: DappWorkflow, status: str) -> StatusResponse:
    return StatusResponse(status=status, address=workflow.sessions.address)


@router.post("/register", response_model=StatusResponse)
async def submit_register(form: RegisterForm, request: Request) -> StatusResponse:
    """Register the connected account (pays the fixed registration fee)."""
    workflow = _workflow(request)
    status = await workflow.register(form.model_dump())
    return _response(workflow, status)


@router.post("/deposit", response_model=StatusResponse)
async def submit_deposit(form: DepositForm, request: Request) -> StatusResponse:
    """Deposit native currency into the contract."""
    workflow = _workflow(request)
    status = await workflow.deposit(form.model_dump())
    return _response(workflow, status)


@router.post("/withdraw", response_model=StatusResponse)
async def submit_withdraw(form: WithdrawForm, request: Request) -> StatusResponse:
    """Withdraw from the contract balance."""
    workflow = _workflow(request)
    status = await workflow.withdraw(form.model_dump(by_alias=True))
    return _response(workflow, status)
