"""Health check endpoints."""

from fastapi import APIRouter, Request

from monadbank import __version__
from monadbank.config import get_settings
from monadbank.intents import IntentKind
from monadbank.utils.locks import is_form_busy

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "monadbank"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with configuration and wallet state."""
    settings = get_settings()
    workflow = request.app.state.workflow
    session = workflow.sessions.session if workflow else None

    return {
        "status": "healthy",
        "service": "monadbank",
        "version": __version__,
        "config": settings.get_safe_dict(),
        "wallet": {
            "provider": workflow.sessions.provider.name
            if workflow and workflow.sessions.provider
            else None,
            "connected": session is not None,
            "address": session.account if session else None,
            "chain_id": session.chain_id if session else None,
        },
        "forms_in_flight": [kind.value for kind in IntentKind if is_form_busy(kind.value)],
    }
