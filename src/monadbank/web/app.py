"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from monadbank.config import get_settings
from monadbank.wallet.local import create_wallet_provider
from monadbank.workflow import DappWorkflow, create_workflow


def create_app(workflow: Optional[DappWorkflow] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        workflow: Preassembled workflow (tests); built from settings if None
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        if getattr(app.state, "workflow", None) is None:
            app.state.workflow = create_workflow(settings, create_wallet_provider(settings))
        yield

    app = FastAPI(
        title="monadbank",
        description="Wallet connection and contract forms",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.workflow = workflow

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from monadbank.web.controllers import forms_router, health_router, wallet_router

    app.include_router(health_router, tags=["Health"])
    app.include_router(wallet_router)
    app.include_router(forms_router)

    return app
