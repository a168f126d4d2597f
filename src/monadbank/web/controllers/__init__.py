"""HTTP controllers standing in for the browser form layer."""

from monadbank.web.controllers.forms import router as forms_router
from monadbank.web.controllers.health import router as health_router
from monadbank.web.controllers.wallet import router as wallet_router

__all__ = [
    "forms_router",
    "health_router",
    "wallet_router",
]
