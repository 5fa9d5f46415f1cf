"""Agregador de rotas — registra todos os routers.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.instagram.router import admin as instagram_admin_router
from api.routes.instagram.router import webhook as instagram_webhook_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Webhook Meta
    api_router.include_router(
        instagram_webhook_router,
        prefix="/webhook/instagram",
        tags=["instagram"],
    )

    # API administrativa (painel)
    api_router.include_router(instagram_admin_router, prefix="/api", tags=["admin"])

    return api_router
