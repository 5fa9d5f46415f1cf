"""Router do Instagram — webhook e API administrativa."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.instagram.events import router as events_router
from api.routes.instagram.messages import router as messages_router
from api.routes.instagram.settings import router as settings_router
from api.routes.instagram.stats import router as stats_router
from api.routes.instagram.webhook import router as webhook_router

# Webhook endpoints (GET para challenge, POST para notificações)
webhook = APIRouter()
webhook.include_router(webhook_router)

# API administrativa (painel)
admin = APIRouter()
admin.include_router(events_router)
admin.include_router(messages_router)
admin.include_router(settings_router)
admin.include_router(stats_router)
