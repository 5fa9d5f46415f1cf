"""Configuração ativa da automação (credenciais, templates e toggles).

Endpoints:
- GET /api/settings: configuração atual (segredos mascarados) ou null
- POST /api/settings: substituição integral; segredo reenviado mascarado
  mantém o valor armazenado
- GET /api/settings/defaults: templates padrão para o formulário
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response

from api.routes.instagram.schemas import (
    MaskedSecretMismatchError,
    SettingsRequest,
    config_to_response,
    masked_secret_mismatch_response,
    resolve_masked_secrets,
    validation_error_response,
)
from app.bootstrap import get_config_provider
from app.domain.automation_config import DEFAULT_FOLLOWER_TEMPLATE, DEFAULT_LIKE_TEMPLATE

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/settings")
async def get_settings() -> dict[str, Any] | None:
    config = await get_config_provider().get()
    return config_to_response(config) if config else None


@router.post("/settings", response_model=None)
async def replace_settings(request: Request) -> Response | dict[str, Any]:
    """Substitui a configuração ativa (todos os campos obrigatórios)."""
    try:
        body = SettingsRequest.model_validate(await request.json())
    except ValueError as exc:  # JSON inválido ou ValidationError
        return validation_error_response(exc)

    provider = get_config_provider()
    try:
        config = resolve_masked_secrets(body.to_config(), await provider.get())
    except MaskedSecretMismatchError as exc:
        return masked_secret_mismatch_response(exc)

    await provider.replace(config)
    logger.info(
        "automation_settings_updated",
        extra={
            "follower_automation_enabled": config.follower_automation_enabled,
            "like_automation_enabled": config.like_automation_enabled,
        },
    )
    return config_to_response(config)


@router.get("/settings/defaults")
async def get_default_templates() -> dict[str, str]:
    return {
        "follower_message_template": DEFAULT_FOLLOWER_TEMPLATE,
        "like_message_template": DEFAULT_LIKE_TEMPLATE,
    }
