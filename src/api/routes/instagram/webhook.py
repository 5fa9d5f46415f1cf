"""Endpoints de webhook do Instagram.

Endpoints:
- GET /webhook/instagram: verificação de webhook (Meta challenge)
- POST /webhook/instagram: notificações de seguidores e curtidas

Fluxo do POST:
1. Assinatura HMAC sobre o corpo bruto (401 se inválida)
2. JSON (400 se inválido)
3. Configuração ativa obrigatória (400 se ausente)
4. Extração + ingestão deduplicada
5. Processamento despachado conforme INSTAGRAM_WEBHOOK_PROCESSING_MODE
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status

from api.connectors.instagram.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from api.connectors.instagram.webhook.verify import (
    WebhookChallengeError,
    verify_webhook_challenge,
)
from api.normalizers.instagram import extract_events
from api.routes.instagram.schemas import configuration_missing_response
from api.routes.instagram.webhook_runtime import dispatch_processing
from app.bootstrap import get_config_provider
from app.bootstrap.instagram_factory import create_ingest_events_use_case
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from config.settings import get_instagram_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def verify_webhook(request: Request) -> Response:
    """Verificação de webhook — responde ao challenge da Meta.

    O token esperado é o verify_token da configuração ativa.

    Returns:
        Texto do challenge ou erro 403.
    """
    hub_mode = request.query_params.get("hub.mode")
    hub_verify_token = request.query_params.get("hub.verify_token")
    hub_challenge = request.query_params.get("hub.challenge")

    config = await get_config_provider().get()

    try:
        challenge = verify_webhook_challenge(
            hub_mode=hub_mode,
            hub_verify_token=hub_verify_token,
            hub_challenge=hub_challenge,
            expected_token=config.verify_token if config else None,
        )
    except WebhookChallengeError as exc:
        logger.warning(
            "webhook_verification_failed",
            extra={"channel": "instagram", "error": str(exc)},
        )
        return Response(
            content="Forbidden",
            media_type="text/plain",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    logger.info("webhook_verified", extra={"channel": "instagram", "hub_mode": hub_mode})

    # Meta espera o challenge como texto puro
    return Response(
        content=challenge,
        media_type="text/plain",
        status_code=status.HTTP_200_OK,
    )


@router.post("/", response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebimento de notificações Instagram.

    Returns:
        `{"status": "received", "correlation_id", "inserted", "duplicates"}`
        ou Response de erro.
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))

    try:
        settings = get_instagram_settings()
        raw_body = await request.body()

        try:
            payload, _signature = parse_webhook_request(
                raw_body=raw_body,
                headers=dict(request.headers),
                app_secret=settings.app_secret or None,
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={
                    "channel": "instagram",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return Response(
                content="Unauthorized",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={
                    "channel": "instagram",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        if await get_config_provider().get() is None:
            logger.warning(
                "webhook_config_missing",
                extra={"channel": "instagram", "correlation_id": get_correlation_id()},
            )
            return configuration_missing_response()

        logger.info(
            "webhook_received",
            extra={
                "channel": "instagram",
                "correlation_id": get_correlation_id(),
                "payload_size": len(raw_body),
            },
        )

        result = await create_ingest_events_use_case().execute(
            extract_events(payload),
            correlation_id=get_correlation_id(),
        )

        # Sempre despacha: também drena pendentes deixados por execuções puladas
        await dispatch_processing(correlation_id=get_correlation_id(), settings=settings)

        return {
            "status": "received",
            "correlation_id": get_correlation_id(),
            "inserted": result.inserted,
            "duplicates": result.duplicates,
        }
    finally:
        reset_correlation_id(token)
