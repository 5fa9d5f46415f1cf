"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, inicializa
dependências e conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_event_store

    # Na inicialização do serviço
    initialize_app()

    # Obter stores (singletons por processo)
    event_store = get_event_store()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_firestore_settings,
    get_instagram_settings,
    get_store_settings,
)

# Nome do serviço para logs e métricas
SERVICE_NAME = "instagram_dm_autopilot"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.

    Configura:
    - Logging estruturado JSON com correlation_id
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (logging em DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())

    store = get_store_settings()
    errors.extend(f"store: {error}" for error in store.validate(base))

    instagram = get_instagram_settings()
    errors.extend(f"instagram: {error}" for error in instagram.validate())

    # O lock é renovado entre eventos; um único envio precisa caber no TTL
    if 0 < store.lock_ttl_seconds <= instagram.max_delivery_seconds:
        errors.append(
            "store: PROCESSING_LOCK_TTL_SECONDS deve exceder a duração máxima de um envio "
            f"({instagram.max_delivery_seconds:g}s)"
        )

    if store.backend == "firestore":
        firestore_errors = get_firestore_settings().validate(base.gcp_project)
        errors.extend(f"firestore: {error}" for error in firestore_errors)

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.is_strict:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_event_store():
    """Obtém Event Store (singleton).

    Returns:
        EventStoreProtocol configurado conforme env
    """
    from app.bootstrap.dependencies import create_event_store
    return create_event_store()


@lru_cache(maxsize=1)
def get_message_log_store():
    """Obtém MessageLog Store (singleton)."""
    from app.bootstrap.dependencies import create_message_log_store
    return create_message_log_store()


@lru_cache(maxsize=1)
def get_config_provider():
    """Obtém provedor da configuração ativa (singleton)."""
    from app.bootstrap.dependencies import create_config_provider
    return create_config_provider()


@lru_cache(maxsize=1)
def get_processing_lock():
    """Obtém lock do processador (singleton)."""
    from app.bootstrap.dependencies import create_processing_lock
    return create_processing_lock()


@lru_cache(maxsize=1)
def get_delivery_client():
    """Obtém cliente de entrega Graph API (singleton)."""
    from app.bootstrap.instagram_adapters import GraphApiDeliveryClient
    return GraphApiDeliveryClient()
