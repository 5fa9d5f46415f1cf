"""Registro de métricas via structured logging.

As métricas são logs estruturados agregáveis depois (BigQuery, Cloud
Logging metrics, etc.).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Entrega: contador de tentativas de DM por tipo de evento e status
- Ingestão: contador de eventos recebidos/inseridos/duplicados
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "event_processor")
        operation: Nome da operação (ex: "process_pending")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_delivery(
    kind: str,
    status: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra uma tentativa de envio de DM resolvida.

    Args:
        kind: Tipo do evento (FOLLOW|LIKE)
        status: Status final do log (SENT|FAILED)
        latency_ms: Duração da chamada ao cliente de entrega
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_delivery",
        extra={
            "metric_type": "delivery",
            "component": "delivery_client",
            "message_kind": kind,
            "status": status,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_ingest(
    received: int,
    inserted: int,
    duplicates: int,
    correlation_id: str | None = None,
) -> None:
    """Registra contadores de uma ingestão de webhook."""
    logger.info(
        "metric_ingest",
        extra={
            "metric_type": "ingest",
            "component": "webhook",
            "received": received,
            "inserted": inserted,
            "duplicates": duplicates,
            "correlation_id": correlation_id,
        },
    )
