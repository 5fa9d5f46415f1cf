"""Observabilidade — correlation_id e métricas via logs estruturados.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_delivery
"""

from app.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_delivery,
    record_ingest,
    record_latency,
)

__all__ = [
    "generate_correlation_id",
    "get_correlation_id",
    "record_delivery",
    "record_ingest",
    "record_latency",
    "reset_correlation_id",
    "set_correlation_id",
]
