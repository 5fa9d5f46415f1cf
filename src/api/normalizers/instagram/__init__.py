"""Normalizer Instagram — notificações de seguidores e curtidas.

Responsabilidades:
- Extrair eventos FOLLOW/LIKE do payload webhook
- Derivar source_event_key determinística (dedupe de reentregas)
"""

from .event_key import compute_source_event_key
from .extractor import FIELD_KINDS, extract_events, iter_follow_events, iter_like_events

__all__ = [
    "FIELD_KINDS",
    "compute_source_event_key",
    "extract_events",
    "iter_follow_events",
    "iter_like_events",
]
