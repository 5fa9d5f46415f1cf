"""Normalizers por canal — conversão de payloads externos para modelos internos.

Estrutura:
- instagram/: notificações de seguidores e curtidas (FOLLOW/LIKE)
"""

from .instagram import extract_events, iter_follow_events, iter_like_events

__all__ = [
    "extract_events",
    "iter_follow_events",
    "iter_like_events",
]
