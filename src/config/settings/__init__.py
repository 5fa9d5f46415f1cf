"""Agregador de settings do serviço.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    LockBackend,
    StoreBackend,
    StoreSettings,
    get_base_settings,
    get_store_settings,
)

# Infrastructure settings
from config.settings.infra import (
    FirestoreSettings,
    get_firestore_settings,
)

# Channel-specific settings
from config.settings.instagram import (
    INSTAGRAM_API_BASE_URL,
    INSTAGRAM_API_VERSION,
    InstagramSettings,
    get_instagram_settings,
)

__all__ = [
    # Constants
    "INSTAGRAM_API_BASE_URL",
    "INSTAGRAM_API_VERSION",
    # Base
    "BaseSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    # Channels
    "InstagramSettings",
    "LockBackend",
    "StoreBackend",
    "StoreSettings",
    "get_base_settings",
    "get_firestore_settings",
    "get_instagram_settings",
    "get_store_settings",
]
