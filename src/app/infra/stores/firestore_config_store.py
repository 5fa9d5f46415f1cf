"""Firestore Config Store — configuração ativa em documento único."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from google.api_core import exceptions as gcp_exceptions

from app.domain.automation_config import AutomationConfig
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)

CONFIG_COLLECTION = "automation_config"
ACTIVE_CONFIG_DOCUMENT = "active"


class FirestoreConfigStore:
    """Provedor de configuração usando Firestore (ConfigProviderProtocol).

    Sem cache: cada get() lê o documento atual.
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = CONFIG_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    def _document(self):
        return self._db.collection(self._collection).document(ACTIVE_CONFIG_DOCUMENT)

    async def get(self) -> AutomationConfig | None:
        return await asyncio.to_thread(self._get_sync)

    def _get_sync(self) -> AutomationConfig | None:
        try:
            doc = self._document().get()
        except gcp_exceptions.GoogleAPIError as exc:
            raise FirestoreUnavailableError("Falha ao ler configuração") from exc
        if not doc.exists:
            return None
        return AutomationConfig.from_firestore_dict(doc.to_dict() or {})

    async def replace(self, config: AutomationConfig) -> None:
        await asyncio.to_thread(self._replace_sync, config)

    def _replace_sync(self, config: AutomationConfig) -> None:
        try:
            # set() sem merge: substituição integral
            self._document().set(config.to_firestore_dict())
        except gcp_exceptions.GoogleAPIError as exc:
            logger.error("config_replace_failed", extra={"error_type": type(exc).__name__})
            raise FirestoreUnavailableError("Falha ao gravar configuração") from exc
        logger.info("automation_config_replaced")
