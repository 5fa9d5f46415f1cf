"""Settings do Firestore.

Configurações para Google Cloud Firestore (stores duráveis).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class FirestoreSettings:
    """Configurações do Firestore.

    Attributes:
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        collection_events: Collection de eventos Instagram ingeridos
        collection_message_logs: Collection de logs de envio de DM
        collection_config: Collection da configuração ativa (documento único)
    """

    project_id: str = ""
    collection_events: str = "instagram_events"
    collection_message_logs: str = "message_logs"
    collection_config: str = "automation_config"

    def validate(self, gcp_project: str) -> list[str]:
        """Valida configurações do Firestore.

        Args:
            gcp_project: Projeto GCP padrão para fallback.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        effective_project = self.project_id or gcp_project

        if not effective_project:
            errors.append(
                "FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado"
            )

        return errors


def _load_firestore_from_env() -> FirestoreSettings:
    """Carrega FirestoreSettings de variáveis de ambiente."""
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        collection_events=os.getenv("FIRESTORE_COLLECTION_EVENTS", "instagram_events"),
        collection_message_logs=os.getenv(
            "FIRESTORE_COLLECTION_MESSAGE_LOGS", "message_logs"
        ),
        collection_config=os.getenv("FIRESTORE_COLLECTION_CONFIG", "automation_config"),
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Retorna instância cacheada de FirestoreSettings."""
    return _load_firestore_from_env()
