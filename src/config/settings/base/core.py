"""Settings base do serviço: ambiente e endpoints de infraestrutura.

O ambiente decide duas coisas no autopilot: os backends default de
persistência/lock e se settings inválidas bloqueiam o boot.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

SERVICE_NAME_DEFAULT = "instagram-dm-autopilot"

# Ambientes em que `validate_runtime_settings` falha rápido
STRICT_ENVIRONMENTS: frozenset[str] = frozenset({"staging", "production"})

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
}


@dataclass(frozen=True)
class BaseSettings:
    """Configurações comuns ao webhook, painel e processador.

    Attributes:
        environment: development|staging|production
        service_name: Nome do serviço nos logs
        gcp_project: Projeto GCP dos stores Firestore
        redis_url: URL do Redis do lock de processamento
    """

    environment: Environment = "development"
    service_name: str = SERVICE_NAME_DEFAULT
    gcp_project: str = ""
    redis_url: str = ""

    @property
    def is_development(self) -> bool:
        """True quando backends em memória são permitidos."""
        return self.environment == "development"

    @property
    def is_strict(self) -> bool:
        """True quando settings inválidas devem impedir o boot."""
        return self.environment in STRICT_ENVIRONMENTS

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if self.environment not in ("development", *STRICT_ENVIRONMENTS):
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        return errors


def _parse_environment(env_str: str) -> Environment:
    """Normaliza ENVIRONMENT; valores desconhecidos caem em development."""
    return _ENVIRONMENT_ALIASES.get(env_str.strip().lower(), "development")


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", SERVICE_NAME_DEFAULT),
        gcp_project=os.getenv("GCP_PROJECT", os.getenv("GOOGLE_CLOUD_PROJECT", "")),
        redis_url=os.getenv("REDIS_URL", ""),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
