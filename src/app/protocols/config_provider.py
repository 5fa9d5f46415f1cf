"""Protocolo do provedor da configuração ativa."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.automation_config import AutomationConfig


class ConfigProviderProtocol(Protocol):
    """Contrato para ler e substituir a configuração singleton.

    Nunca cachear entre execuções: toggles devem refletir o estado atual.
    """

    async def get(self) -> AutomationConfig | None:
        """Retorna configuração ativa ou None se não configurada."""
        ...

    async def replace(self, config: AutomationConfig) -> None:
        """Substitui a configuração inteira."""
        ...
