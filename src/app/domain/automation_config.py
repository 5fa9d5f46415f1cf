"""Configuração ativa da automação (singleton).

Credenciais, templates e toggles por tipo de evento. Substituída por
inteiro pela operação administrativa; lida a cada execução do processador.

A ramificação FOLLOW/LIKE fica em dados: KIND_BINDINGS mapeia cada
EventKind para o campo de toggle e o campo de template correspondentes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from app.domain.events import EventKind

DEFAULT_FOLLOWER_TEMPLATE = (
    "Hey {{username}}, thanks for the follow! "
    "Let me know what kind of content you'd like to see more of 👋"
)
DEFAULT_LIKE_TEMPLATE = (
    "Appreciate the love on my latest post, {{username}}! "
    "If you have any questions just drop them here."
)


@dataclass(frozen=True, slots=True)
class KindBinding:
    """Campos da configuração que governam um tipo de evento."""

    toggle_field: str
    template_field: str


KIND_BINDINGS: dict[EventKind, KindBinding] = {
    EventKind.FOLLOW: KindBinding(
        toggle_field="follower_automation_enabled",
        template_field="follower_message_template",
    ),
    EventKind.LIKE: KindBinding(
        toggle_field="like_automation_enabled",
        template_field="like_message_template",
    ),
}


class AutomationConfig(BaseModel):
    """Conjunto único de credenciais, templates e toggles ativos."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(..., min_length=1)
    business_account_id: str = Field(..., min_length=1)
    verify_token: str = Field(..., min_length=1)
    follower_message_template: str = Field(..., min_length=1)
    like_message_template: str = Field(..., min_length=1)
    follower_automation_enabled: StrictBool
    like_automation_enabled: StrictBool

    def is_enabled(self, kind: EventKind) -> bool:
        """Retorna o toggle de automação do tipo de evento."""
        return bool(getattr(self, KIND_BINDINGS[kind].toggle_field))

    def template_for(self, kind: EventKind) -> str:
        """Retorna o template configurado para o tipo de evento."""
        return str(getattr(self, KIND_BINDINGS[kind].template_field))

    def to_firestore_dict(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_firestore_dict(cls, data: dict[str, Any]) -> AutomationConfig:
        return cls.model_validate(data)
