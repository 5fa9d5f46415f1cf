"""Modelos de request/response e erros estruturados das rotas Instagram.

Requests aceitam snake_case e camelCase (painel legado envia camelCase).
"""

from __future__ import annotations

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, ValidationError
from pydantic.alias_generators import to_camel

from app.domain.automation_config import AutomationConfig
from app.domain.events import EventKind

VALIDATION_ERROR = "VALIDATION_ERROR"
CONFIGURATION_MISSING = "CONFIGURATION_MISSING"
PROCESSING_IN_PROGRESS = "PROCESSING_IN_PROGRESS"
DELIVERY_FAILED = "DELIVERY_FAILED"


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class ManualSendRequest(_RequestModel):
    """Body de POST /api/messages/send."""

    recipient_id: str = Field(..., min_length=1)
    message: str | None = None
    message_kind: EventKind | None = Field(
        default=None,
        validation_alias=AliasChoices("message_kind", "messageKind", "messageType"),
    )
    username: str | None = None


class SettingsRequest(_RequestModel):
    """Body de POST /api/settings (substituição integral, todos obrigatórios)."""

    access_token: str = Field(..., min_length=1)
    business_account_id: str = Field(..., min_length=1)
    verify_token: str = Field(..., min_length=1)
    follower_message_template: str = Field(..., min_length=1)
    like_message_template: str = Field(..., min_length=1)
    follower_automation_enabled: StrictBool
    like_automation_enabled: StrictBool

    def to_config(self) -> AutomationConfig:
        return AutomationConfig(**self.model_dump())


MASK_PREFIX = "****"
MASKED_SECRET_FIELDS = ("access_token", "verify_token")


class MaskedSecretMismatchError(ValueError):
    """Segredo mascarado no body não corresponde ao valor armazenado."""

    def __init__(self, field: str) -> None:
        super().__init__(f"masked_secret_mismatch: {field}")
        self.field = field


def mask_secret(value: str) -> str:
    """Mascara segredo mantendo os 4 últimos caracteres."""
    if len(value) <= 4:
        return MASK_PREFIX
    return f"{MASK_PREFIX}{value[-4:]}"


def resolve_masked_secrets(
    config: AutomationConfig,
    current: AutomationConfig | None,
) -> AutomationConfig:
    """Restaura segredos que o painel devolveu mascarados.

    O GET entrega `access_token`/`verify_token` mascarados; um POST que
    reenvia a máscara de volta mantém o segredo armazenado.

    Raises:
        MaskedSecretMismatchError: Máscara sem segredo armazenado
            correspondente (nada a preservar)
    """
    restored: dict[str, str] = {}
    for field in MASKED_SECRET_FIELDS:
        posted = getattr(config, field)
        if not posted.startswith(MASK_PREFIX):
            continue
        stored = getattr(current, field) if current is not None else None
        if stored is None or posted != mask_secret(stored):
            raise MaskedSecretMismatchError(field)
        restored[field] = stored
    return config.model_copy(update=restored) if restored else config


def config_to_response(config: AutomationConfig) -> dict[str, Any]:
    """Serializa configuração ativa com segredos mascarados."""
    data = config.model_dump()
    for field in MASKED_SECRET_FIELDS:
        data[field] = mask_secret(data[field])
    return data


def error_response(
    code: str,
    message: str,
    status_code: int,
    **extra: Any,
) -> JSONResponse:
    """Resposta de erro `{"error": {"code", "message", ...}}`."""
    return JSONResponse(
        content={"error": {"code": code, "message": message, **extra}},
        status_code=status_code,
    )


def validation_error_response(exc: ValidationError | ValueError) -> JSONResponse:
    """422 com detalhes por campo (sem valores de entrada)."""
    details: list[dict[str, Any]] = []
    if isinstance(exc, ValidationError):
        details = [
            {"field": ".".join(str(part) for part in err["loc"]), "reason": err["type"]}
            for err in exc.errors()
        ]
    return error_response(
        VALIDATION_ERROR,
        "invalid_request_body",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        details=details,
    )


def masked_secret_mismatch_response(exc: MaskedSecretMismatchError) -> JSONResponse:
    return error_response(
        VALIDATION_ERROR,
        "invalid_request_body",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        details=[{"field": exc.field, "reason": "masked_secret_mismatch"}],
    )


def configuration_missing_response() -> JSONResponse:
    return error_response(
        CONFIGURATION_MISSING,
        "automation_config_missing",
        status.HTTP_400_BAD_REQUEST,
    )
