"""Erros retornados pela Graph API (Instagram Messaging)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Códigos Graph API que indicam limite de envio atingido
RATE_LIMIT_CODES = frozenset({4, 17, 32, 613})


@dataclass(frozen=True)
class InstagramApiError:
    """Erro estruturado do corpo `{"error": {...}}` da Meta."""

    error_type: str
    error_code: int
    error_message: str
    error_subcode: int | None = None

    @property
    def is_rate_limited(self) -> bool:
        return self.error_code in RATE_LIMIT_CODES


def parse_meta_error(response_data: Any) -> InstagramApiError | None:
    """Extrai erro do response da Meta.

    Args:
        response_data: JSON decodificado do response

    Returns:
        InstagramApiError se houver `error`, None caso contrário
    """
    if not isinstance(response_data, dict):
        return None
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    code = error_obj.get("code")
    subcode = error_obj.get("error_subcode")
    return InstagramApiError(
        error_type=str(error_obj.get("type") or "unknown"),
        error_code=code if isinstance(code, int) else 0,
        error_message=str(error_obj.get("message") or "meta_api_error"),
        error_subcode=subcode if isinstance(subcode, int) else None,
    )
