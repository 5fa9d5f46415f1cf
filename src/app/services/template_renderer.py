"""Renderização de templates de DM.

Substitui o token {{username}} (espaços internos tolerados). Tokens
desconhecidos ficam como estão. Função pura e total.
"""

from __future__ import annotations

import re

USERNAME_FALLBACK = "there"

_USERNAME_TOKEN = re.compile(r"\{\{\s*username\s*\}\}")


def render_template(template: str, username: str | None = None) -> str:
    """Renderiza template com o username ou o fallback neutro.

    Args:
        template: Texto com tokens {{username}}
        username: Username do destinatário; None/vazio usa fallback

    Returns:
        Texto renderizado
    """
    value = username.strip() if username else ""
    replacement = value or USERNAME_FALLBACK
    # username inserido literalmente (sem backrefs)
    return _USERNAME_TOKEN.sub(lambda _match: replacement, template)
