"""Serviços de aplicação.

Unidades reutilizáveis puras (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.template_renderer import USERNAME_FALLBACK, render_template

__all__ = [
    "USERNAME_FALLBACK",
    "render_template",
]
