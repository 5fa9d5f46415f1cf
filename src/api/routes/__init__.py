"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook, API administrativa, health)
- Validação inicial de request (headers, query params, body)
- Delegação para connectors/use_cases
- Respostas HTTP apropriadas

Estrutura:
- routes/instagram/: webhook Meta e API do painel
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
