"""Connectors — adapters de borda para APIs externas.

Estrutura:
- instagram/: Graph API (envio de DM) e webhook (assinatura, challenge)
"""

__all__: list[str] = []
