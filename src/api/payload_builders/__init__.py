"""Payload builders por canal — construção de payloads para APIs externas.

Estrutura:
- instagram/: Instagram Messaging API (DM de texto)
"""

__all__: list[str] = []
