"""API — camada de borda do Instagram.

Responsabilidades:
- Receber webhooks da Meta (verificação e notificações)
- Validar assinaturas e payloads
- Extrair eventos FOLLOW/LIKE dos payloads
- Construir payloads para a Graph API
- Expor a API administrativa do painel

Subpastas:
- connectors/: adapters HTTP e webhook
- normalizers/: payload do webhook → NormalizedEvent
- payload_builders/: payloads de envio de DM
- routes/: endpoints HTTP (webhook, health, admin)

NÃO PODE conter: regras de automação, acesso direto a stores, orquestração de use cases.
"""
