"""Exceções de infraestrutura compartilhadas entre stores e locks."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura (storage, lock, rede interna)."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis (lock de processamento)."""


class FirestoreUnavailableError(InfrastructureError):
    """Falha ao ler/gravar eventos, logs ou configuração no Firestore."""
