"""Erros de aplicação dos use cases Instagram."""

from __future__ import annotations


class ConfigurationMissingError(LookupError):
    """Configuração ativa ausente (credenciais não cadastradas)."""

    def __init__(self, message: str = "automation_config_missing") -> None:
        super().__init__(message)


class ProcessingInProgressError(RuntimeError):
    """Outra execução do processador detém o lock."""

    def __init__(self, message: str = "processing_in_progress") -> None:
        super().__init__(message)


class ProcessingLockLostError(ProcessingInProgressError):
    """O lock expirou ou passou para outra execução no meio da rodada.

    Os eventos ainda não visitados permanecem pendentes para a execução
    que detém o lock.
    """

    def __init__(self, message: str = "processing_lock_lost") -> None:
        super().__init__(message)
