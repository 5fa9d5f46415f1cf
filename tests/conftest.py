"""Configuração do pytest para o projeto Instagram DM Autopilot."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


def _clear_cached_singletons() -> None:
    import app.bootstrap as bootstrap
    from api.routes.instagram import webhook_runtime
    from api.routes.instagram.processing_scheduler import ProcessingScheduler
    from app.bootstrap.clients import create_async_redis_client, create_firestore_client
    from config.settings import (
        get_base_settings,
        get_firestore_settings,
        get_instagram_settings,
        get_store_settings,
    )

    for cached in (
        get_base_settings,
        get_store_settings,
        get_firestore_settings,
        get_instagram_settings,
        create_async_redis_client,
        create_firestore_client,
        bootstrap.get_event_store,
        bootstrap.get_message_log_store,
        bootstrap.get_config_provider,
        bootstrap.get_processing_lock,
        bootstrap.get_delivery_client,
    ):
        cached.cache_clear()
    webhook_runtime._process_use_case = None
    webhook_runtime._scheduler = ProcessingScheduler()


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch):
    """Ambiente de desenvolvimento com backends em memória e caches limpos."""
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.setenv("PROCESSING_LOCK_BACKEND", "memory")
    monkeypatch.setenv("INSTAGRAM_APP_SECRET", "test-app-secret")
    monkeypatch.delenv("INSTAGRAM_WEBHOOK_PROCESSING_MODE", raising=False)
    monkeypatch.delenv("REDIS_URL", raising=False)
    _clear_cached_singletons()
    yield
    _clear_cached_singletons()
