# -*- coding: utf-8 -*-
import os
import pytest


@pytest.fixture(autouse=True)
def _isolate_env_and_cache(monkeypatch):
    """
    Aísla variables de entorno y limpia el caché de get_settings() en cada test.
    """
    # Asegura que no heredamos PYTHON_ENV ni secretos del shell del dev
    for k in list(os.environ.keys()):
        if k.startswith(("DB_", "STRIPE_", "CORS_", "APP_", "HTTP_", "LOG_", "PAYMENTS_")):
            monkeypatch.delenv(k, raising=False)
    monkeypatch.setenv("PYTHON_ENV", "development")

    import app.shared.config.config_loader as config_loader
    import app.shared.config.settings_payments as settings_payments

    config_loader.get_settings.cache_clear()
    settings_payments.reset_payments_settings()

    yield

    # Limpieza final
    config_loader.get_settings.cache_clear()
    settings_payments.reset_payments_settings()
# Fin del archivo tests/shared/config/conftest.py
