import importlib

from config import Settings, get_settings


def test_app_package_exports_main():
    module = importlib.import_module("app")

    assert hasattr(module, "main"), "app package should expose main entrypoint"


def test_settings_defaults():
    settings = get_settings()

    assert settings.similarity_threshold == 0.8
    assert settings.default_page_size == 20
    assert settings.budget_kwargs == {"z_threshold": 2.0, "min_transactions": 5, "max_anomalies": 10}


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("SPLITSPEND_DEFAULT_PAGE_SIZE", "50")

    assert Settings().default_page_size == 50


def test_streamlit_secrets_override_settings(monkeypatch):
    import streamlit as st

    monkeypatch.setattr(st, "secrets", {"splitspend": {"max_anomalies": 3, "unknown": "x"}}, raising=False)
    get_settings.cache_clear()

    assert get_settings().max_anomalies == 3
