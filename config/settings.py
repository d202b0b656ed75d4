"""Centralised configuration handling for SplitSpend."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping

import streamlit as st
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PAGE_SIZE = 20
DEFAULT_SIMILARITY_THRESHOLD = 0.8


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    similarity_threshold: float = Field(DEFAULT_SIMILARITY_THRESHOLD, gt=0, lt=1)
    default_page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1)
    max_upload_mb: float = Field(5.0, gt=0)
    anomaly_z_threshold: float = Field(2.0, gt=0)
    anomaly_min_transactions: int = Field(5, ge=2)
    max_anomalies: int = Field(10, ge=1)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="SPLITSPEND_", extra="ignore")

    @property
    def budget_kwargs(self) -> dict[str, Any]:
        return {
            "z_threshold": self.anomaly_z_threshold,
            "min_transactions": self.anomaly_min_transactions,
            "max_anomalies": self.max_anomalies,
        }


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    secrets_section = _streamlit_section("splitspend") or {}
    overrides = {key: value for key, value in secrets_section.items() if key in Settings.model_fields}
    return Settings(**overrides)
