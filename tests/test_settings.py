"""Unit tests for environment-driven settings."""

import logging

from facturier.config.settings import (
    get_app_name,
    get_app_version,
    get_default_currency,
    get_default_output_dir,
    get_layout_profile_name,
    get_log_level,
)
from facturier.models.currency import EUR, TND


def test_app_name_and_version():
    assert get_app_name() == "Facturier"
    assert get_app_version() == "0.1.0"


def test_default_currency(monkeypatch):
    monkeypatch.delenv("FACTURIER_DEFAULT_CURRENCY", raising=False)
    assert get_default_currency() is TND

    monkeypatch.setenv("FACTURIER_DEFAULT_CURRENCY", " eur ")
    assert get_default_currency() is EUR


def test_invalid_default_currency_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("FACTURIER_DEFAULT_CURRENCY", "USD")
    with caplog.at_level(logging.WARNING):
        assert get_default_currency() is TND
    assert "Invalid default currency" in caplog.text


def test_output_dir_from_environment(monkeypatch, tmp_path):
    target = tmp_path / "pdf"
    monkeypatch.setenv("FACTURIER_OUTPUT_DIR", str(target))

    assert get_default_output_dir() == target
    assert target.is_dir()


def test_layout_profile_name(monkeypatch):
    monkeypatch.delenv("FACTURIER_LAYOUT_PROFILE", raising=False)
    assert get_layout_profile_name() == "default"

    monkeypatch.setenv("FACTURIER_LAYOUT_PROFILE", "compact")
    assert get_layout_profile_name() == "compact"

    monkeypatch.setenv("FACTURIER_LAYOUT_PROFILE", "  ")
    assert get_layout_profile_name() == "default"


def test_log_level(monkeypatch):
    monkeypatch.delenv("FACTURIER_LOG_LEVEL", raising=False)
    assert get_log_level() == logging.WARNING

    monkeypatch.setenv("FACTURIER_LOG_LEVEL", "debug")
    assert get_log_level() == logging.DEBUG

    monkeypatch.setenv("FACTURIER_LOG_LEVEL", "bavard")
    assert get_log_level() == logging.WARNING
