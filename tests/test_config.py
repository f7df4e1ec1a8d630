from __future__ import annotations

import logging

import pytest

from config import load_settings
from logger import setup_logger


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("PORT", "HOST", "LINKBIO_LATENCY_SCALE", "LINKBIO_VALIDATE", "LINKBIO_SHARE_HOST", "LINKBIO_CORS_ORIGINS", "LINKBIO_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    settings = load_settings()
    assert settings.port == 8000
    assert settings.latency_scale == 1.0
    assert settings.validate is True
    assert settings.share_host == "linkbio.com"
    assert settings.cors_origins == ["*"]


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("LINKBIO_LATENCY_SCALE", "0")
    monkeypatch.setenv("LINKBIO_VALIDATE", "false")
    monkeypatch.setenv("LINKBIO_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("LINKBIO_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.port == 9001
    assert settings.latency_scale == 0
    assert settings.validate is False
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.log_level == "DEBUG"


def test_bad_latency_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINKBIO_LATENCY_SCALE", "fast")
    assert load_settings().latency_scale == 1.0


def test_setup_logger_idempotent() -> None:
    log = setup_logger("linkbio.test")
    handlers = list(log.handlers)
    again = setup_logger("linkbio.test", level=logging.DEBUG)
    assert again is log
    assert again.handlers == handlers
    assert again.level == logging.DEBUG


def test_bad_port_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "eighty")
    assert load_settings().port == 8000
