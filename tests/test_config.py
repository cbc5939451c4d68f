"""Tests for environment-driven settings."""

from contactbook.config import build_service, load_settings


def test_defaults(monkeypatch):
    for name in (
        "CONTACTBOOK_OSASCRIPT",
        "CONTACTBOOK_SCRIPT_TIMEOUT",
        "CONTACTBOOK_LOOKUP_TIMEOUT",
        "CONTACTBOOK_LIST_LIMIT",
        "CONTACTBOOK_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.osascript == "/usr/bin/osascript"
    assert settings.script_timeout == 120.0
    assert settings.lookup_timeout == 180.0
    assert settings.list_limit == 50
    assert settings.log_level == "INFO"


def test_overrides_and_invalid_values(monkeypatch):
    monkeypatch.setenv("CONTACTBOOK_SCRIPT_TIMEOUT", "30")
    monkeypatch.setenv("CONTACTBOOK_LOOKUP_TIMEOUT", "soon")
    monkeypatch.setenv("CONTACTBOOK_LIST_LIMIT", "-4")
    monkeypatch.setenv("CONTACTBOOK_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.script_timeout == 30.0
    assert settings.lookup_timeout == 180.0
    assert settings.list_limit == 50
    assert settings.log_level == "DEBUG"


def test_build_service(monkeypatch):
    monkeypatch.setenv("CONTACTBOOK_LIST_LIMIT", "7")
    service = build_service()
    assert service._list_limit == 7


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("CONTACTBOOK_LOG_LEVEL", "verbose")
    assert load_settings().log_level == "INFO"
    monkeypatch.setenv("CONTACTBOOK_LOG_LEVEL", "warning")
    assert load_settings().log_level == "WARNING"


def test_non_finite_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("CONTACTBOOK_LOOKUP_TIMEOUT", "inf")
    assert load_settings().lookup_timeout == 180.0
