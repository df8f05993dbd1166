import logging

from voter_api.config import Settings
from voter_api.logging_config import setup_logging


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.PORT == 1080
    assert settings.effective_log_level == "INFO"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("DEBUG", "true")

    settings = Settings(_env_file=None)

    assert settings.PORT == 9000
    assert settings.effective_log_level == "DEBUG"


def test_setup_logging_runs_once(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    setup_logging("warning")
    setup_logging("debug")

    assert len(root.handlers) == 1
    assert root.level == logging.WARNING
