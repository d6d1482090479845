import pytest
from pydantic import ValidationError

from gpt_proxy.settings import Settings


def test_defaults_match_session_limits(monkeypatch):
    for name in ("MAX_TOKENS_PER_SESSION", "MAX_MESSAGES_PER_SESSION", "SESSION_EXPIRY_HOURS"):
        monkeypatch.delenv(name, raising=False)

    cfg = Settings(_env_file=None)

    assert cfg.max_tokens_per_session == 100000
    assert cfg.max_messages_per_session == 100
    assert cfg.session_expiry_hours == 24


def test_limits_overridable_from_env(monkeypatch):
    monkeypatch.setenv("MAX_MESSAGES_PER_SESSION", "10")
    monkeypatch.setenv("SESSION_EXPIRY_HOURS", "0.5")

    cfg = Settings(_env_file=None)

    assert cfg.max_messages_per_session == 10
    assert cfg.session_expiry_hours == 0.5


def test_rejects_message_limit_below_two(monkeypatch):
    monkeypatch.setenv("MAX_MESSAGES_PER_SESSION", "1")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
