from __future__ import annotations

import pytest

from config import env_flag, env_float, env_int, require_env
from errors import FatalConfig


def test_require_env_returns_value(monkeypatch):
    monkeypatch.setenv("MOVIE_BOT_TEST_TOKEN", "abc")

    assert require_env("MOVIE_BOT_TEST_TOKEN") == "abc"


def test_require_env_uses_fallback_name(monkeypatch):
    monkeypatch.delenv("MOVIE_BOT_PRIMARY", raising=False)
    monkeypatch.setenv("MOVIE_BOT_FALLBACK", "legacy")

    assert require_env("MOVIE_BOT_PRIMARY", "MOVIE_BOT_FALLBACK") == "legacy"


def test_missing_credential_is_fatal(monkeypatch):
    monkeypatch.delenv("MOVIE_BOT_MISSING", raising=False)

    with pytest.raises(FatalConfig, match="MOVIE_BOT_MISSING"):
        require_env("MOVIE_BOT_MISSING")


def test_empty_credential_is_fatal(monkeypatch):
    monkeypatch.setenv("MOVIE_BOT_EMPTY", "")

    with pytest.raises(FatalConfig):
        require_env("MOVIE_BOT_EMPTY")


def test_env_float(monkeypatch):
    monkeypatch.setenv("MOVIE_BOT_TIMEOUT", "2.5")
    assert env_float("MOVIE_BOT_TIMEOUT", 10.0) == 2.5

    monkeypatch.delenv("MOVIE_BOT_TIMEOUT")
    assert env_float("MOVIE_BOT_TIMEOUT", 10.0) == 10.0

    monkeypatch.setenv("MOVIE_BOT_TIMEOUT", "soon")
    with pytest.raises(FatalConfig):
        env_float("MOVIE_BOT_TIMEOUT", 10.0)


@pytest.mark.parametrize("value,expected", [("1", True), ("true", True), ("Yes", True), ("0", False), ("off", False)])
def test_env_flag(monkeypatch, value, expected):
    monkeypatch.setenv("MOVIE_BOT_FLAG", value)

    assert env_flag("MOVIE_BOT_FLAG") is expected


def test_env_int(monkeypatch):
    monkeypatch.setenv("MOVIE_BOT_PORT", "3000")
    assert env_int("MOVIE_BOT_PORT", None) == 3000

    monkeypatch.delenv("MOVIE_BOT_PORT")
    assert env_int("MOVIE_BOT_PORT", None) is None

    monkeypatch.setenv("MOVIE_BOT_PORT", "http")
    with pytest.raises(FatalConfig, match="MOVIE_BOT_PORT must be a number"):
        env_int("MOVIE_BOT_PORT", None)
