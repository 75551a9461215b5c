from __future__ import annotations

import logging

import pytest

from castlink.config import (
    ConfigurationError,
    get_log_level,
    get_reconciliation_config,
    optional_env_var,
)
from castlink.domain.reconciliation import DEFAULT_MEMBER_ROLE


def test_optional_env_var_returns_stripped_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    assert optional_env_var("EXAMPLE_VAR", "fallback") == "value"


def test_optional_env_var_falls_back_on_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", " ")

    assert optional_env_var("EXAMPLE_VAR", "fallback") == "fallback"


def test_optional_env_var_falls_back_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_VAR", raising=False)

    assert optional_env_var("EXAMPLE_VAR", "fallback") == "fallback"


def test_default_member_role_can_be_overridden(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CASTLINK_DEFAULT_MEMBER_ROLE", raising=False)
    assert get_reconciliation_config().default_member_role == DEFAULT_MEMBER_ROLE

    monkeypatch.setenv("CASTLINK_DEFAULT_MEMBER_ROLE", "Ensemble")
    assert get_reconciliation_config().default_member_role == "Ensemble"


def test_log_level_is_read_by_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CASTLINK_LOG_LEVEL", "debug")
    assert get_log_level() == logging.DEBUG

    monkeypatch.setenv("CASTLINK_LOG_LEVEL", "chatty")
    with pytest.raises(ConfigurationError):
        get_log_level()
