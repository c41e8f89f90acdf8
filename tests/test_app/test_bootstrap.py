"""Testes do composition root (app/bootstrap)."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from pythonjsonlogger.json import JsonFormatter

from ai.core.mock_runtime import MockAgentRuntime
from app.bootstrap import (
    collect_settings_errors,
    create_agent_runtime,
    initialize_app,
    validate_runtime_settings,
)
from app.infra.ai.openai_agent_runtime import OpenAIAgentRuntime
from app.observability import correlation_scope, get_correlation_id
from config.logging import CorrelationIdFilter
from config.settings import (
    AssistSettings,
    OpenAISettings,
    get_assist_settings,
    get_base_settings,
    get_openai_settings,
)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        "ENVIRONMENT",
        "AGENT_RUNTIME_BACKEND",
        "OPENAI_API_KEY",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    for getter in (get_base_settings, get_assist_settings, get_openai_settings):
        getter.cache_clear()
    yield
    for getter in (get_base_settings, get_assist_settings, get_openai_settings):
        getter.cache_clear()


class TestInitializeApp:
    def test_json_output_by_default(self) -> None:
        initialize_app()
        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, JsonFormatter)
        assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)

    def test_text_output_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_FORMAT", "text")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        initialize_app()
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)
        assert "%(correlation_id)s" in root.handlers[0].formatter._fmt


class TestCreateAgentRuntime:
    def test_mock_backend(self) -> None:
        runtime = create_agent_runtime(AssistSettings(runtime_backend="mock"))
        assert isinstance(runtime, MockAgentRuntime)
        assert runtime.is_running is False

    def test_openai_backend(self) -> None:
        runtime = create_agent_runtime(
            AssistSettings(runtime_backend="openai", max_tool_rounds=2),
            OpenAISettings(api_key="sk-test"),
        )
        assert isinstance(runtime, OpenAIAgentRuntime)
        assert runtime.is_running is False

    def test_backend_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AGENT_RUNTIME_BACKEND", "mock")
        assert isinstance(create_agent_runtime(), MockAgentRuntime)


class TestValidateRuntimeSettings:
    def test_openai_key_required_only_for_openai_backend(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        assert "openai: OPENAI_API_KEY não configurado" in collect_settings_errors()

        monkeypatch.setenv("AGENT_RUNTIME_BACKEND", "mock")
        get_assist_settings.cache_clear()
        assert collect_settings_errors() == []

    def test_development_only_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING)
        validate_runtime_settings()
        assert any(r.getMessage() == "settings_validation_failed" for r in caplog.records)

    def test_strict_environment_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        with pytest.raises(RuntimeError, match="Configuração inválida para production"):
            validate_runtime_settings()

    def test_strict_environment_with_valid_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        validate_runtime_settings()


class TestCorrelationScope:
    def test_sets_and_restores(self) -> None:
        assert get_correlation_id() == ""
        with correlation_scope("req-1") as correlation_id:
            assert correlation_id == "req-1"
            assert get_correlation_id() == "req-1"
        assert get_correlation_id() == ""

    def test_generates_when_missing(self) -> None:
        with correlation_scope() as correlation_id:
            assert len(correlation_id) == 32
