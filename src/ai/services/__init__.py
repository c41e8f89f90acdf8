"""Serviços de IA: orquestrador do assistente e relay de chat."""

from ai.services.assist_orchestrator import (
    DEFAULT_RESULT_MESSAGE,
    PARSE_FAILURE_MESSAGE,
    AssistOrchestrator,
    AssistSession,
    AssistState,
)
from ai.services.chat_relay import ask, relay_stream

__all__ = [
    "DEFAULT_RESULT_MESSAGE",
    "PARSE_FAILURE_MESSAGE",
    "AssistOrchestrator",
    "AssistSession",
    "AssistState",
    "ask",
    "relay_stream",
]
