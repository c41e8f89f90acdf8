"""Agregador de settings de AI/LLM.

Re-exporta todas as settings de IA para uso externo.
"""

from __future__ import annotations

from config.settings.ai.assist import (
    AgentRuntimeBackend,
    AssistSettings,
    get_assist_settings,
)
from config.settings.ai.openai import (
    OpenAISettings,
    get_openai_settings,
)

__all__ = [
    "AgentRuntimeBackend",
    # Assist
    "AssistSettings",
    # OpenAI
    "OpenAISettings",
    "get_assist_settings",
    "get_openai_settings",
]
