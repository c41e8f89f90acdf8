"""Agregador de settings do serviço.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

# AI/LLM settings
from config.settings.ai import (
    AgentRuntimeBackend,
    AssistSettings,
    OpenAISettings,
    get_assist_settings,
    get_openai_settings,
)

# Base settings
from config.settings.base import (
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
)

__all__ = [
    "DEFAULT_SERVICE_NAME",
    "AgentRuntimeBackend",
    # AI
    "AssistSettings",
    # Base
    "BaseSettings",
    "Environment",
    "OpenAISettings",
    "get_assist_settings",
    "get_base_settings",
    "get_openai_settings",
]
