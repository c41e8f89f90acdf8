"""Factory do runtime de agente conforme AGENT_RUNTIME_BACKEND."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.settings import get_assist_settings, get_openai_settings

if TYPE_CHECKING:
    from ai.core.agent_runtime import AgentRuntimeProtocol
    from config.settings import AssistSettings, OpenAISettings

logger = logging.getLogger(__name__)


def create_agent_runtime(
    assist_settings: AssistSettings | None = None,
    openai_settings: OpenAISettings | None = None,
) -> AgentRuntimeProtocol:
    """Cria o runtime (ainda parado; o lifespan chama `start`).

    Returns:
        OpenAIAgentRuntime ou MockAgentRuntime.
    """
    assist = assist_settings or get_assist_settings()

    if assist.runtime_backend == "mock":
        from ai.core.mock_runtime import MockAgentRuntime

        logger.info("agent_runtime_selected", extra={"backend": "mock"})
        return MockAgentRuntime()

    from app.infra.ai.openai_agent_runtime import OpenAIAgentRuntime

    logger.info("agent_runtime_selected", extra={"backend": "openai"})
    return OpenAIAgentRuntime(
        openai_settings or get_openai_settings(),
        max_tool_rounds=assist.max_tool_rounds,
    )
