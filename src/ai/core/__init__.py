"""Core do módulo AI.

Exporta o protocolo do runtime de agente e o runtime mock.
A implementação OpenAIAgentRuntime está em app/infra/ai/ (IO).
"""

from ai.core.agent_runtime import (
    AgentEvent,
    AgentRuntimeProtocol,
    AgentSessionConfig,
    AgentSessionProtocol,
    AssistantMessageDelta,
    SessionIdle,
    ToolCallStarted,
    ToolDefinition,
    open_agent_session,
)
from ai.core.mock_runtime import MockAgentRuntime, MockAgentSession

__all__ = [
    "AgentEvent",
    "AgentRuntimeProtocol",
    "AgentSessionConfig",
    "AgentSessionProtocol",
    "AssistantMessageDelta",
    "MockAgentRuntime",
    "MockAgentSession",
    "SessionIdle",
    "ToolCallStarted",
    "ToolDefinition",
    "open_agent_session",
]
