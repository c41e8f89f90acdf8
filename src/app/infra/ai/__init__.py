"""Implementações concretas de IO para IA.

ai/ não faz IO direto; o runtime real do agente vive aqui.
"""

from app.infra.ai.openai_agent_runtime import OpenAIAgentRuntime, OpenAIAgentSession

__all__ = [
    "OpenAIAgentRuntime",
    "OpenAIAgentSession",
]
