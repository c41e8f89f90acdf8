"""Relay de chat simples sobre o runtime de agente.

Sem instrução de sistema e sem tools: repassa a resposta do modelo
(completa em `ask`, incremental em `relay_stream`).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ai.core.agent_runtime import (
    AgentSessionConfig,
    AssistantMessageDelta,
    SessionIdle,
    open_agent_session,
)
from ai.models.assist import AssistEvent, DeltaEvent, DoneEvent, ErrorEvent

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from ai.core.agent_runtime import AgentRuntimeProtocol

logger = logging.getLogger(__name__)


async def ask(
    runtime: AgentRuntimeProtocol,
    prompt: str,
    model: str | None = None,
) -> str | None:
    """Envia o prompt e aguarda a resposta completa.

    Returns:
        Texto da resposta ou None se vazio.

    Raises:
        AgentRuntimeError: em falha do runtime (tratada pela rota).
    """
    config = AgentSessionConfig(streaming=False, model=model)
    parts: list[str] = []
    async with open_agent_session(runtime, config) as session:
        async for event in session.stream_turn(prompt):
            if isinstance(event, AssistantMessageDelta):
                parts.append(event.content)
            elif isinstance(event, SessionIdle):
                break
    answer = "".join(parts)
    return answer or None


async def relay_stream(
    runtime: AgentRuntimeProtocol,
    prompt: str,
    model: str | None = None,
) -> AsyncIterator[AssistEvent]:
    """Repassa os deltas do modelo e termina com `done` ou `error`."""
    config = AgentSessionConfig(streaming=True, model=model)
    try:
        async with open_agent_session(runtime, config) as session:
            async for event in session.stream_turn(prompt):
                if isinstance(event, AssistantMessageDelta) and event.content:
                    yield DeltaEvent(text=event.content)
                elif isinstance(event, SessionIdle):
                    break
    except Exception as exc:
        logger.warning("chat_stream_failed", extra={"error_type": type(exc).__name__})
        yield ErrorEvent(message=str(exc) or "Unknown error")
        return
    yield DoneEvent(success=True)
