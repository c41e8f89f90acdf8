"""Orquestrador do assistente de preenchimento do formulário.

Fluxo por requisição (estados de AssistState):
    IDLE → PROMPT_BUILT → SESSION_OPEN → STREAMING → COMPLETED
                                 └──────────┴────────→ FAILED

1. Monta o prompt do turno com o estado atual do formulário
2. Abre sessão de agente (streaming, instrução de sistema, tool de hospedagem)
3. Repassa deltas e avisos de tool call na ordem recebida
4. Ao fim do turno: extrai JSON → valida campos → evento `result` + `done`

Falhas de runtime viram um único evento `error`; falha de parse não é erro,
vira `result` com a resposta bruta como mensagem. Cancelamento (cliente
desconectou) propaga depois de liberar a sessão.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import aclosing
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ai.core.agent_runtime import (
    AgentSessionConfig,
    AssistantMessageDelta,
    SessionIdle,
    ToolCallStarted,
    open_agent_session,
)
from ai.models.assist import (
    AssistEvent,
    DeltaEvent,
    DoneEvent,
    ErrorEvent,
    ResultEvent,
    ToolCallEvent,
)
from ai.prompts.form_assist_prompt import FORM_ASSIST_SYSTEM_PROMPT, format_form_assist_prompt
from ai.rules.field_schema import DEFAULT_FIELD_SCHEMA
from ai.tools.accommodations import ACCOMMODATIONS_TOOL
from ai.utils._json_extractor import extract_json_from_response
from ai.utils.field_validator import validate_fields
from config.logging import log_fallback
from utils.errors import AgentRuntimeClosedError, AgentTurnTimeoutError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from ai.core.agent_runtime import AgentRuntimeProtocol, AgentSessionProtocol, ToolDefinition
    from ai.models.assist import AssistRequest
    from ai.rules.field_schema import FieldSchema

logger = logging.getLogger(__name__)

DEFAULT_RESULT_MESSAGE = "I've updated the form based on your input."
PARSE_FAILURE_MESSAGE = (
    "I couldn't understand that. Please describe yourself for the registration form."
)
DEFAULT_TURN_TIMEOUT_SECONDS = 120.0


class AssistState(Enum):
    """Estados de uma interação de assistência."""

    IDLE = "idle"
    PROMPT_BUILT = "prompt_built"
    SESSION_OPEN = "session_open"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class AssistSession:
    """Estado efêmero de uma requisição; nunca compartilhado."""

    state: AssistState = AssistState.IDLE
    chunks: list[str] = field(default_factory=list)
    tool_calls: list[str] = field(default_factory=list)
    agent_session: AgentSessionProtocol | None = None

    @property
    def text(self) -> str:
        return "".join(self.chunks)

    def transition(self, new_state: AssistState) -> None:
        logger.debug(
            "assist_state_transition",
            extra={"from_state": self.state.value, "to_state": new_state.value},
        )
        self.state = new_state


class AssistOrchestrator:
    """Coordena prompt, sessão de agente, parse e validação.

    O runtime é compartilhado pelo processo; cada chamada de `stream`
    abre e libera a própria sessão.
    """

    def __init__(
        self,
        runtime: AgentRuntimeProtocol,
        *,
        turn_timeout_seconds: float = DEFAULT_TURN_TIMEOUT_SECONDS,
        schema: FieldSchema = DEFAULT_FIELD_SCHEMA,
        system_prompt: str = FORM_ASSIST_SYSTEM_PROMPT,
        tools: tuple[ToolDefinition, ...] = (ACCOMMODATIONS_TOOL,),
    ) -> None:
        self._runtime = runtime
        self._turn_timeout_seconds = turn_timeout_seconds
        self._schema = schema
        self._session_config = AgentSessionConfig(
            streaming=True,
            system_message=system_prompt,
            tools=tools,
        )

    async def stream(self, request: AssistRequest) -> AsyncIterator[AssistEvent]:
        """Executa uma interação e produz os eventos do canal.

        Sempre termina com exatamente um `done` ou um `error`.
        """
        session = AssistSession()
        started_at = time.perf_counter()
        logger.info(
            "assist_started",
            extra={"has_form_state": bool(request.current_form_state)},
        )

        try:
            prompt = format_form_assist_prompt(request.prompt, request.current_form_state)
            session.transition(AssistState.PROMPT_BUILT)

            async with open_agent_session(self._runtime, self._session_config) as agent_session:
                session.agent_session = agent_session
                session.transition(AssistState.SESSION_OPEN)
                relay = self._relay_turn(session, agent_session, prompt)
                async with aclosing(relay):
                    async for event in relay:
                        yield event
        except (asyncio.CancelledError, GeneratorExit):
            logger.info(
                "assist_cancelled",
                extra={"state": session.state.value, "delta_count": len(session.chunks)},
            )
            raise
        except AgentRuntimeClosedError as exc:
            logger.critical(
                "assist_runtime_closed",
                extra={"state": session.state.value, "error": str(exc)},
            )
            session.transition(AssistState.FAILED)
            yield ErrorEvent(message=str(exc) or "Unknown error")
            return
        except Exception as exc:
            logger.warning(
                "assist_failed",
                extra={
                    "state": session.state.value,
                    "error_type": type(exc).__name__,
                    "elapsed_ms": _elapsed_ms(started_at),
                },
            )
            session.transition(AssistState.FAILED)
            yield ErrorEvent(message=str(exc) or "Unknown error")
            return
        finally:
            session.agent_session = None

        try:
            result = self.build_result(session.text)
        except Exception as exc:
            logger.warning(
                "assist_result_build_failed",
                extra={"error_type": type(exc).__name__, "delta_count": len(session.chunks)},
            )
            result = ResultEvent(fields=None, message=PARSE_FAILURE_MESSAGE)
        session.transition(AssistState.COMPLETED)
        logger.info(
            "assist_completed",
            extra={
                "parsed": result.fields is not None,
                "filled": result.fields is not None and result.fields.has_values(),
                "delta_count": len(session.chunks),
                "tool_calls": len(session.tool_calls),
                "elapsed_ms": _elapsed_ms(started_at),
            },
        )
        yield result
        yield DoneEvent(success=True)

    async def _relay_turn(
        self,
        session: AssistSession,
        agent_session: AgentSessionProtocol,
        prompt: str,
    ) -> AsyncIterator[AssistEvent]:
        """Repassa eventos do turno respeitando o prazo máximo.

        O prazo vale só para a espera de cada evento do runtime; nunca
        envolve o `yield` para o consumidor.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._turn_timeout_seconds
        events = agent_session.stream_turn(prompt)
        session.transition(AssistState.STREAMING)
        try:
            while True:
                try:
                    async with asyncio.timeout_at(deadline):
                        event = await anext(events)
                except StopAsyncIteration:
                    break
                except TimeoutError:
                    raise AgentTurnTimeoutError(self._turn_timeout_seconds) from None

                if isinstance(event, AssistantMessageDelta):
                    if not event.content:
                        continue
                    session.chunks.append(event.content)
                    yield DeltaEvent(text=event.content)
                elif isinstance(event, ToolCallStarted):
                    name = event.name or "unknown"
                    session.tool_calls.append(name)
                    logger.info("assist_tool_call", extra={"tool": name})
                    yield ToolCallEvent(name=name)
                elif isinstance(event, SessionIdle):
                    break
        finally:
            aclose = getattr(events, "aclose", None)
            if aclose is not None:
                await aclose()

    def build_result(self, text: str) -> ResultEvent:
        """Converte o texto acumulado no evento `result`.

        JSON com `fields` → campos validados; qualquer outra coisa → resposta
        livre (o agente pode estar só pedindo esclarecimento).
        """
        parsed = extract_json_from_response(text)
        if isinstance(parsed, dict) and "fields" in parsed:
            message = parsed.get("message")
            if not isinstance(message, str) or not message.strip():
                message = DEFAULT_RESULT_MESSAGE
            return ResultEvent(
                fields=validate_fields(parsed["fields"], self._schema),
                message=message,
            )

        log_fallback(logger, "assist_orchestrator", reason="parse_error")
        return ResultEvent(fields=None, message=text.strip() or PARSE_FAILURE_MESSAGE)


def _elapsed_ms(started_at: float) -> float:
    return round((time.perf_counter() - started_at) * 1000, 2)
