"""Runtime de agente sobre a API de chat completions da OpenAI.

Implementa AgentRuntimeProtocol. Implementação de IO: pertence a app/infra.

Um único AsyncOpenAI por processo (criado em `start`, fechado em `stop`).
Cada sessão guarda o histórico de mensagens; um turno pode ter várias
rodadas de modelo quando há tool calls:

    modelo → deltas/tool_calls → handlers locais → resultados → modelo ...

até o modelo responder sem tool calls ou estourar `max_tool_rounds`.
"""

from __future__ import annotations

import json
import logging
from contextlib import aclosing
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx
from openai import AsyncOpenAI

from ai.core.agent_runtime import (
    AgentEvent,
    AgentSessionConfig,
    AssistantMessageDelta,
    SessionIdle,
    ToolCallStarted,
)
from utils.errors import AgentRuntimeClosedError, AgentRuntimeError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from ai.core.agent_runtime import ToolDefinition
    from config.settings import OpenAISettings

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOOL_ROUNDS = 5
_CONNECT_TIMEOUT_SECONDS = 10.0


@dataclass(slots=True)
class _PendingToolCall:
    """Tool call montada a partir dos fragmentos do stream."""

    call_id: str = ""
    name: str = ""
    arguments: str = ""

    def as_message(self) -> dict[str, Any]:
        return {
            "id": self.call_id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments or "{}"},
        }


def _tool_spec(tool: ToolDefinition) -> dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": tool.parameters,
        },
    }


def _parse_arguments(raw: str) -> dict[str, Any]:
    if not raw.strip():
        return {}
    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError):
        return {}
    return parsed if isinstance(parsed, dict) else {}


class OpenAIAgentSession:
    """Sessão de agente: histórico de mensagens + tools declaradas."""

    def __init__(
        self,
        client: AsyncOpenAI,
        config: AgentSessionConfig,
        *,
        model: str,
        temperature: float,
        max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS,
    ) -> None:
        self._client = client
        self._config = config
        self._model = config.model or model
        self._temperature = temperature
        self._max_tool_rounds = max_tool_rounds
        self._messages: list[dict[str, Any]] = []
        if config.system_message:
            self._messages.append({"role": "system", "content": config.system_message})
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def messages(self) -> list[dict[str, Any]]:
        return self._messages

    async def stream_turn(self, prompt: str) -> AsyncIterator[AgentEvent]:
        if self._closed:
            raise AgentRuntimeClosedError("Agent session is closed")

        self._messages.append({"role": "user", "content": prompt})

        for _ in range(self._max_tool_rounds + 1):
            content_parts: list[str] = []
            tool_calls: list[_PendingToolCall] = []

            if self._config.streaming:
                round_events = self._stream_round(content_parts, tool_calls)
                async with aclosing(round_events):
                    async for event in round_events:
                        yield event
            else:
                await self._complete_round(content_parts, tool_calls)

            if not tool_calls:
                answer = "".join(content_parts)
                self._messages.append({"role": "assistant", "content": answer})
                if not self._config.streaming and answer:
                    yield AssistantMessageDelta(content=answer)
                yield SessionIdle()
                return

            self._messages.append(
                {
                    "role": "assistant",
                    "content": "".join(content_parts) or None,
                    "tool_calls": [call.as_message() for call in tool_calls],
                }
            )
            for call in tool_calls:
                yield ToolCallStarted(name=call.name, arguments=call.arguments)
                result = await self._run_tool(call)
                self._messages.append(
                    {
                        "role": "tool",
                        "tool_call_id": call.call_id,
                        "content": json.dumps(result, ensure_ascii=False, default=str),
                    }
                )

        raise AgentRuntimeError(
            f"Agent exceeded {self._max_tool_rounds} tool rounds without answering"
        )

    def _request_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": self._messages,
            "temperature": self._temperature,
        }
        if self._config.tools:
            kwargs["tools"] = [_tool_spec(tool) for tool in self._config.tools]
        return kwargs

    async def _stream_round(
        self,
        content_parts: list[str],
        tool_calls: list[_PendingToolCall],
    ) -> AsyncIterator[AgentEvent]:
        pending: dict[int, _PendingToolCall] = {}
        stream = await self._client.chat.completions.create(
            **self._request_kwargs(),
            stream=True,
        )
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                if delta.content:
                    content_parts.append(delta.content)
                    yield AssistantMessageDelta(content=delta.content)
                for fragment in delta.tool_calls or ():
                    call = pending.setdefault(fragment.index, _PendingToolCall())
                    if fragment.id:
                        call.call_id = fragment.id
                    if fragment.function is not None:
                        call.name += fragment.function.name or ""
                        call.arguments += fragment.function.arguments or ""
        finally:
            await stream.close()

        tool_calls.extend(pending[index] for index in sorted(pending))

    async def _complete_round(
        self,
        content_parts: list[str],
        tool_calls: list[_PendingToolCall],
    ) -> None:
        response = await self._client.chat.completions.create(**self._request_kwargs())
        if not response.choices:
            return
        message = response.choices[0].message
        if message.content:
            content_parts.append(message.content)
        for call in message.tool_calls or ():
            tool_calls.append(
                _PendingToolCall(
                    call_id=call.id,
                    name=call.function.name,
                    arguments=call.function.arguments or "",
                )
            )

    async def _run_tool(self, call: _PendingToolCall) -> Any:
        tool = self._config.find_tool(call.name)
        if tool is None:
            logger.warning("agent_unknown_tool", extra={"tool": call.name})
            return {"error": "unknown_tool"}
        logger.info("agent_tool_invoked", extra={"tool": call.name})
        return await tool.handler(**_parse_arguments(call.arguments))

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._messages.clear()


class OpenAIAgentRuntime:
    """Implementa AgentRuntimeProtocol com a API da OpenAI.

    O cliente HTTP é do runtime; sessões apenas o emprestam.
    """

    def __init__(
        self,
        settings: OpenAISettings,
        *,
        max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._settings = settings
        self._max_tool_rounds = max_tool_rounds
        self._client = client
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            return
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._settings.api_key or None,
                base_url=self._settings.base_url or None,
                timeout=httpx.Timeout(
                    self._settings.timeout_seconds,
                    connect=_CONNECT_TIMEOUT_SECONDS,
                ),
                max_retries=self._settings.max_retries,
            )
        self._running = True
        logger.info(
            "agent_runtime_started",
            extra={"backend": "openai", "model": self._settings.model},
        )

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        client, self._client = self._client, None
        if client is not None:
            await client.close()
        logger.info("agent_runtime_stopped", extra={"backend": "openai"})

    async def create_session(self, config: AgentSessionConfig) -> OpenAIAgentSession:
        if not self._running or self._client is None:
            raise AgentRuntimeClosedError("Agent runtime is not running")
        return OpenAIAgentSession(
            self._client,
            config,
            model=self._settings.model,
            temperature=self._settings.temperature,
            max_tool_rounds=self._max_tool_rounds,
        )
