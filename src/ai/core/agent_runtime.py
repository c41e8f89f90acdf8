"""Protocolo do runtime de agente (sessões com streaming e tools).

Define o contrato consumido pelo orquestrador. Implementações concretas:
- OpenAIAgentRuntime em app/infra/ai/ (IO de rede)
- MockAgentRuntime em ai/core/mock_runtime.py (determinístico, sem rede)

O runtime é um recurso de processo (criado no startup, parado no shutdown).
Cada requisição abre a própria sessão sobre ele e a libera ao final.
"""

from __future__ import annotations

from abc import abstractmethod
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    ToolHandler = Callable[..., Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Capacidade declarada ao runtime na abertura da sessão.

    O runtime decide quando invocar; o handler só responde.
    """

    name: str
    description: str
    handler: ToolHandler
    parameters: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []}
    )


@dataclass(frozen=True, slots=True)
class AgentSessionConfig:
    """Configuração de uma sessão de agente."""

    streaming: bool = True
    system_message: str | None = None
    tools: tuple[ToolDefinition, ...] = ()
    model: str | None = None

    def find_tool(self, name: str) -> ToolDefinition | None:
        for tool in self.tools:
            if tool.name == name:
                return tool
        return None


# ──────────────────────────────────────────────────────────────────────────────
# Eventos emitidos pela sessão durante um turno
# ──────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class AssistantMessageDelta:
    """Trecho incremental do texto do assistente."""

    content: str


@dataclass(frozen=True, slots=True)
class ToolCallStarted:
    """O agente invocou uma tool (execução fica a cargo do runtime)."""

    name: str
    arguments: str = ""


@dataclass(frozen=True, slots=True)
class SessionIdle:
    """Turno concluído; nenhum outro evento virá para este prompt."""


AgentEvent = AssistantMessageDelta | ToolCallStarted | SessionIdle


class AgentSessionProtocol(Protocol):
    """Sessão lógica de curta duração sobre o runtime compartilhado."""

    @abstractmethod
    def stream_turn(self, prompt: str) -> AsyncIterator[AgentEvent]:
        """Envia o prompt e produz eventos na ordem recebida do runtime.

        O último evento de um turno bem-sucedido é SessionIdle.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Libera a sessão. Deve ser idempotente."""
        ...


class AgentRuntimeProtocol(Protocol):
    """Conexão de processo com o runtime de agente."""

    @property
    @abstractmethod
    def is_running(self) -> bool: ...

    @abstractmethod
    async def start(self) -> None:
        """Abre a conexão (uma vez, no startup)."""
        ...

    @abstractmethod
    async def stop(self) -> None:
        """Encerra a conexão (uma vez, no shutdown). Chamadas extras são no-op."""
        ...

    @abstractmethod
    async def create_session(self, config: AgentSessionConfig) -> AgentSessionProtocol:
        """Cria sessão nova.

        Raises:
            AgentRuntimeClosedError: se o runtime não estiver rodando.
        """
        ...


@asynccontextmanager
async def open_agent_session(
    runtime: AgentRuntimeProtocol,
    config: AgentSessionConfig,
) -> AsyncIterator[AgentSessionProtocol]:
    """Abre sessão com liberação garantida em qualquer caminho de saída.

    Inclui cancelamento (desconexão do cliente) e fechamento antecipado
    do gerador consumidor.
    """
    session = await runtime.create_session(config)
    try:
        yield session
    finally:
        await session.close()
