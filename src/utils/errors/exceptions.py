"""Exceções de domínio para falhas de infraestrutura do runtime de agente."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura."""


class AgentRuntimeError(InfrastructureError):
    """Falha ao abrir sessão, enviar prompt ou consumir o stream do agente."""


class AgentRuntimeClosedError(AgentRuntimeError):
    """Sessão solicitada com o runtime parado.

    Não é recuperável: indica erro de configuração/ciclo de vida
    (runtime não iniciado ou já encerrado no shutdown).
    """


class AgentTurnTimeoutError(AgentRuntimeError):
    """Turno do agente excedeu o prazo máximo configurado."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"Agent turn timed out after {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds
