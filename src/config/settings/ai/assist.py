"""Settings do assistente de formulário.

Backend do runtime de agente e limites de um turno.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

AgentRuntimeBackend = Literal["openai", "mock"]


@dataclass(frozen=True)
class AssistSettings:
    """Configurações do assistente.

    Attributes:
        runtime_backend: Implementação do runtime (openai|mock)
        turn_timeout_seconds: Prazo máximo de um turno do agente
        max_tool_rounds: Máximo de rodadas de tool calls por turno
    """

    runtime_backend: AgentRuntimeBackend = "openai"
    turn_timeout_seconds: float = 120.0
    max_tool_rounds: int = 5

    def validate(self) -> list[str]:
        """Valida configurações do assistente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.runtime_backend not in ("openai", "mock"):
            errors.append(f"AGENT_RUNTIME_BACKEND inválido: {self.runtime_backend}")

        if self.turn_timeout_seconds <= 0:
            errors.append("ASSIST_TURN_TIMEOUT_SECONDS deve ser > 0")

        if self.max_tool_rounds < 1:
            errors.append("ASSIST_MAX_TOOL_ROUNDS deve ser >= 1")

        return errors


def _parse_backend(value: str) -> AgentRuntimeBackend:
    return "mock" if value.strip().lower() == "mock" else "openai"


def _load_assist_from_env() -> AssistSettings:
    """Carrega AssistSettings de variáveis de ambiente."""
    return AssistSettings(
        runtime_backend=_parse_backend(os.getenv("AGENT_RUNTIME_BACKEND", "openai")),
        turn_timeout_seconds=float(os.getenv("ASSIST_TURN_TIMEOUT_SECONDS", "120")),
        max_tool_rounds=int(os.getenv("ASSIST_MAX_TOOL_ROUNDS", "5")),
    )


@lru_cache(maxsize=1)
def get_assist_settings() -> AssistSettings:
    """Retorna instância cacheada de AssistSettings."""
    return _load_assist_from_env()
