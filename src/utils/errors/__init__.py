"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AgentRuntimeClosedError,
    AgentRuntimeError,
    AgentTurnTimeoutError,
    InfrastructureError,
)

__all__ = [
    "AgentRuntimeClosedError",
    "AgentRuntimeError",
    "AgentTurnTimeoutError",
    "InfrastructureError",
]
