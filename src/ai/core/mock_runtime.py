"""Runtime de agente mock para desenvolvimento e testes.

Determinístico e sem rede. Heurística por keywords:
- pedidos sobre hospedagem/orçamento invocam a tool de catálogo e
  recomendam o pacote mais barato que atende ao orçamento e à exigência
  de mesa/workspace;
- demais entradas devolvem todos os campos nulos pedindo mais dados.
A resposta segue o contrato JSON e é emitida em pequenos deltas.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any

from ai.core.agent_runtime import (
    AgentEvent,
    AgentSessionConfig,
    AssistantMessageDelta,
    SessionIdle,
    ToolCallStarted,
)
from ai.models.accommodation import ACCOMMODATION_PACKAGES, AccommodationPackage
from ai.rules.field_schema import FORM_FIELD_NAMES
from utils.errors import AgentRuntimeClosedError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

logger = logging.getLogger(__name__)

_LODGING_KEYWORDS = ("room", "accommodation", "package", "lodging", "hotel", "stay", "budget")
_WORKSPACE_KEYWORDS = ("workspace", "desk", "work space")
_BUDGET_PATTERN = re.compile(r"\$\s*(\d+)|(?:under|below|less than|up to)\s+(\d+)")
_DELTA_SIZE = 24

_EMPTY_FIELDS: dict[str, Any] = dict.fromkeys(FORM_FIELD_NAMES)


def _parse_budget(text: str) -> int | None:
    match = _BUDGET_PATTERN.search(text)
    if not match:
        return None
    value = match.group(1) or match.group(2)
    return int(value) if value else None


def recommend_package(
    packages: Iterable[AccommodationPackage], text: str
) -> AccommodationPackage | None:
    """Pacote mais barato que atende orçamento e exigência de mesa."""
    lowered = text.lower()
    budget = _parse_budget(lowered)
    needs_desk = any(keyword in lowered for keyword in _WORKSPACE_KEYWORDS)

    candidates = [
        package
        for package in packages
        if (budget is None or package.nightly_cost <= budget)
        and (not needs_desk or package.has_amenity("desk"))
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda package: package.nightly_cost)


class MockAgentSession:
    """Sessão mock: um turno produz deltas do JSON de resposta."""

    def __init__(self, config: AgentSessionConfig) -> None:
        self._config = config
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def stream_turn(self, prompt: str) -> AsyncIterator[AgentEvent]:
        lowered = prompt.lower()
        fields = dict(_EMPTY_FIELDS)
        message = "Please tell me your name, email, city, institution, role and position."

        tool = self._config.find_tool("get_accommodations")
        if tool is not None and any(keyword in lowered for keyword in _LODGING_KEYWORDS):
            yield ToolCallStarted(name=tool.name, arguments="{}")
            payload = await tool.handler()
            offered = {item.get("packageId") for item in payload if isinstance(item, dict)}
            chosen = recommend_package(
                (package for package in ACCOMMODATION_PACKAGES if package.package_id in offered),
                prompt,
            )
            if chosen is not None:
                fields["accommodation"] = chosen.package_id
                message = f"I recommend the {chosen.name} package at {chosen.cost_label}."
            else:
                message = "None of our packages match those requirements. Could you adjust them?"

        reply = json.dumps({"fields": fields, "message": message})
        if not self._config.streaming:
            yield AssistantMessageDelta(content=reply)
        else:
            for start in range(0, len(reply), _DELTA_SIZE):
                yield AssistantMessageDelta(content=reply[start : start + _DELTA_SIZE])
        yield SessionIdle()

    async def close(self) -> None:
        self._closed = True


class MockAgentRuntime:
    """Implementa AgentRuntimeProtocol sem chamar modelo real."""

    def __init__(self) -> None:
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        self._running = True
        logger.info("agent_runtime_started", extra={"backend": "mock"})

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info("agent_runtime_stopped", extra={"backend": "mock"})

    async def create_session(self, config: AgentSessionConfig) -> MockAgentSession:
        if not self._running:
            raise AgentRuntimeClosedError("Agent runtime is not running")
        return MockAgentSession(config)
