"""Tool de catálogo de hospedagem exposta ao agente.

Sem estado: o runtime decide se e quando chamar; aqui só se responde.
"""

from __future__ import annotations

import logging
from typing import Any

from ai.core.agent_runtime import ToolDefinition
from ai.models.accommodation import ACCOMMODATION_PACKAGES

logger = logging.getLogger(__name__)

ACCOMMODATIONS_TOOL_NAME = "get_accommodations"


async def get_accommodations() -> list[dict[str, Any]]:
    """Retorna o catálogo completo de pacotes."""
    logger.debug("accommodations_tool_invoked", extra={"packages": len(ACCOMMODATION_PACKAGES)})
    return [package.to_payload() for package in ACCOMMODATION_PACKAGES]


ACCOMMODATIONS_TOOL = ToolDefinition(
    name=ACCOMMODATIONS_TOOL_NAME,
    description=(
        "Get available accommodation packages with pricing and amenities. "
        "Call this when the user asks about rooms, packages, accommodation "
        "options, or budget for staying."
    ),
    handler=get_accommodations,
    parameters={"type": "object", "properties": {}, "required": []},
)
