"""Tools declaradas ao runtime de agente."""

from ai.tools.accommodations import (
    ACCOMMODATIONS_TOOL,
    ACCOMMODATIONS_TOOL_NAME,
    get_accommodations,
)

__all__ = [
    "ACCOMMODATIONS_TOOL",
    "ACCOMMODATIONS_TOOL_NAME",
    "get_accommodations",
]
