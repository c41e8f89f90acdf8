"""Models de IA: contratos de entrada/saída do assistente."""

from ai.models.accommodation import ACCOMMODATION_PACKAGES, AccommodationPackage
from ai.models.assist import (
    AssistEvent,
    AssistRequest,
    ChatAnswer,
    ChatRequest,
    DeltaEvent,
    DoneEvent,
    ErrorEvent,
    ResultEvent,
    ToolCallEvent,
    event_payload,
)
from ai.models.form_fields import FormFields

__all__ = [
    "ACCOMMODATION_PACKAGES",
    "AccommodationPackage",
    "AssistEvent",
    "AssistRequest",
    "ChatAnswer",
    "ChatRequest",
    "DeltaEvent",
    "DoneEvent",
    "ErrorEvent",
    "FormFields",
    "ResultEvent",
    "ToolCallEvent",
    "event_payload",
]
