"""Models do endpoint de assistência: request e eventos do stream."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ai.models.form_fields import FormFields  # noqa: TC001 - usado em runtime pelo schema do Pydantic


class AssistRequest(BaseModel):
    """Body de POST /ai/assist."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    prompt: str = Field(min_length=1)
    current_form_state: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("currentFormState", "currentForm", "current_form_state"),
    )

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt não pode ser vazio")
        return value


class ChatRequest(BaseModel):
    """Body de POST /ai/hello e /ai/stream."""

    model_config = ConfigDict(extra="forbid")

    prompt: str = Field(min_length=1)
    model: str | None = Field(default=None, min_length=1)


class ChatAnswer(BaseModel):
    """Resposta de POST /ai/hello."""

    ok: bool
    prompt: str
    answer: str | None


# ──────────────────────────────────────────────────────────────────────────────
# Eventos do canal SSE
# ──────────────────────────────────────────────────────────────────────────────


class DeltaEvent(BaseModel):
    event: Literal["delta"] = "delta"
    text: str


class ToolCallEvent(BaseModel):
    event: Literal["tool_call"] = "tool_call"
    name: str


class ResultEvent(BaseModel):
    event: Literal["result"] = "result"
    fields: FormFields | None
    message: str


class DoneEvent(BaseModel):
    event: Literal["done"] = "done"
    success: bool = True


class ErrorEvent(BaseModel):
    event: Literal["error"] = "error"
    message: str


AssistEvent = DeltaEvent | ToolCallEvent | ResultEvent | DoneEvent | ErrorEvent

TERMINAL_EVENTS: frozenset[str] = frozenset({"done", "error"})


def event_payload(event: AssistEvent) -> dict[str, Any]:
    """Dados do evento sem o discriminador (vai na linha `event:` do SSE)."""
    return event.model_dump(mode="json", exclude={"event"})
