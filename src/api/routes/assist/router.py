"""Endpoints do assistente de formulário.

Endpoints:
- POST /ai/assist: preenchimento assistido (SSE delta/tool_call/result/done|error)
- POST /ai/stream: chat livre em streaming (SSE delta/done|error)
- POST /ai/hello: chat livre, resposta JSON única
- GET /ai/field-options: schema de campos + catálogo para os dropdowns
- GET /ai/field-options/{institution}: roles e positions de uma instituição

Body inválido → 422 (FastAPI), antes de abrir qualquer sessão.
Runtime parado → 503, antes de abrir o stream.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from ai.models.accommodation import ACCOMMODATION_PACKAGES
from ai.models.assist import AssistRequest, ChatAnswer, ChatRequest
from ai.rules.field_schema import DEFAULT_FIELD_SCHEMA
from ai.services.assist_orchestrator import AssistOrchestrator
from ai.services.chat_relay import ask, relay_stream
from api.routes.assist.sse import SSE_HEADERS, SSE_MEDIA_TYPE, stream_sse
from utils.errors import AgentRuntimeError

if TYPE_CHECKING:
    from ai.core.agent_runtime import AgentRuntimeProtocol

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_runtime(request: Request) -> AgentRuntimeProtocol:
    runtime = getattr(request.app.state, "agent_runtime", None)
    if runtime is None or not runtime.is_running:
        logger.critical("agent_runtime_unavailable", extra={"path": request.url.path})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Agent runtime is not running",
        )
    return runtime


def _get_orchestrator(request: Request, runtime: AgentRuntimeProtocol) -> AssistOrchestrator:
    orchestrator = getattr(request.app.state, "assist_orchestrator", None)
    if orchestrator is None:
        orchestrator = AssistOrchestrator(runtime)
        request.app.state.assist_orchestrator = orchestrator
    return orchestrator


@router.post("/assist")
async def assist(body: AssistRequest, request: Request) -> StreamingResponse:
    """Interpreta a descrição do usuário e sugere valores do formulário."""
    runtime = _require_runtime(request)
    orchestrator = _get_orchestrator(request, runtime)
    return StreamingResponse(
        stream_sse(request, orchestrator.stream(body)),
        media_type=SSE_MEDIA_TYPE,
        headers=SSE_HEADERS,
    )


@router.post("/stream")
async def chat_stream(body: ChatRequest, request: Request) -> StreamingResponse:
    """Repassa a resposta do modelo em deltas."""
    runtime = _require_runtime(request)
    return StreamingResponse(
        stream_sse(request, relay_stream(runtime, body.prompt, body.model)),
        media_type=SSE_MEDIA_TYPE,
        headers=SSE_HEADERS,
    )


@router.post("/hello", response_model=ChatAnswer)
async def hello(body: ChatRequest, request: Request) -> ChatAnswer:
    """Pergunta simples ao modelo; resposta completa em JSON."""
    runtime = _require_runtime(request)
    try:
        answer = await ask(runtime, body.prompt, body.model)
    except AgentRuntimeError as exc:
        logger.warning("chat_hello_failed", extra={"error_type": type(exc).__name__})
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return ChatAnswer(ok=True, prompt=body.prompt, answer=answer)


@router.get("/field-options")
async def field_options() -> dict[str, Any]:
    """Valores permitidos por campo e pacotes de hospedagem."""
    return {
        **DEFAULT_FIELD_SCHEMA.as_options(),
        "packages": [package.to_payload() for package in ACCOMMODATION_PACKAGES],
    }


@router.get("/field-options/{institution}")
async def institution_options(institution: str) -> dict[str, list[str]]:
    """Roles e positions de uma instituição; desconhecida → listas vazias."""
    return {
        "roles": list(DEFAULT_FIELD_SCHEMA.roles_for(institution)),
        "positions": list(DEFAULT_FIELD_SCHEMA.positions_for(institution)),
    }
