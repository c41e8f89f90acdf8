"""Entrypoint do serviço de assistência ao formulário de inscrição.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    AGENT_RUNTIME_BACKEND=mock uvicorn app.app:app --reload --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ai.services.assist_orchestrator import AssistOrchestrator
from api.routes import create_api_router
from app.bootstrap import create_agent_runtime, initialize_app, validate_runtime_settings
from app.observability import CORRELATION_ID_HEADER
from app.observability.middleware import CorrelationIdMiddleware
from config.logging import get_logger
from config.settings import get_assist_settings, get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from ai.core.agent_runtime import AgentRuntimeProtocol

# Logging antes de qualquer import que emita log
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Ciclo de vida do runtime de agente.

    Startup: valida settings, cria (se não injetado) e inicia o runtime.
    Shutdown: para o runtime exatamente uma vez.
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()

    runtime: AgentRuntimeProtocol | None = getattr(app.state, "agent_runtime", None)
    if runtime is None:
        runtime = create_agent_runtime()
    await runtime.start()
    app.state.agent_runtime = runtime
    app.state.assist_orchestrator = AssistOrchestrator(
        runtime,
        turn_timeout_seconds=get_assist_settings().turn_timeout_seconds,
    )

    try:
        yield
    finally:
        logger.info("app_shutting_down", extra={"service": service_name})
        await runtime.stop()


def create_app(agent_runtime: AgentRuntimeProtocol | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        agent_runtime: Runtime já construído (testes). None = conforme settings.
    """
    fastapi_app = FastAPI(
        title="Agentic Registration",
        description="Assistente de preenchimento do formulário de inscrição",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    if agent_runtime is not None:
        fastapi_app.state.agent_runtime = agent_runtime

    fastapi_app.add_middleware(CorrelationIdMiddleware)
    # TODO: restringir origins quando o domínio do formulário for definido
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_ID_HEADER],
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})
    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("app_dev_server_starting")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
