"""Endpoints de liveness e readiness."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "failed"]
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "error": self.error}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness: o processo responde."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness: o runtime de agente está rodando."""
    runtime_check = _check_agent_runtime(getattr(request.app.state, "agent_runtime", None))
    ready = runtime_check.status == "ok"
    if not ready:
        logger.warning("readiness_check_failed", extra={"error": runtime_check.error})

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {"agent_runtime": runtime_check.as_dict()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_agent_runtime(runtime: Any | None) -> DependencyCheck:
    if runtime is None:
        return DependencyCheck(status="failed", error="not_configured")
    if not runtime.is_running:
        return DependencyCheck(status="failed", error="not_running")
    return DependencyCheck(status="ok")
