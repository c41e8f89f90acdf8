"""Bootstrap da aplicação: logging, validação de settings e wiring.

Composition root. Conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings

    initialize_app()
    validate_runtime_settings()
"""

from __future__ import annotations

import logging

from app.bootstrap.clients import create_agent_runtime
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_assist_settings, get_base_settings, get_openai_settings

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging com correlation_id. Chamar uma vez no startup.

    `LOG_FORMAT=text` troca o JSON por linhas legíveis no terminal.
    """
    settings = get_base_settings()
    configure_logging(
        level=settings.log_level,
        service_name=settings.service_name,
        correlation_id_getter=get_correlation_id,
        json_output=settings.log_format != "text",
    )


def collect_settings_errors() -> list[str]:
    """Erros de todas as settings relevantes ao backend configurado."""
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in get_base_settings().validate())

    assist = get_assist_settings()
    errors.extend(f"assist: {error}" for error in assist.validate())

    if assist.runtime_backend == "openai":
        errors.extend(f"openai: {error}" for error in get_openai_settings().validate())
    return errors


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` apenas alerta.

    Raises:
        RuntimeError: configuração inválida em ambiente estrito.
    """
    base = get_base_settings()
    errors = collect_settings_errors()

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.is_strict:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


__all__ = [
    "collect_settings_errors",
    "create_agent_runtime",
    "initialize_app",
    "validate_runtime_settings",
]
