"""Setup do root logger do assistente de inscrição.

`app.bootstrap.initialize_app` chama `configure_logging` uma vez, com o
getter de correlation id de app/observability. Os módulos usam
`logging.getLogger(__name__)` e registram eventos em snake_case:

    logger.info("assist_completed", extra={"delta_count": 12, "elapsed_ms": 812.4})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter, create_plain_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "agentic-registration"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    *,
    json_output: bool = True,
) -> None:
    """Instala um único StreamHandler no root logger.

    Chamadas repetidas substituem o handler anterior (reload do uvicorn,
    testes que reconfiguram o logging).

    Args:
        level: LOG_LEVEL, sem diferenciar maiúsculas.
        service_name: Valor do campo `service` em cada linha.
        correlation_id_getter: Leitor do ContextVar da requisição corrente.
        json_output: False troca o JSON por texto (LOG_FORMAT=text).

    Raises:
        ValueError: nível fora de VALID_LOG_LEVELS.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter() if json_output else create_plain_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Marca no log que um caminho degradado respondeu ao cliente.

    No assistente isso acontece quando o texto do agente não tem JSON com
    `fields` e volta ao formulário como mensagem livre.
    """
    extra: dict[str, object] = {"fallback_used": True, "component": component}
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms

    logger.info("Fallback applied for %s", component, extra=extra)
