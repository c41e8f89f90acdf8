"""Formatters de logging.

JSON (python-json-logger) em runtime; texto simples em testes/dev local.
Campos obrigatórios em todo log: asctime, level, logger, message,
correlation_id, service.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Ordem estável para o format string (frozenset não garante ordem)
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

_PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {"asctime": "...", "level": "INFO", "logger": "ai.services.assist_orchestrator",
         "message": "assist_completed", "correlation_id": "abc-123",
         "service": "agentic-registration", "elapsed_ms": 812.4}
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)


def create_plain_formatter() -> logging.Formatter:
    """Formatter legível para terminal (sem JSON)."""
    return logging.Formatter(_PLAIN_FORMAT)
