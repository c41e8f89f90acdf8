"""Enriquecimento de records com o contexto da requisição.

Todo record que passa pelo handler do serviço sai com `service` e
`correlation_id`, inclusive os emitidos dentro do corpo de um stream SSE
(o ContextVar acompanha a task do corpo da resposta).

Prompt do usuário, texto do agente e valores de campos do formulário
ficam fora dos logs; só contagens, estados e tipos de erro.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


def _no_correlation_id() -> str:
    return ""


class CorrelationIdFilter(logging.Filter):
    """Anexa `service` e `correlation_id` sem descartar nenhum record."""

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id_getter = correlation_id_getter or _no_correlation_id

    def filter(self, record: logging.LogRecord) -> bool:
        # `extra={"correlation_id": ...}` do chamador vence o ContextVar
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._correlation_id_getter()
        record.service = self._service_name
        return True
