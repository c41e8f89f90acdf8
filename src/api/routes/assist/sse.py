"""Codificação de eventos no formato Server-Sent Events.

Frame: `event: <nome>\\ndata: <json>\\n\\n`.
"""

from __future__ import annotations

import json
import logging
from contextlib import aclosing
from typing import TYPE_CHECKING

from ai.models.assist import TERMINAL_EVENTS, event_payload

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import Request

    from ai.models.assist import AssistEvent

logger = logging.getLogger(__name__)

SSE_MEDIA_TYPE = "text/event-stream"
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def format_sse_event(event: AssistEvent) -> str:
    data = json.dumps(event_payload(event), ensure_ascii=False, separators=(",", ":"))
    return f"event: {event.event}\ndata: {data}\n\n"


async def stream_sse(request: Request, events: AsyncIterator[AssistEvent]) -> AsyncIterator[str]:
    """Encaminha eventos como frames SSE enquanto o cliente estiver conectado.

    Ao parar (desconexão ou evento terminal), o gerador de origem é fechado,
    o que libera a sessão do agente.
    """
    async with aclosing(events):
        async for event in events:
            if await request.is_disconnected():
                logger.info("sse_client_disconnected", extra={"pending_event": event.event})
                break
            yield format_sse_event(event)
            if event.event in TERMINAL_EVENTS:
                break
