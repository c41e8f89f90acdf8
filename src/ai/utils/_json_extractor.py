"""Extrator de JSON de respostas de LLM.

O agente é instruído a responder só JSON, mas às vezes envolve a saída
em markdown ou texto explicativo. Estratégias, em ordem:
1. Bloco cercado por ``` (opcionalmente ```json) ou o texto inteiro
2. Parse direto do candidato
3. Parse do trecho do primeiro `{` ao último `}` do candidato
"""

from __future__ import annotations

import json
import re
from typing import Any

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_OUTER_BRACES = re.compile(r"\{[\s\S]*\}")


def _try_parse(candidate: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(candidate)
    except (ValueError, RecursionError):
        # ValueError cobre JSONDecodeError e literais inteiros acima do limite
        return False, None


def extract_json_from_response(response: Any) -> Any | None:
    """Extrai o valor JSON de uma resposta bruta de LLM.

    Args:
        response: Resposta bruta da LLM

    Returns:
        Valor parseado (normalmente dict) ou None se nada for recuperável.
        Nunca levanta exceção.
    """
    if not response or not isinstance(response, str):
        return None

    fenced = _FENCED_BLOCK.search(response)
    candidate = fenced.group(1).strip() if fenced else response.strip()

    ok, data = _try_parse(candidate)
    if ok:
        return data

    # Span guloso: do primeiro `{` ao último `}`
    match = _OUTER_BRACES.search(candidate)
    if match:
        ok, data = _try_parse(match.group(0))
        if ok:
            return data

    return None
