"""Settings de OpenAI.

Configurações do runtime de agente sobre a API de chat completions.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class OpenAISettings:
    """Configurações do OpenAI.

    Attributes:
        api_key: Chave da API OpenAI
        model: Modelo padrão a usar
        base_url: Endpoint alternativo compatível (vazio = padrão do SDK)
        timeout_seconds: Timeout por requisição HTTP
        max_retries: Máximo de tentativas do SDK em erro transitório
        temperature: Temperatura de geração
    """

    api_key: str = ""
    model: str = "gpt-4o-mini"
    base_url: str = ""
    timeout_seconds: float = 30.0
    max_retries: int = 2
    temperature: float = 0.2

    def validate(self) -> list[str]:
        """Valida configurações do OpenAI.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not self.api_key:
            errors.append("OPENAI_API_KEY não configurado")

        if not self.model:
            errors.append("OPENAI_MODEL não pode ser vazio")

        if self.timeout_seconds <= 0:
            errors.append("OPENAI_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("OPENAI_MAX_RETRIES deve ser >= 0")

        if not 0.0 <= self.temperature <= 2.0:
            errors.append("OPENAI_TEMPERATURE deve estar entre 0 e 2")

        return errors


def _load_openai_from_env() -> OpenAISettings:
    """Carrega OpenAISettings de variáveis de ambiente."""
    return OpenAISettings(
        api_key=os.getenv("OPENAI_API_KEY", ""),
        model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        base_url=os.getenv("OPENAI_BASE_URL", ""),
        timeout_seconds=float(os.getenv("OPENAI_TIMEOUT_SECONDS", "30")),
        max_retries=int(os.getenv("OPENAI_MAX_RETRIES", "2")),
        temperature=float(os.getenv("OPENAI_TEMPERATURE", "0.2")),
    )


@lru_cache(maxsize=1)
def get_openai_settings() -> OpenAISettings:
    """Retorna instância cacheada de OpenAISettings."""
    return _load_openai_from_env()
