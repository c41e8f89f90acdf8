"""Contrato de saída do assistente: campos do formulário já validados."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FormFields(BaseModel):
    """Campos sugeridos para o formulário.

    Todas as chaves sempre presentes; cada valor obedece à sua regra
    ou é None. Construído apenas por `validate_fields`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    full_name: str | None = None
    email: str | None = None
    city: str | None = None
    institution: str | None = None
    role: str | None = None
    position: str | None = None
    accommodation: int | None = None

    @classmethod
    def empty(cls) -> FormFields:
        return cls()

    def has_values(self) -> bool:
        return any(value is not None for value in self.model_dump().values())
