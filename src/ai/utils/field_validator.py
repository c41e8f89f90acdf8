"""Validação e sanitização dos campos propostos pelo agente.

A saída do agente é JSON sem tipo. Cada campo é checado por uma função
própria que devolve o valor aceito ou None; nenhuma checagem levanta
exceção, seja qual for o formato da entrada. Campos dependentes
(role/position) nunca são aceitos sem uma institution válida.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ai.models.form_fields import FormFields
from ai.rules.field_schema import DEFAULT_FIELD_SCHEMA, FieldSchema

# Inteiro decimal com sinal opcional e até 18 dígitos;
# "3.5", "3.0", "3abc" e literais maiores não casam
_INTEGER_LITERAL = re.compile(r"[+-]?\d{1,18}")


def clean_text(value: Any) -> str | None:
    """Texto livre: aceita str não vazia após trim."""
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def check_institution(value: Any, schema: FieldSchema) -> str | None:
    return value if schema.is_valid_institution(value) else None


def check_role(value: Any, institution: str | None, schema: FieldSchema) -> str | None:
    if institution is None or not isinstance(value, str):
        return None
    return value if value in schema.roles_for(institution) else None


def check_position(value: Any, institution: str | None, schema: FieldSchema) -> str | None:
    if institution is None or not isinstance(value, str):
        return None
    return value if value in schema.positions_for(institution) else None


def coerce_accommodation_id(value: Any) -> int | None:
    """Converte para int: int, float integral ou string com literal inteiro."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        stripped = value.strip()
        if _INTEGER_LITERAL.fullmatch(stripped):
            return int(stripped)
    return None


def check_accommodation(value: Any, schema: FieldSchema) -> int | None:
    package_id = coerce_accommodation_id(value)
    if package_id is None or not schema.is_valid_accommodation_id(package_id):
        return None
    return package_id


def validate_fields(raw: Any, schema: FieldSchema = DEFAULT_FIELD_SCHEMA) -> FormFields:
    """Produz FormFields completo a partir de um objeto `fields` arbitrário.

    Total (nunca levanta) e idempotente:
    validate_fields(validate_fields(x)) == validate_fields(x).

    Args:
        raw: Valor extraído da resposta do agente (dict, None, lista, ...)
        schema: Schema de campos permitido

    Returns:
        FormFields com todas as chaves; inválidos viram None.
    """
    if isinstance(raw, FormFields):
        raw = raw.model_dump()
    if not isinstance(raw, Mapping):
        return FormFields.empty()

    institution = check_institution(raw.get("institution"), schema)
    return FormFields(
        full_name=clean_text(raw.get("full_name")),
        email=clean_text(raw.get("email")),
        city=clean_text(raw.get("city")),
        institution=institution,
        role=check_role(raw.get("role"), institution, schema),
        position=check_position(raw.get("position"), institution, schema),
        accommodation=check_accommodation(raw.get("accommodation"), schema),
    )
