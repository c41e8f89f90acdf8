"""Regras determinísticas do formulário (schema de campos)."""

from ai.rules.field_schema import (
    DEFAULT_FIELD_SCHEMA,
    FORM_FIELD_NAMES,
    FieldSchema,
    is_valid_accommodation_id,
    is_valid_institution,
    positions_for,
    roles_for,
)

__all__ = [
    "DEFAULT_FIELD_SCHEMA",
    "FORM_FIELD_NAMES",
    "FieldSchema",
    "is_valid_accommodation_id",
    "is_valid_institution",
    "positions_for",
    "roles_for",
]
