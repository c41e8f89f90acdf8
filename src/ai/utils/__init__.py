"""Utilitários de IA: extração de JSON e validação de campos."""

from ai.utils._json_extractor import extract_json_from_response
from ai.utils.field_validator import (
    check_accommodation,
    clean_text,
    coerce_accommodation_id,
    validate_fields,
)

__all__ = [
    "check_accommodation",
    "clean_text",
    "coerce_accommodation_id",
    "extract_json_from_response",
    "validate_fields",
]
