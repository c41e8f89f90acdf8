"""Prompts do assistente de preenchimento do formulário.

SYSTEM: instrução fixa (YAML) preenchida com os valores do schema e do
catálogo, para que prompt e validação usem a mesma fonte.
USER: estado atual do formulário (quando houver) antes da fala do usuário.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from ai.config.prompt_assets_loader import load_prompt_template, load_system_prompt
from ai.models.accommodation import ACCOMMODATION_PACKAGES, AccommodationPackage
from ai.rules.field_schema import DEFAULT_FIELD_SCHEMA, FieldSchema
from ai.tools.accommodations import ACCOMMODATIONS_TOOL_NAME

if TYPE_CHECKING:
    from collections.abc import Mapping

_PROMPT_FILE = "form_assist.yaml"


def _quoted(values: tuple[str, ...]) -> str:
    return ", ".join(f'"{value}"' for value in values)


def _per_institution(mapping: Mapping[str, tuple[str, ...]]) -> str:
    return "\n".join(f"  * {key}: {', '.join(values)}" for key, values in mapping.items())


def build_form_assist_system_prompt(
    schema: FieldSchema = DEFAULT_FIELD_SCHEMA,
    packages: tuple[AccommodationPackage, ...] = ACCOMMODATION_PACKAGES,
) -> str:
    """Monta a instrução de sistema a partir do schema e do catálogo."""
    template = load_system_prompt(_PROMPT_FILE)
    ids = [package.package_id for package in packages]
    return template.format(
        institutions=_quoted(schema.institutions),
        roles=_per_institution(schema.roles_by_institution),
        positions=_per_institution(schema.positions_by_institution),
        accommodations=", ".join(
            f"{package.package_id}={package.name} ${package.nightly_cost}" for package in packages
        ),
        accommodation_ids=f"{min(ids)}-{max(ids)}" if ids else "none",
        tool_name=ACCOMMODATIONS_TOOL_NAME,
    ).strip()


FORM_ASSIST_SYSTEM_PROMPT = build_form_assist_system_prompt()


def format_form_assist_prompt(
    user_message: str,
    current_form_state: dict[str, Any] | None = None,
) -> str:
    """Formata o prompt do turno com o progresso parcial do formulário.

    Sem estado (None ou vazio), o prompt é a própria fala do usuário.
    """
    if not current_form_state:
        return user_message
    form_state = json.dumps(current_form_state, ensure_ascii=False, default=str)
    return load_prompt_template(_PROMPT_FILE).format(
        form_state=form_state,
        user_message=user_message,
    ).strip()
