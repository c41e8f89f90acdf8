"""Testes para ai/prompts/form_assist_prompt.py."""

from __future__ import annotations

import json
from types import MappingProxyType

from ai.models.accommodation import ACCOMMODATION_PACKAGES
from ai.prompts import (
    FORM_ASSIST_SYSTEM_PROMPT,
    build_form_assist_system_prompt,
    format_form_assist_prompt,
)
from ai.rules.field_schema import FieldSchema


class TestSystemPrompt:
    def test_lists_schema_values(self) -> None:
        prompt = FORM_ASSIST_SYSTEM_PROMPT
        assert '"Industry", "Academia", "Health services", "Government"' in prompt
        assert "* Health services: Physician, Nurse, Pharmacist, Allied Health" in prompt
        assert "* Government: Senior, Mid-level, Junior" in prompt

    def test_lists_catalog_and_tool(self) -> None:
        prompt = FORM_ASSIST_SYSTEM_PROMPT
        assert "1=Budget $50, 2=Standard $80, 3=Business $120, 4=Premium $180" in prompt
        assert "call the get_accommodations tool" in prompt
        assert "package ID (1-4)" in prompt

    def test_json_contract_braces_survive_formatting(self) -> None:
        prompt = FORM_ASSIST_SYSTEM_PROMPT
        assert '{"fields":{"full_name":null,' in prompt
        assert '"message":"your message here"}' in prompt
        assert "{institutions}" not in prompt

    def test_worked_examples(self) -> None:
        prompt = FORM_ASSIST_SYSTEM_PROMPT
        assert "I'm John Smith, a nurse in Jakarta" in prompt
        assert "I need a room with a workspace under $150" in prompt
        assert '"accommodation":3' in prompt

    def test_rebuilt_from_custom_schema(self) -> None:
        schema = FieldSchema(
            institutions=("Industry",),
            roles_by_institution=MappingProxyType({"Industry": ("QA",)}),
            positions_by_institution=MappingProxyType({"Industry": ("Staff",)}),
            accommodation_ids=frozenset({1}),
        )

        prompt = build_form_assist_system_prompt(schema, ACCOMMODATION_PACKAGES[:1])

        assert 'MUST be exactly one of "Industry"' in prompt
        assert "Academia" not in prompt.split("RESPOND WITH")[0]
        assert "package ID (1=Budget $50)" in prompt


class TestTurnPrompt:
    def test_without_state_is_user_message(self) -> None:
        assert format_form_assist_prompt("I'm Ana") == "I'm Ana"
        assert format_form_assist_prompt("I'm Ana", {}) == "I'm Ana"

    def test_with_state_includes_serialized_form(self) -> None:
        state = {"full_name": "Ana", "city": "São Paulo"}

        prompt = format_form_assist_prompt("I work at a hospital", state)

        assert prompt.startswith(f"Current form state: {json.dumps(state, ensure_ascii=False)}")
        assert prompt.endswith("User says: I work at a hospital")
        assert "São Paulo" in prompt
