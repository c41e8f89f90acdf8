"""Testes para ai/rules/field_schema.py."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from ai.rules.field_schema import (
    DEFAULT_FIELD_SCHEMA,
    FORM_FIELD_NAMES,
    FieldSchema,
    is_valid_accommodation_id,
    is_valid_institution,
    positions_for,
    roles_for,
)


class TestDefaultSchema:
    """Valores permitidos do formulário."""

    def test_institutions(self) -> None:
        assert DEFAULT_FIELD_SCHEMA.institutions == (
            "Industry",
            "Academia",
            "Health services",
            "Government",
        )

    def test_dependent_keys_match_institutions(self) -> None:
        institutions = set(DEFAULT_FIELD_SCHEMA.institutions)
        assert set(DEFAULT_FIELD_SCHEMA.roles_by_institution) == institutions
        assert set(DEFAULT_FIELD_SCHEMA.positions_by_institution) == institutions

    def test_roles_and_positions_per_institution(self) -> None:
        assert roles_for("Health services") == ("Physician", "Nurse", "Pharmacist", "Allied Health")
        assert positions_for("Government") == ("Senior", "Mid-level", "Junior")
        assert "Postdoc" in positions_for("Academia")

    @pytest.mark.parametrize("value", ["Hospital", "industry", "", None, 3, ["Industry"]])
    def test_unknown_institution(self, value: object) -> None:
        assert is_valid_institution(value) is False
        assert roles_for(value) == ()
        assert positions_for(value) == ()

    def test_accommodation_ids_come_from_catalog(self) -> None:
        assert DEFAULT_FIELD_SCHEMA.accommodation_ids == frozenset({1, 2, 3, 4})

    @pytest.mark.parametrize(("value", "expected"), [(1, True), (4, True), (0, False), (5, False)])
    def test_accommodation_id_range(self, value: int, expected: bool) -> None:
        assert is_valid_accommodation_id(value) is expected

    @pytest.mark.parametrize("value", [True, "3", 3.0, None])
    def test_accommodation_id_requires_plain_int(self, value: object) -> None:
        assert is_valid_accommodation_id(value) is False

    def test_mappings_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_FIELD_SCHEMA.roles_by_institution["Industry"] = ("CEO",)  # type: ignore[index]

    def test_form_field_names(self) -> None:
        assert FORM_FIELD_NAMES == (
            "full_name",
            "email",
            "city",
            "institution",
            "role",
            "position",
            "accommodation",
        )


class TestFieldSchemaInvariant:
    def test_rejects_divergent_mappings(self) -> None:
        with pytest.raises(ValueError, match="roles_by_institution"):
            FieldSchema(
                institutions=("Industry",),
                roles_by_institution=MappingProxyType({"Academia": ("Professor",)}),
                positions_by_institution=MappingProxyType({"Industry": ("Staff",)}),
                accommodation_ids=frozenset({1}),
            )

    def test_as_options_is_json_safe(self) -> None:
        options = DEFAULT_FIELD_SCHEMA.as_options()

        assert options["institutions"][0] == "Industry"
        assert options["roles"]["Academia"] == [
            "Professor",
            "Researcher",
            "Lecturer",
            "Graduate Student",
        ]
        assert options["positions"]["Industry"] == ["Executive", "Manager", "Staff"]
        assert options["accommodations"] == [1, 2, 3, 4]
