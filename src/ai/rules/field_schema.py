"""Registro do schema de campos do formulário de inscrição.

Fonte única dos valores permitidos: instituições, roles e positions
dependentes da instituição e ids de hospedagem. Dados puros, sem IO.
Entrada desconhecida ou de tipo errado resulta em vazio/False, nunca em erro.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ai.models.accommodation import ACCOMMODATION_PACKAGES

if TYPE_CHECKING:
    from collections.abc import Mapping

# Chaves de FormFields, na ordem em que aparecem no formulário
FORM_FIELD_NAMES: tuple[str, ...] = (
    "full_name",
    "email",
    "city",
    "institution",
    "role",
    "position",
    "accommodation",
)


@dataclass(frozen=True, slots=True)
class FieldSchema:
    """Valores permitidos e dependências entre campos.

    Invariante: as chaves de `roles_by_institution` e `positions_by_institution`
    são exatamente `institutions`.
    """

    institutions: tuple[str, ...]
    roles_by_institution: Mapping[str, tuple[str, ...]]
    positions_by_institution: Mapping[str, tuple[str, ...]]
    accommodation_ids: frozenset[int]

    def __post_init__(self) -> None:
        expected = set(self.institutions)
        if set(self.roles_by_institution) != expected:
            raise ValueError("roles_by_institution diverge de institutions")
        if set(self.positions_by_institution) != expected:
            raise ValueError("positions_by_institution diverge de institutions")

    def is_valid_institution(self, value: Any) -> bool:
        return isinstance(value, str) and value in self.institutions

    def roles_for(self, institution: Any) -> tuple[str, ...]:
        if not self.is_valid_institution(institution):
            return ()
        return self.roles_by_institution[institution]

    def positions_for(self, institution: Any) -> tuple[str, ...]:
        if not self.is_valid_institution(institution):
            return ()
        return self.positions_by_institution[institution]

    def is_valid_accommodation_id(self, value: Any) -> bool:
        # bool é subclasse de int; True não é um id de pacote
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return value in self.accommodation_ids

    def as_options(self) -> dict[str, Any]:
        """Representação JSON-safe para dropdowns e prompt."""
        return {
            "institutions": list(self.institutions),
            "roles": {key: list(value) for key, value in self.roles_by_institution.items()},
            "positions": {
                key: list(value) for key, value in self.positions_by_institution.items()
            },
            "accommodations": sorted(self.accommodation_ids),
        }


DEFAULT_FIELD_SCHEMA = FieldSchema(
    institutions=("Industry", "Academia", "Health services", "Government"),
    roles_by_institution=MappingProxyType(
        {
            "Industry": ("Management", "R&D", "QA", "Production"),
            "Academia": ("Professor", "Researcher", "Lecturer", "Graduate Student"),
            "Health services": ("Physician", "Nurse", "Pharmacist", "Allied Health"),
            "Government": ("Policy", "Research", "Regulatory", "Administration"),
        }
    ),
    positions_by_institution=MappingProxyType(
        {
            "Industry": ("Executive", "Manager", "Staff"),
            "Academia": ("Senior", "Junior", "Postdoc"),
            "Health services": ("Senior", "Junior", "Resident"),
            "Government": ("Senior", "Mid-level", "Junior"),
        }
    ),
    accommodation_ids=frozenset(package.package_id for package in ACCOMMODATION_PACKAGES),
)


def is_valid_institution(value: Any) -> bool:
    return DEFAULT_FIELD_SCHEMA.is_valid_institution(value)


def roles_for(institution: Any) -> tuple[str, ...]:
    return DEFAULT_FIELD_SCHEMA.roles_for(institution)


def positions_for(institution: Any) -> tuple[str, ...]:
    return DEFAULT_FIELD_SCHEMA.positions_for(institution)


def is_valid_accommodation_id(value: Any) -> bool:
    return DEFAULT_FIELD_SCHEMA.is_valid_accommodation_id(value)
