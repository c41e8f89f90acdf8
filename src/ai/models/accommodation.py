"""Catálogo estático de pacotes de hospedagem.

Imutável, definido no import. Os ids são a fonte dos valores válidos
do campo `accommodation` (ver ai/rules/field_schema.py).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class AccommodationPackage:
    """Pacote de hospedagem oferecido no evento."""

    package_id: int
    name: str
    description: str
    cost_label: str
    amenities: tuple[str, ...]

    @property
    def nightly_cost(self) -> int:
        """Valor numérico da diária extraído de `cost_label` ("$120/night" -> 120)."""
        digits = "".join(ch for ch in self.cost_label.split("/")[0] if ch.isdigit())
        return int(digits) if digits else 0

    def has_amenity(self, amenity: str) -> bool:
        target = amenity.casefold()
        return any(item.casefold() == target for item in self.amenities)

    def to_payload(self) -> dict[str, Any]:
        """Formato entregue ao agente pela tool."""
        return {
            "packageId": self.package_id,
            "name": self.name,
            "description": self.description,
            "cost": self.cost_label,
            "amenities": list(self.amenities),
        }


ACCOMMODATION_PACKAGES: tuple[AccommodationPackage, ...] = (
    AccommodationPackage(
        package_id=1,
        name="Budget",
        description="Basic room with shared facilities",
        cost_label="$50/night",
        amenities=("WiFi", "Shared bathroom"),
    ),
    AccommodationPackage(
        package_id=2,
        name="Standard",
        description="Private room with ensuite bathroom",
        cost_label="$80/night",
        amenities=("WiFi", "Private bathroom", "TV"),
    ),
    AccommodationPackage(
        package_id=3,
        name="Business",
        description="Premium room with workspace",
        cost_label="$120/night",
        amenities=("WiFi", "Private bathroom", "TV", "Desk", "Mini fridge"),
    ),
    AccommodationPackage(
        package_id=4,
        name="Premium",
        description="Luxury suite with full amenities",
        cost_label="$180/night",
        amenities=(
            "WiFi",
            "Private bathroom",
            "TV",
            "Desk",
            "Mini fridge",
            "Room service",
            "Balcony",
        ),
    ),
)
