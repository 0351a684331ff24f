from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ItemCategory(str, Enum):
    DRUG = "drug"
    WEAPON = "weapon"
    EQUIPMENT = "equipment"
    CONSUMABLE = "consumable"


@dataclass(frozen=True)
class ItemDefinition:
    id: str
    name: str
    category: ItemCategory
    base_price: int
    description: str = ""
    restores_health: int = 0
    restores_stamina: int = 0

    @property
    def usable(self) -> bool:
        return self.category == ItemCategory.CONSUMABLE
