from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


SKILL_NAMES: tuple[str, ...] = ("strength", "intelligence", "endurance", "shooting")

XP_PER_LEVEL = 100


def default_skills() -> dict[str, int]:
    return {name: 1 for name in SKILL_NAMES}


def level_for_xp(xp: int) -> int:
    return max(0, int(xp)) // XP_PER_LEVEL + 1


@dataclass(frozen=True)
class InventoryEntry:
    item_id: str
    quantity: int = 1

    def __post_init__(self) -> None:
        if int(self.quantity) < 1:
            raise ValueError("Inventory quantity must be at least 1")


@dataclass(frozen=True)
class Character:
    id: str
    account_id: str
    name: str
    location: str
    health: int = 100
    stamina: int = 100
    cash: int = 1000
    xp: int = 0
    # Read-only view; left out of the hash since mappings are unhashable.
    skills: Mapping[str, int] = field(default_factory=default_skills, hash=False)
    inventory: tuple[InventoryEntry, ...] = ()
    completed_missions: frozenset[str] = frozenset()
    created_at: str | None = None

    def __post_init__(self) -> None:
        normalized = default_skills()
        for raw_name, raw_level in dict(self.skills or {}).items():
            name = str(raw_name or "").strip().lower()
            if not name:
                continue
            try:
                normalized[name] = int(raw_level)
            except (TypeError, ValueError):
                continue
        object.__setattr__(self, "skills", MappingProxyType(normalized))
        object.__setattr__(self, "inventory", tuple(self.inventory or ()))
        object.__setattr__(self, "completed_missions", frozenset(self.completed_missions or ()))

        seen: set[str] = set()
        for entry in self.inventory:
            if entry.item_id in seen:
                raise ValueError(f"Duplicate inventory entry: {entry.item_id}")
            seen.add(entry.item_id)

    @property
    def level(self) -> int:
        return level_for_xp(self.xp)

    def skill_level(self, skill: str) -> int:
        return int(self.skills.get(str(skill), 1))

    def quantity_of(self, item_id: str) -> int:
        for entry in self.inventory:
            if entry.item_id == item_id:
                return int(entry.quantity)
        return 0

    @property
    def total_items(self) -> int:
        return sum(int(entry.quantity) for entry in self.inventory)

    def has_completed(self, mission_id: str) -> bool:
        return mission_id in self.completed_missions
