from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NpcDefinition:
    id: str
    name: str
    location: str
    inventory: tuple[str, ...]
    buy_multiplier: float
    sell_multiplier: float
    role: str = ""
    description: str = ""

    def stocks(self, item_id: str) -> bool:
        return item_id in self.inventory
