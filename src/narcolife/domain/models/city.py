from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Region(str, Enum):
    USA = "USA"
    MEXICO = "Mexico"


@dataclass(frozen=True)
class CityDefinition:
    id: str
    name: str
    region: Region
    travel_cost: int
    stamina_cost: int
    description: str = ""
