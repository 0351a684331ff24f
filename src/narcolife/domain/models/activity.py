from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActivityKind(str, Enum):
    CHARACTER_CREATED = "character_created"
    LOCATION_ARRIVED = "location_arrived"
    MISSION_COMPLETED = "mission_completed"
    MISSION_FAILED = "mission_failed"
    ITEM_PURCHASED = "item_purchased"
    ITEM_SOLD = "item_sold"
    ITEM_USED = "item_used"
    ITEM_DROPPED = "item_dropped"
    SKILL_UPGRADED = "skill_upgraded"


@dataclass(frozen=True)
class ActivityEntry:
    kind: str
    message: str
    timestamp: str
