from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping


ANY_LOCATION = "Any"


class MissionDifficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


@dataclass(frozen=True)
class MissionReward:
    cash: int = 0
    xp: int = 0


@dataclass(frozen=True)
class FailurePenalty:
    health: int = 0
    stamina: int = 0
    cash: int = 0


@dataclass(frozen=True)
class MissionDefinition:
    id: str
    title: str
    location: str
    requirements: Mapping[str, int]
    reward: MissionReward
    failure_penalty: FailurePenalty
    success_rate: float
    difficulty: MissionDifficulty = MissionDifficulty.EASY
    description: str = ""

    def offered_in(self, city_name: str) -> bool:
        return self.location == ANY_LOCATION or self.location == city_name
