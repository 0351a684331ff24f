from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List

from narcolife.application.services.balance_tables import (
    MISSION_SKILL_FACTOR_CAP,
    clamp_success_probability,
)
from narcolife.domain.catalog import Catalog
from narcolife.domain.errors import IneligibleAction
from narcolife.domain.models.character import Character
from narcolife.domain.models.mission import MissionDefinition, MissionDifficulty
from narcolife.domain.services.character_rules import apply_delta, complete_mission


@dataclass(frozen=True)
class MissionOutcome:
    success: bool
    character: Character
    probability: float
    draw: float
    message: str


def effective_skill(character: Character, skill: str) -> int:
    try:
        level = int(character.skills.get(skill, 1) or 1)
    except (TypeError, ValueError):
        level = 1
    return max(1, level)


def meets_requirements(character: Character, mission: MissionDefinition) -> bool:
    return all(
        effective_skill(character, skill) >= int(required)
        for skill, required in mission.requirements.items()
    )


def is_offered(character: Character, mission: MissionDefinition) -> bool:
    if character.has_completed(mission.id):
        return False
    return mission.offered_in(character.location)


def available_missions(
    character: Character,
    catalog: Catalog,
    difficulty: MissionDifficulty | str | None = None,
) -> List[MissionDefinition]:
    wanted = MissionDifficulty(difficulty) if difficulty not in (None, "", "all") else None
    return [
        mission
        for mission in catalog.list_missions()
        if is_offered(character, mission) and (wanted is None or mission.difficulty == wanted)
    ]


def success_probability(character: Character, mission: MissionDefinition) -> float:
    requirement_sum = 0
    skill_sum = 0
    for skill, required in mission.requirements.items():
        requirement_sum += int(required)
        skill_sum += effective_skill(character, skill)

    if requirement_sum <= 0:
        factor = MISSION_SKILL_FACTOR_CAP
    else:
        factor = min(skill_sum / requirement_sum, MISSION_SKILL_FACTOR_CAP)
    return clamp_success_probability(float(mission.success_rate) * factor)


def resolve_mission(character: Character, mission: MissionDefinition, draw: float) -> MissionOutcome:
    """Pure outcome of one attempt for a uniform draw in [0, 1)."""
    probability = success_probability(character, mission)
    if float(draw) <= probability:
        updated = complete_mission(
            character,
            mission.id,
            cash=mission.reward.cash,
            xp=mission.reward.xp,
        )
        message = (
            f"Mission completed successfully! Earned ${mission.reward.cash} and {mission.reward.xp} XP."
        )
        return MissionOutcome(True, updated, probability, float(draw), message)

    penalty = mission.failure_penalty
    updated = apply_delta(
        character,
        health=min(0, penalty.health),
        stamina=min(0, penalty.stamina),
        cash=min(0, penalty.cash),
    )
    message = (
        f"Mission failed! Lost {abs(penalty.health)} health, "
        f"{abs(penalty.stamina)} stamina, and ${abs(penalty.cash)}."
    )
    return MissionOutcome(False, updated, probability, float(draw), message)


class MissionService:
    def __init__(self, catalog: Catalog, rng: random.Random | None = None) -> None:
        self.catalog = catalog
        self._rng = rng or random.Random()

    def list_available(self, character: Character, difficulty: str | None = None) -> List[MissionDefinition]:
        return available_missions(character, self.catalog, difficulty)

    def attempt(self, character: Character, mission: MissionDefinition) -> MissionOutcome:
        if character.has_completed(mission.id):
            raise IneligibleAction("You have already completed this mission.")
        if not mission.offered_in(character.location):
            raise IneligibleAction(f"{mission.title} is only available in {mission.location}.")
        if not meets_requirements(character, mission):
            raise IneligibleAction("Insufficient Skills")
        return resolve_mission(character, mission, self._rng.random())
