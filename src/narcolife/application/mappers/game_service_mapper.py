from __future__ import annotations

from typing import Sequence

from narcolife.application.dtos import (
    ActivityView,
    CharacterSummaryView,
    DestinationView,
    HudView,
    ItemView,
    MissionView,
    NpcView,
    SkillView,
    TradeItemView,
)
from narcolife.domain.models.activity import ActivityEntry
from narcolife.domain.models.character import Character
from narcolife.domain.models.city import CityDefinition
from narcolife.domain.models.item import ItemDefinition
from narcolife.domain.models.mission import MissionDefinition
from narcolife.domain.models.npc import NpcDefinition
from narcolife.domain.services.character_rules import level_progress_percent, xp_to_next_level


def _enum_value(value) -> str:
    return str(getattr(value, "value", value))


def to_character_summary_view(character: Character) -> CharacterSummaryView:
    return CharacterSummaryView(
        id=character.id,
        name=character.name,
        level=character.level,
        location=character.location,
        cash=character.cash,
        created_at=character.created_at or "",
    )


def to_hud_view(character: Character) -> HudView:
    return HudView(
        character_id=character.id,
        name=character.name,
        level=character.level,
        location=character.location,
        health=character.health,
        stamina=character.stamina,
        cash=character.cash,
        xp=character.xp,
        xp_to_next_level=xp_to_next_level(character.xp),
        level_progress_percent=level_progress_percent(character.xp),
        total_items=character.total_items,
    )


def to_starting_city_view(city: CityDefinition) -> DestinationView:
    return DestinationView(
        city_id=city.id,
        name=city.name,
        region=_enum_value(city.region),
        travel_cost=city.travel_cost,
        stamina_cost=city.stamina_cost,
        description=city.description,
    )


def to_destination_view(city: CityDefinition, character: Character) -> DestinationView:
    is_current = city.name == character.location
    note = ""
    if is_current:
        note = "You are here"
    elif character.cash < city.travel_cost:
        note = "Not enough cash"
    elif character.stamina < city.stamina_cost:
        note = "Not enough stamina"
    return DestinationView(
        city_id=city.id,
        name=city.name,
        region=_enum_value(city.region),
        travel_cost=city.travel_cost,
        stamina_cost=city.stamina_cost,
        description=city.description,
        is_current=is_current,
        can_travel=not note,
        note=note,
    )


def to_npc_view(npc: NpcDefinition) -> NpcView:
    return NpcView(
        id=npc.id,
        name=npc.name,
        role=npc.role,
        description=npc.description,
        item_count=len(npc.inventory),
    )


def to_trade_item_view(
    *,
    item: ItemDefinition,
    buy_price: int,
    sell_price: int,
    owned: int,
    max_affordable: int,
) -> TradeItemView:
    return TradeItemView(
        item_id=item.id,
        name=item.name,
        category=_enum_value(item.category),
        buy_price=int(buy_price),
        sell_price=int(sell_price),
        owned=int(owned),
        max_affordable=int(max_affordable),
    )


def to_item_view(*, item_id: str, quantity: int, item: ItemDefinition | None, estimated_value: int) -> ItemView:
    if item is None:
        return ItemView(item_id=item_id, name=item_id, category="unknown", quantity=quantity, estimated_value=estimated_value)
    return ItemView(
        item_id=item.id,
        name=item.name,
        category=_enum_value(item.category),
        quantity=int(quantity),
        description=item.description,
        usable=item.usable,
        estimated_value=int(estimated_value),
    )


def to_mission_view(
    *,
    mission: MissionDefinition,
    probability: float,
    unmet_requirements: Sequence[str],
) -> MissionView:
    penalty = mission.failure_penalty
    return MissionView(
        id=mission.id,
        title=mission.title,
        location=mission.location,
        difficulty=_enum_value(mission.difficulty),
        description=mission.description,
        requirements=dict(mission.requirements),
        reward_cash=mission.reward.cash,
        reward_xp=mission.reward.xp,
        penalty_health=abs(penalty.health),
        penalty_stamina=abs(penalty.stamina),
        penalty_cash=abs(penalty.cash),
        success_chance_percent=int(round(float(probability) * 100)),
        meets_requirements=not unmet_requirements,
        unmet_requirements=list(unmet_requirements),
    )


def to_skill_view(*, name: str, level: int, max_level: int, upgrade_cost: int, xp: int) -> SkillView:
    maxed = int(level) >= int(max_level)
    return SkillView(
        name=name,
        label=name.title(),
        level=int(level),
        max_level=int(max_level),
        upgrade_cost=int(upgrade_cost),
        can_upgrade=not maxed and int(xp) >= int(upgrade_cost),
        maxed=maxed,
    )


def to_activity_view(entry: ActivityEntry) -> ActivityView:
    return ActivityView(kind=entry.kind, message=entry.message, timestamp=entry.timestamp)
