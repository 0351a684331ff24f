from __future__ import annotations

from dataclasses import replace

from narcolife.domain.errors import IneligibleAction, NotFound, PreconditionFailed
from narcolife.domain.models.character import SKILL_NAMES, XP_PER_LEVEL, Character, InventoryEntry, level_for_xp
from narcolife.domain.models.city import CityDefinition
from narcolife.domain.models.item import ItemDefinition


VITAL_MIN = 0
VITAL_MAX = 100
SKILL_LEVEL_CAP = 20
UPGRADE_COST_BASE = 100


def clamp_vital(value: int) -> int:
    return max(VITAL_MIN, min(VITAL_MAX, int(value)))


def apply_delta(
    character: Character,
    *,
    cash: int = 0,
    xp: int = 0,
    health: int = 0,
    stamina: int = 0,
) -> Character:
    return replace(
        character,
        cash=max(0, int(character.cash) + int(cash)),
        xp=max(0, int(character.xp) + int(xp)),
        health=clamp_vital(int(character.health) + int(health)),
        stamina=clamp_vital(int(character.stamina) + int(stamina)),
    )


def xp_to_next_level(xp: int) -> int:
    return level_for_xp(xp) * XP_PER_LEVEL - max(0, int(xp))


def level_progress_percent(xp: int) -> int:
    floor_xp = (level_for_xp(xp) - 1) * XP_PER_LEVEL
    return min(100, (max(0, int(xp)) - floor_xp) * 100 // XP_PER_LEVEL)


def skill_upgrade_cost(current_level: int) -> int:
    """floor(100 * 1.5 ** level), kept in integers so large levels stay exact."""
    level = max(0, int(current_level))
    return (UPGRADE_COST_BASE * 3**level) // 2**level


def upgrade_skill(character: Character, skill: str) -> Character:
    name = str(skill or "").strip().lower()
    if name not in SKILL_NAMES:
        raise NotFound("skill", str(skill))

    current = character.skill_level(name)
    if current >= SKILL_LEVEL_CAP:
        raise PreconditionFailed("This skill is already at maximum level!", reason="skill_maxed")
    cost = skill_upgrade_cost(current)
    if character.xp < cost:
        raise PreconditionFailed("Not enough XP to upgrade this skill!", reason="insufficient_xp")

    skills = dict(character.skills)
    skills[name] = current + 1
    return replace(character, xp=character.xp - cost, skills=skills)


def add_item(character: Character, item_id: str, quantity: int = 1) -> Character:
    amount = int(quantity)
    if amount < 1:
        raise IneligibleAction("Quantity must be at least 1.")

    entries = list(character.inventory)
    for index, entry in enumerate(entries):
        if entry.item_id == item_id:
            entries[index] = InventoryEntry(item_id=item_id, quantity=entry.quantity + amount)
            break
    else:
        entries.append(InventoryEntry(item_id=item_id, quantity=amount))
    return replace(character, inventory=tuple(entries))


def remove_item(character: Character, item_id: str, quantity: int = 1) -> Character:
    amount = int(quantity)
    if amount < 1:
        raise IneligibleAction("Quantity must be at least 1.")

    held = character.quantity_of(item_id)
    if held < amount:
        raise PreconditionFailed("Not enough items.", reason="insufficient_quantity")

    entries: list[InventoryEntry] = []
    for entry in character.inventory:
        if entry.item_id != item_id:
            entries.append(entry)
            continue
        remaining = entry.quantity - amount
        if remaining > 0:
            entries.append(InventoryEntry(item_id=item_id, quantity=remaining))
    return replace(character, inventory=tuple(entries))


def travel(character: Character, city: CityDefinition) -> Character:
    if city.name == character.location:
        raise IneligibleAction(f"You are already in {city.name}.")
    if character.cash < city.travel_cost:
        raise PreconditionFailed("Not enough cash for this trip!", reason="insufficient_cash")
    if character.stamina < city.stamina_cost:
        raise PreconditionFailed("Not enough stamina for this trip!", reason="insufficient_stamina")

    return replace(
        character,
        location=city.name,
        cash=character.cash - city.travel_cost,
        stamina=clamp_vital(character.stamina - city.stamina_cost),
    )


def use_item(character: Character, item: ItemDefinition) -> tuple[Character, str]:
    if not item.usable:
        raise IneligibleAction("This item cannot be used")
    if character.quantity_of(item.id) < 1:
        raise PreconditionFailed(f"You do not have any {item.name}.", reason="insufficient_quantity")

    updated = remove_item(character, item.id, 1)
    if item.restores_health:
        gained = min(int(item.restores_health), VITAL_MAX - updated.health)
        updated = apply_delta(updated, health=item.restores_health)
        return updated, f"Restored {gained} health"
    if item.restores_stamina:
        gained = min(int(item.restores_stamina), VITAL_MAX - updated.stamina)
        updated = apply_delta(updated, stamina=item.restores_stamina)
        return updated, f"Restored {gained} stamina"
    return updated, f"Used {item.name}"


def drop_item(character: Character, item_id: str, quantity: int = 1) -> Character:
    return remove_item(character, item_id, quantity)


def complete_mission(character: Character, mission_id: str, *, cash: int, xp: int) -> Character:
    rewarded = apply_delta(character, cash=cash, xp=xp)
    return replace(rewarded, completed_missions=character.completed_missions | {mission_id})
