from __future__ import annotations

from narcolife.domain.models.item import ItemCategory


STARTING_CASH = 1000
STARTING_HEALTH = 100
STARTING_STAMINA = 100
STARTING_SKILL_LEVEL = 1

MAX_CHARACTERS_PER_ACCOUNT = 3
CHARACTER_NAME_MIN_LENGTH = 3
CHARACTER_NAME_MAX_LENGTH = 20

PRICE_FLUCTUATION_MIN = 0.8
PRICE_FLUCTUATION_SPAN = 0.5

MISSION_SKILL_FACTOR_CAP = 2.0
MISSION_SUCCESS_FLOOR = 0.10
MISSION_SUCCESS_CEILING = 0.95

ACTIVITY_LOG_LIMIT = 50

CATEGORY_VALUE_ESTIMATES = {
    ItemCategory.DRUG: 100,
    ItemCategory.WEAPON: 500,
    ItemCategory.EQUIPMENT: 300,
    ItemCategory.CONSUMABLE: 50,
}
UNKNOWN_ITEM_VALUE_ESTIMATE = 25


def price_fluctuation(roll: float) -> float:
    """Map a uniform [0, 1) roll onto the [0.8, 1.3) price band."""
    return PRICE_FLUCTUATION_MIN + float(roll) * PRICE_FLUCTUATION_SPAN


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; prices round .5 upward.
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def clamp_success_probability(value: float) -> float:
    return min(max(float(value), MISSION_SUCCESS_FLOOR), MISSION_SUCCESS_CEILING)


def estimated_item_value(category: ItemCategory | str | None) -> int:
    if category is None:
        return UNKNOWN_ITEM_VALUE_ESTIMATE
    try:
        key = ItemCategory(category)
    except ValueError:
        return UNKNOWN_ITEM_VALUE_ESTIMATE
    return CATEGORY_VALUE_ESTIMATES.get(key, UNKNOWN_ITEM_VALUE_ESTIMATE)
