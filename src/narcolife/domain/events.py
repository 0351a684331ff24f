from dataclasses import dataclass


@dataclass
class CharacterCreated:
    character_id: str
    account_id: str
    name: str
    location: str


@dataclass
class LocationArrived:
    character_id: str
    from_location: str
    to_location: str
    cash_spent: int
    stamina_spent: int


@dataclass
class MissionCompleted:
    character_id: str
    mission_id: str
    title: str
    cash_reward: int
    xp_reward: int


@dataclass
class MissionFailed:
    character_id: str
    mission_id: str
    title: str
    message: str


@dataclass
class ItemPurchased:
    character_id: str
    npc_id: str
    item_id: str
    item_name: str
    quantity: int
    total_price: int


@dataclass
class ItemSold:
    character_id: str
    npc_id: str
    item_id: str
    item_name: str
    quantity: int
    total_price: int


@dataclass
class ItemUsed:
    character_id: str
    item_id: str
    item_name: str
    effect: str


@dataclass
class ItemDropped:
    character_id: str
    item_id: str
    item_name: str
    quantity: int


@dataclass
class SkillUpgraded:
    character_id: str
    skill: str
    from_level: int
    to_level: int
    xp_spent: int
