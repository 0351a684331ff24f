from dataclasses import dataclass, field
from typing import Dict, List, Optional

from narcolife.domain.models.character import Character


@dataclass
class ActionResult:
    success: bool = True
    messages: List[str] = field(default_factory=list)
    character: Optional[Character] = None
    error_kind: str = ""
    reason: str = ""


@dataclass
class CharacterSummaryView:
    id: str
    name: str
    level: int
    location: str
    cash: int
    created_at: str = ""


@dataclass
class HudView:
    character_id: str
    name: str
    level: int
    location: str
    health: int
    stamina: int
    cash: int
    xp: int
    xp_to_next_level: int
    level_progress_percent: int
    total_items: int = 0


@dataclass
class DestinationView:
    city_id: str
    name: str
    region: str
    travel_cost: int
    stamina_cost: int
    description: str = ""
    is_current: bool = False
    can_travel: bool = True
    note: str = ""


@dataclass
class TravelView:
    current_location: str
    cash: int
    stamina: int
    destinations: List[DestinationView] = field(default_factory=list)


@dataclass
class NpcView:
    id: str
    name: str
    role: str
    description: str
    item_count: int


@dataclass
class StreetsView:
    location: str
    npcs: List[NpcView] = field(default_factory=list)
    empty_state_hint: str = ""


@dataclass
class TradeItemView:
    item_id: str
    name: str
    category: str
    buy_price: int
    sell_price: int
    owned: int = 0
    max_affordable: int = 0


@dataclass
class NpcTradeView:
    npc_id: str
    name: str
    role: str
    description: str
    location: str
    cash: int
    items: List[TradeItemView] = field(default_factory=list)
    quote: object = None


@dataclass
class ItemView:
    item_id: str
    name: str
    category: str
    quantity: int
    description: str = ""
    usable: bool = False
    estimated_value: int = 0


@dataclass
class InventoryView:
    items: List[ItemView] = field(default_factory=list)
    total_items: int = 0
    estimated_value: int = 0
    empty_state_hint: str = ""


@dataclass
class MissionView:
    id: str
    title: str
    location: str
    difficulty: str
    description: str
    requirements: Dict[str, int] = field(default_factory=dict)
    reward_cash: int = 0
    reward_xp: int = 0
    penalty_health: int = 0
    penalty_stamina: int = 0
    penalty_cash: int = 0
    success_chance_percent: int = 0
    meets_requirements: bool = True
    unmet_requirements: List[str] = field(default_factory=list)


@dataclass
class MissionsView:
    location: str
    difficulty_filter: str = "all"
    missions: List[MissionView] = field(default_factory=list)
    completed_count: int = 0
    empty_state_hint: str = ""


@dataclass
class SkillView:
    name: str
    label: str
    level: int
    max_level: int
    upgrade_cost: int
    can_upgrade: bool
    maxed: bool = False


@dataclass
class SkillTreeView:
    xp: int
    skills: List[SkillView] = field(default_factory=list)


@dataclass
class ActivityView:
    kind: str
    message: str
    timestamp: str
