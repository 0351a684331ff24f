from __future__ import annotations

import logging
from typing import Iterable, Mapping

from narcolife.domain.errors import CatalogError, NotFound
from narcolife.domain.models.character import SKILL_NAMES
from narcolife.domain.models.city import CityDefinition
from narcolife.domain.models.item import ItemDefinition
from narcolife.domain.models.mission import ANY_LOCATION, MissionDefinition
from narcolife.domain.models.npc import NpcDefinition


logger = logging.getLogger(__name__)


def _index(rows: Iterable, entity: str) -> dict:
    indexed: dict = {}
    for row in rows:
        key = str(getattr(row, "id", "") or "").strip()
        if not key:
            raise CatalogError(f"{entity} definition is missing an id")
        if key in indexed:
            raise CatalogError(f"Duplicate {entity} id: {key}")
        indexed[key] = row
    return indexed


class Catalog:
    """Static item, NPC, mission and city tables, validated once on construction."""

    def __init__(
        self,
        *,
        items: Iterable[ItemDefinition],
        npcs: Iterable[NpcDefinition],
        missions: Iterable[MissionDefinition],
        cities: Iterable[CityDefinition],
    ) -> None:
        self._items: dict[str, ItemDefinition] = _index(items, "item")
        self._npcs: dict[str, NpcDefinition] = _index(npcs, "npc")
        self._missions: dict[str, MissionDefinition] = _index(missions, "mission")
        self._cities: dict[str, CityDefinition] = _index(cities, "city")
        self._cities_by_name = {city.name: city for city in self._cities.values()}
        self._validate()

    def _validate(self) -> None:
        for item in self._items.values():
            if int(item.base_price) < 0:
                raise CatalogError(f"Item {item.id} has a negative base price")

        for city in self._cities.values():
            if int(city.travel_cost) < 0 or int(city.stamina_cost) < 0:
                raise CatalogError(f"City {city.id} has a negative travel cost")
        if len(self._cities_by_name) != len(self._cities):
            raise CatalogError("City names must be unique")

        for npc in self._npcs.values():
            if npc.location not in self._cities_by_name:
                raise CatalogError(f"NPC {npc.id} is bound to unknown city {npc.location}")
            if float(npc.buy_multiplier) <= 0 or float(npc.sell_multiplier) <= 0:
                raise CatalogError(f"NPC {npc.id} has a non-positive price multiplier")
            dangling = [item_id for item_id in npc.inventory if item_id not in self._items]
            if dangling:
                logger.warning("NPC %s stocks unknown items %s; they will not be quoted", npc.id, dangling)

        for mission in self._missions.values():
            if mission.location != ANY_LOCATION and mission.location not in self._cities_by_name:
                raise CatalogError(f"Mission {mission.id} is bound to unknown city {mission.location}")
            unknown_skills = [skill for skill in mission.requirements if skill not in SKILL_NAMES]
            if unknown_skills:
                raise CatalogError(f"Mission {mission.id} requires unknown skills {unknown_skills}")
            if not 0.0 <= float(mission.success_rate) <= 1.0:
                raise CatalogError(f"Mission {mission.id} success rate must lie in [0, 1]")
            if mission.reward.cash < 0 or mission.reward.xp < 0:
                raise CatalogError(f"Mission {mission.id} has a negative reward")
            penalty = mission.failure_penalty
            if penalty.health > 0 or penalty.stamina > 0 or penalty.cash > 0:
                raise CatalogError(f"Mission {mission.id} failure penalty must not be positive")

    # items
    def find_item(self, item_id: str) -> ItemDefinition | None:
        return self._items.get(str(item_id))

    def get_item(self, item_id: str) -> ItemDefinition:
        item = self.find_item(item_id)
        if item is None:
            raise NotFound("item", str(item_id))
        return item

    def list_items(self) -> list[ItemDefinition]:
        return list(self._items.values())

    # npcs
    def get_npc(self, npc_id: str) -> NpcDefinition:
        npc = self._npcs.get(str(npc_id))
        if npc is None:
            raise NotFound("npc", str(npc_id))
        return npc

    def npcs_at(self, city_name: str) -> list[NpcDefinition]:
        return [npc for npc in self._npcs.values() if npc.location == city_name]

    # missions
    def get_mission(self, mission_id: str) -> MissionDefinition:
        mission = self._missions.get(str(mission_id))
        if mission is None:
            raise NotFound("mission", str(mission_id))
        return mission

    def list_missions(self) -> list[MissionDefinition]:
        return list(self._missions.values())

    # cities
    def get_city(self, city_id: str) -> CityDefinition:
        city = self._cities.get(str(city_id))
        if city is None:
            raise NotFound("city", str(city_id))
        return city

    def get_city_by_name(self, name: str) -> CityDefinition:
        city = self._cities_by_name.get(str(name))
        if city is None:
            raise NotFound("city", str(name))
        return city

    def is_known_city(self, name: str) -> bool:
        return str(name) in self._cities_by_name

    def list_cities(self) -> list[CityDefinition]:
        return list(self._cities.values())

    def cities_by_region(self) -> Mapping[str, list[CityDefinition]]:
        grouped: dict[str, list[CityDefinition]] = {}
        for city in self._cities.values():
            region = getattr(city.region, "value", str(city.region))
            grouped.setdefault(region, []).append(city)
        return grouped
