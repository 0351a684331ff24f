from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import replace
from typing import Optional

from narcolife.application.dtos import (
    ActionResult,
    ActivityView,
    CharacterSummaryView,
    DestinationView,
    HudView,
    InventoryView,
    MissionsView,
    NpcTradeView,
    SkillTreeView,
    StreetsView,
    TravelView,
)
from narcolife.application.mappers.game_service_mapper import (
    to_activity_view,
    to_character_summary_view,
    to_destination_view,
    to_hud_view,
    to_item_view,
    to_mission_view,
    to_npc_view,
    to_skill_view,
    to_starting_city_view,
    to_trade_item_view,
)
from narcolife.application.presenter import CharacterPresenter
from narcolife.application.services.balance_tables import estimated_item_value
from narcolife.application.services.character_creation_service import CharacterCreationService
from narcolife.application.services.event_bus import EventBus
from narcolife.application.services.mission_service import (
    MissionService,
    effective_skill,
    success_probability,
)
from narcolife.application.services.pricing_service import (
    NpcQuote,
    PricingService,
    buy_item,
    estimate_inventory_value,
    max_affordable_quantity,
    sell_item,
)
from narcolife.domain.catalog import Catalog
from narcolife.domain.errors import GameRuleError, IneligibleAction, NotFound
from narcolife.domain.events import (
    CharacterCreated,
    ItemDropped,
    ItemPurchased,
    ItemSold,
    ItemUsed,
    LocationArrived,
    MissionCompleted,
    MissionFailed,
    SkillUpgraded,
)
from narcolife.domain.models.character import SKILL_NAMES, Character
from narcolife.domain.repositories import ActivityLogRepository, CharacterRepository
from narcolife.domain.services.character_rules import (
    SKILL_LEVEL_CAP,
    drop_item,
    skill_upgrade_cost,
    travel,
    upgrade_skill,
    use_item,
)


logger = logging.getLogger(__name__)


class GameService:
    """Intent facade used by the terminal front end.

    Commands return an ``ActionResult``; a rejected rule leaves the stored
    character untouched and comes back as ``success=False`` with the error
    kind. Queries return view DTOs and let rule errors propagate.
    """

    def __init__(
        self,
        character_repo: CharacterRepository,
        catalog: Catalog,
        activity_repo: ActivityLogRepository | None = None,
        event_bus: EventBus | None = None,
        presenter: CharacterPresenter | None = None,
        rng: random.Random | None = None,
        rng_factory=None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], str] | None = None,
    ) -> None:
        self.character_repo = character_repo
        self.catalog = catalog
        self.activity_repo = activity_repo
        self.event_bus = event_bus or EventBus()
        self.presenter = presenter
        shared_rng = rng or random.Random()
        self.pricing_service = PricingService(catalog, rng=shared_rng, rng_factory=rng_factory)
        self.mission_service = MissionService(catalog, rng=shared_rng)
        self.character_creation_service = CharacterCreationService(
            character_repo,
            catalog,
            id_factory=id_factory,
            clock=clock,
        )
        self._arrivals: dict[str, int] = {}

    # helpers
    def _require_character(self, account_id: str, character_id: str) -> Character:
        character = self.character_repo.get(account_id, character_id)
        if character is None:
            raise NotFound("character", character_id)
        return character

    def _commit(self, account_id: str, character: Character, message: str, event: object | None = None) -> None:
        self.character_repo.replace(account_id, character)
        self.character_repo.save_active(character)
        if event is not None:
            self.event_bus.publish(event)
        if self.presenter is not None:
            self.presenter.show(character, message)
        logger.debug("Committed %s for character %s", type(event).__name__ if event else "update", character.id)

    @staticmethod
    def _rejected(exc: GameRuleError, character: Character | None, action: str) -> ActionResult:
        logger.info("Rejected %s: %s", action, exc)
        return ActionResult(
            success=False,
            messages=[str(exc)],
            character=character,
            error_kind=exc.kind,
            reason=str(getattr(exc, "reason", "") or ""),
        )

    def _require_fresh_quote(self, character: Character, quote: NpcQuote) -> None:
        if quote.visit != self._arrivals.get(character.id, 0):
            raise IneligibleAction("Those prices are from an earlier visit. Select the contact again.")

    def _item_name(self, item_id: str) -> str:
        item = self.catalog.find_item(item_id)
        return item.name if item is not None else item_id

    # lifecycle commands
    def create_character_intent(self, account_id: str, name: str, starting_location: str) -> ActionResult:
        try:
            character = self.character_creation_service.create_character(account_id, name, starting_location)
        except GameRuleError as exc:
            return self._rejected(exc, None, "create_character")

        self.event_bus.publish(
            CharacterCreated(
                character_id=character.id,
                account_id=character.account_id,
                name=character.name,
                location=character.location,
            )
        )
        logger.debug("Created character %s for account %s", character.id, account_id)
        return ActionResult(
            success=True,
            messages=[f"{character.name} arrives in {character.location} with ${character.cash:,}."],
            character=character,
        )

    def delete_character_intent(self, account_id: str, character_id: str) -> ActionResult:
        try:
            removed = self.character_creation_service.delete_character(account_id, character_id)
        except GameRuleError as exc:
            return self._rejected(exc, None, "delete_character")

        if self.activity_repo is not None:
            self.activity_repo.clear(character_id)
        return ActionResult(success=True, messages=[f"{removed.name} has been deleted."], character=None)

    def select_character_intent(self, account_id: str, character_id: str) -> ActionResult:
        try:
            character = self.character_creation_service.select_character(account_id, character_id)
        except GameRuleError as exc:
            return self._rejected(exc, None, "select_character")
        return ActionResult(success=True, messages=[f"Playing as {character.name}."], character=character)

    # gameplay commands
    def travel_intent(self, account_id: str, character_id: str, city_id: str) -> ActionResult:
        character: Character | None = None
        try:
            character = self._require_character(account_id, character_id)
            city = self.catalog.get_city(city_id)
            updated = travel(character, city)
        except GameRuleError as exc:
            return self._rejected(exc, character, "travel")

        self._arrivals[updated.id] = self._arrivals.get(updated.id, 0) + 1
        message = f"Traveled to {city.name}"
        self._commit(
            account_id,
            updated,
            message,
            LocationArrived(
                character_id=updated.id,
                from_location=character.location,
                to_location=city.name,
                cash_spent=city.travel_cost,
                stamina_spent=city.stamina_cost,
            ),
        )
        return ActionResult(success=True, messages=[message], character=updated)

    def buy_item_intent(
        self,
        account_id: str,
        character_id: str,
        quote: NpcQuote,
        item_id: str,
        quantity: int = 1,
    ) -> ActionResult:
        character: Character | None = None
        try:
            character = self._require_character(account_id, character_id)
            self._require_fresh_quote(character, quote)
            outcome = buy_item(character, quote, item_id, quantity)
        except GameRuleError as exc:
            return self._rejected(exc, character, "buy_item")

        item_name = self._item_name(item_id)
        message = f"Bought {outcome.quantity}x {item_name} for ${outcome.total_price:,}"
        self._commit(
            account_id,
            outcome.character,
            message,
            ItemPurchased(
                character_id=character.id,
                npc_id=quote.npc_id,
                item_id=item_id,
                item_name=item_name,
                quantity=outcome.quantity,
                total_price=outcome.total_price,
            ),
        )
        return ActionResult(success=True, messages=[message], character=outcome.character)

    def sell_item_intent(
        self,
        account_id: str,
        character_id: str,
        quote: NpcQuote,
        item_id: str,
        quantity: int = 1,
    ) -> ActionResult:
        character: Character | None = None
        try:
            character = self._require_character(account_id, character_id)
            self._require_fresh_quote(character, quote)
            outcome = sell_item(character, quote, item_id, quantity)
        except GameRuleError as exc:
            return self._rejected(exc, character, "sell_item")

        item_name = self._item_name(item_id)
        message = f"Sold {outcome.quantity}x {item_name} for ${outcome.total_price:,}"
        self._commit(
            account_id,
            outcome.character,
            message,
            ItemSold(
                character_id=character.id,
                npc_id=quote.npc_id,
                item_id=item_id,
                item_name=item_name,
                quantity=outcome.quantity,
                total_price=outcome.total_price,
            ),
        )
        return ActionResult(success=True, messages=[message], character=outcome.character)

    def use_item_intent(self, account_id: str, character_id: str, item_id: str) -> ActionResult:
        character: Character | None = None
        try:
            character = self._require_character(account_id, character_id)
            item = self.catalog.get_item(item_id)
            updated, effect = use_item(character, item)
        except GameRuleError as exc:
            return self._rejected(exc, character, "use_item")

        message = f"Used {item.name}: {effect}"
        self._commit(
            account_id,
            updated,
            message,
            ItemUsed(character_id=updated.id, item_id=item.id, item_name=item.name, effect=effect),
        )
        return ActionResult(success=True, messages=[message], character=updated)

    def drop_item_intent(self, account_id: str, character_id: str, item_id: str, quantity: int = 1) -> ActionResult:
        character: Character | None = None
        try:
            character = self._require_character(account_id, character_id)
            item_name = self.catalog.get_item(item_id).name
            updated = drop_item(character, item_id, quantity)
        except GameRuleError as exc:
            return self._rejected(exc, character, "drop_item")

        message = f"Dropped {int(quantity)}x {item_name}"
        self._commit(
            account_id,
            updated,
            message,
            ItemDropped(character_id=updated.id, item_id=item_id, item_name=item_name, quantity=int(quantity)),
        )
        return ActionResult(success=True, messages=[message], character=updated)

    def attempt_mission_intent(self, account_id: str, character_id: str, mission_id: str) -> ActionResult:
        """Resolve one attempt; a failed mission is still a committed outcome."""
        character: Character | None = None
        try:
            character = self._require_character(account_id, character_id)
            mission = self.catalog.get_mission(mission_id)
            outcome = self.mission_service.attempt(character, mission)
        except GameRuleError as exc:
            return self._rejected(exc, character, "attempt_mission")

        if outcome.success:
            event: object = MissionCompleted(
                character_id=character.id,
                mission_id=mission.id,
                title=mission.title,
                cash_reward=mission.reward.cash,
                xp_reward=mission.reward.xp,
            )
        else:
            event = MissionFailed(
                character_id=character.id,
                mission_id=mission.id,
                title=mission.title,
                message=outcome.message,
            )
        self._commit(account_id, outcome.character, outcome.message, event)
        return ActionResult(success=outcome.success, messages=[outcome.message], character=outcome.character)

    def upgrade_skill_intent(self, account_id: str, character_id: str, skill: str) -> ActionResult:
        character: Character | None = None
        try:
            character = self._require_character(account_id, character_id)
            name = str(skill or "").strip().lower()
            updated = upgrade_skill(character, name)
        except GameRuleError as exc:
            return self._rejected(exc, character, "upgrade_skill")

        from_level = character.skill_level(name)
        to_level = updated.skill_level(name)
        message = f"Upgraded {name.title()} to level {to_level}"
        self._commit(
            account_id,
            updated,
            message,
            SkillUpgraded(
                character_id=updated.id,
                skill=name,
                from_level=from_level,
                to_level=to_level,
                xp_spent=character.xp - updated.xp,
            ),
        )
        return ActionResult(success=True, messages=[message], character=updated)

    # queries
    def list_character_summaries(self, account_id: str) -> list[CharacterSummaryView]:
        return [to_character_summary_view(row) for row in self.character_repo.load(account_id)]

    def list_starting_cities_intent(self) -> list[DestinationView]:
        return [to_starting_city_view(city) for city in self.catalog.list_cities()]

    def get_active_character_intent(self) -> Optional[Character]:
        return self.character_repo.load_active()

    def get_hud_view_intent(self, account_id: str, character_id: str) -> HudView:
        return to_hud_view(self._require_character(account_id, character_id))

    def get_travel_destinations_intent(self, account_id: str, character_id: str) -> TravelView:
        character = self._require_character(account_id, character_id)
        return TravelView(
            current_location=character.location,
            cash=character.cash,
            stamina=character.stamina,
            destinations=[to_destination_view(city, character) for city in self.catalog.list_cities()],
        )

    def get_streets_view_intent(self, account_id: str, character_id: str) -> StreetsView:
        character = self._require_character(account_id, character_id)
        npcs = [to_npc_view(npc) for npc in self.catalog.npcs_at(character.location)]
        return StreetsView(
            location=character.location,
            npcs=npcs,
            empty_state_hint="" if npcs else f"Nobody is dealing in {character.location} right now.",
        )

    def _trade_view(self, character: Character, quote: NpcQuote) -> NpcTradeView:
        npc = self.catalog.get_npc(quote.npc_id)
        items = []
        for item_id, price in quote.prices.items():
            items.append(
                to_trade_item_view(
                    item=self.catalog.get_item(item_id),
                    buy_price=price.buy_price,
                    sell_price=price.sell_price,
                    owned=character.quantity_of(item_id),
                    max_affordable=max_affordable_quantity(character, quote, item_id),
                )
            )
        return NpcTradeView(
            npc_id=npc.id,
            name=npc.name,
            role=npc.role,
            description=npc.description,
            location=npc.location,
            cash=character.cash,
            items=items,
            quote=quote,
        )

    def select_npc_intent(self, account_id: str, character_id: str, npc_id: str) -> NpcTradeView:
        """Draw a fresh quote; the caller keeps it until the contact is reselected."""
        character = self._require_character(account_id, character_id)
        npc = self.catalog.get_npc(npc_id)
        if npc.location != character.location:
            raise IneligibleAction(f"{npc.name} is not in {character.location}.")

        quote = replace(self.pricing_service.quote(npc), visit=self._arrivals.get(character.id, 0))
        return self._trade_view(character, quote)

    def refresh_trade_view_intent(self, account_id: str, character_id: str, quote: NpcQuote) -> NpcTradeView:
        """Rebuild the trade screen for a held quote without drawing new prices."""
        character = self._require_character(account_id, character_id)
        self._require_fresh_quote(character, quote)
        return self._trade_view(character, quote)

    def get_inventory_view_intent(self, account_id: str, character_id: str) -> InventoryView:
        character = self._require_character(account_id, character_id)
        rows = []
        for entry in character.inventory:
            item = self.catalog.find_item(entry.item_id)
            unit_value = estimated_item_value(item.category if item is not None else None)
            rows.append(
                to_item_view(
                    item_id=entry.item_id,
                    quantity=entry.quantity,
                    item=item,
                    estimated_value=unit_value * entry.quantity,
                )
            )
        return InventoryView(
            items=rows,
            total_items=character.total_items,
            estimated_value=estimate_inventory_value(character, self.catalog),
            empty_state_hint="" if rows else "Your inventory is empty. Visit the streets to trade.",
        )

    def get_missions_view_intent(
        self,
        account_id: str,
        character_id: str,
        difficulty: str | None = None,
    ) -> MissionsView:
        character = self._require_character(account_id, character_id)
        missions = []
        for mission in self.mission_service.list_available(character, difficulty):
            unmet = [
                f"{skill.title()} {required}"
                for skill, required in mission.requirements.items()
                if effective_skill(character, skill) < int(required)
            ]
            missions.append(
                to_mission_view(
                    mission=mission,
                    probability=success_probability(character, mission),
                    unmet_requirements=unmet,
                )
            )
        return MissionsView(
            location=character.location,
            difficulty_filter=str(difficulty or "all"),
            missions=missions,
            completed_count=len(character.completed_missions),
            empty_state_hint="" if missions else "No missions available here. Try another city.",
        )

    def get_skill_tree_view_intent(self, account_id: str, character_id: str) -> SkillTreeView:
        character = self._require_character(account_id, character_id)
        skills = [
            to_skill_view(
                name=name,
                level=character.skill_level(name),
                max_level=SKILL_LEVEL_CAP,
                upgrade_cost=skill_upgrade_cost(character.skill_level(name)),
                xp=character.xp,
            )
            for name in SKILL_NAMES
        ]
        return SkillTreeView(xp=character.xp, skills=skills)

    def get_activity_log_intent(self, character_id: str, limit: int | None = None) -> list[ActivityView]:
        if self.activity_repo is None:
            return []
        rows = list(self.activity_repo.load(character_id))
        if limit is not None:
            rows = rows[: max(0, int(limit))]
        return [to_activity_view(row) for row in rows]
