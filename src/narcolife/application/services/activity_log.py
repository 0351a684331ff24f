from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from narcolife.application.services.balance_tables import ACTIVITY_LOG_LIMIT
from narcolife.application.services.event_bus import EventBus
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
from narcolife.domain.models.activity import ActivityEntry, ActivityKind
from narcolife.domain.repositories import ActivityLogRepository


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ActivityLogService:
    """Turns domain events into the per-character feed shown on the hub screen."""

    def __init__(
        self,
        activity_repo: ActivityLogRepository,
        event_bus: EventBus,
        clock: Callable[[], str] | None = None,
        limit: int = ACTIVITY_LOG_LIMIT,
    ) -> None:
        self.activity_repo = activity_repo
        self.event_bus = event_bus
        self._clock = clock or _utc_now_iso
        self.limit = int(limit)

    def register_handlers(self) -> None:
        self.event_bus.subscribe(CharacterCreated, self.on_character_created, priority=50)
        self.event_bus.subscribe(LocationArrived, self.on_location_arrived, priority=50)
        self.event_bus.subscribe(MissionCompleted, self.on_mission_completed, priority=50)
        self.event_bus.subscribe(MissionFailed, self.on_mission_failed, priority=50)
        self.event_bus.subscribe(ItemPurchased, self.on_item_purchased, priority=50)
        self.event_bus.subscribe(ItemSold, self.on_item_sold, priority=50)
        self.event_bus.subscribe(ItemUsed, self.on_item_used, priority=50)
        self.event_bus.subscribe(ItemDropped, self.on_item_dropped, priority=50)
        self.event_bus.subscribe(SkillUpgraded, self.on_skill_upgraded, priority=50)

    def record(self, character_id: str, kind: ActivityKind, message: str) -> ActivityEntry:
        entry = ActivityEntry(kind=kind.value, message=message, timestamp=self._clock())
        rows = [entry] + list(self.activity_repo.load(character_id))
        self.activity_repo.save(character_id, rows[: self.limit])
        return entry

    def recent(self, character_id: str, limit: int | None = None) -> list[ActivityEntry]:
        rows = list(self.activity_repo.load(character_id))
        return rows if limit is None else rows[: max(0, int(limit))]

    def on_character_created(self, event: CharacterCreated) -> None:
        self.record(event.character_id, ActivityKind.CHARACTER_CREATED, "Character created")
        self.record(event.character_id, ActivityKind.LOCATION_ARRIVED, f"Arrived in {event.location}")

    def on_location_arrived(self, event: LocationArrived) -> None:
        self.record(event.character_id, ActivityKind.LOCATION_ARRIVED, f"Traveled to {event.to_location}")

    def on_mission_completed(self, event: MissionCompleted) -> None:
        self.record(event.character_id, ActivityKind.MISSION_COMPLETED, f"Completed mission: {event.title}")

    def on_mission_failed(self, event: MissionFailed) -> None:
        self.record(event.character_id, ActivityKind.MISSION_FAILED, f"Failed mission: {event.title}")

    def on_item_purchased(self, event: ItemPurchased) -> None:
        self.record(
            event.character_id,
            ActivityKind.ITEM_PURCHASED,
            f"Bought {event.quantity}x {event.item_name} for ${event.total_price:,}",
        )

    def on_item_sold(self, event: ItemSold) -> None:
        self.record(
            event.character_id,
            ActivityKind.ITEM_SOLD,
            f"Sold {event.quantity}x {event.item_name} for ${event.total_price:,}",
        )

    def on_item_used(self, event: ItemUsed) -> None:
        self.record(event.character_id, ActivityKind.ITEM_USED, f"Used {event.item_name}: {event.effect}")

    def on_item_dropped(self, event: ItemDropped) -> None:
        self.record(event.character_id, ActivityKind.ITEM_DROPPED, f"Dropped {event.quantity}x {event.item_name}")

    def on_skill_upgraded(self, event: SkillUpgraded) -> None:
        self.record(
            event.character_id,
            ActivityKind.SKILL_UPGRADED,
            f"Upgraded {event.skill.title()} to level {event.to_level}",
        )


def register_activity_log_handlers(
    event_bus: EventBus,
    activity_repo: ActivityLogRepository | None,
    clock: Callable[[], str] | None = None,
) -> ActivityLogService | None:
    if activity_repo is None:
        return None

    service = ActivityLogService(activity_repo=activity_repo, event_bus=event_bus, clock=clock)
    service.register_handlers()
    return service
