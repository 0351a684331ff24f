import sys
from pathlib import Path
import unittest

from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from narcolife.application.services.activity_log import register_activity_log_handlers
from narcolife.application.services.event_bus import EventBus
from narcolife.application.services.game_service import GameService
from narcolife.domain.models.activity import ActivityEntry
from narcolife.domain.models.character import Character, InventoryEntry
from narcolife.infrastructure.db.sql.connection import build_session_factory, ensure_schema, probe
from narcolife.infrastructure.db.sql.repos import SqlActivityLogRepository, SqlCharacterRepository
from narcolife.infrastructure.inmemory.static_catalog import build_default_catalog


def _memory_engine():
    # One shared connection so every session sees the same in-memory database.
    return create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool, future=True)


def _character(character_id: str, **overrides) -> Character:
    values = dict(id=character_id, account_id="acct", name=f"Name {character_id}", location="Miami")
    values.update(overrides)
    return Character(**values)


class SqlCharacterRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = _memory_engine()
        probe(self.engine)
        ensure_schema(self.engine)
        self.session_factory = build_session_factory(self.engine)
        self.repo = SqlCharacterRepository(self.session_factory)

    def tearDown(self) -> None:
        self.engine.dispose()

    def test_schema_creation_is_idempotent(self) -> None:
        ensure_schema(self.engine)
        with self.engine.connect() as conn:
            count = conn.execute(text("SELECT COUNT(*) FROM characters")).scalar_one()
        self.assertEqual(0, count)

    def test_save_and_load_preserves_order_and_fields(self) -> None:
        first = _character(
            "b-second-by-id",
            xp=340,
            skills={"strength": 3, "shooting": 5},
            inventory=(InventoryEntry("pistol", 1), InventoryEntry("cocaine", 4)),
            completed_missions=frozenset({"delivery-1"}),
            created_at="2024-01-01T00:00:00+00:00",
        )
        second = _character("a-first-by-id", cash=12)
        self.repo.save("acct", [first, second])

        loaded = self.repo.load("acct")

        self.assertEqual([first, second], loaded)
        self.assertEqual(4, loaded[0].level)

    def test_save_removes_characters_missing_from_list(self) -> None:
        self.repo.save("acct", [_character("c1"), _character("c2")])
        self.repo.save("acct", [_character("c2", cash=7)])

        loaded = self.repo.load("acct")

        self.assertEqual(["c2"], [row.id for row in loaded])
        self.assertEqual(7, loaded[0].cash)

    def test_accounts_are_isolated(self) -> None:
        self.repo.save("acct", [_character("c1")])
        self.repo.save("other", [_character("c9", account_id="other")])
        self.repo.save("other", [])
        self.assertEqual(["c1"], [row.id for row in self.repo.load("acct")])

    def test_get_reads_single_row(self) -> None:
        self.repo.save("acct", [_character("c1"), _character("c2", cash=55)])
        self.assertEqual(55, self.repo.get("acct", "c2").cash)
        self.assertIsNone(self.repo.get("other", "c2"))

    def test_hand_edited_row_vitals_are_clamped(self) -> None:
        self.repo.save("acct", [_character("c1")])
        with self.engine.begin() as conn:
            conn.execute(text("UPDATE characters SET health = 250, stamina = -40 WHERE character_id = 'c1'"))

        loaded = self.repo.get("acct", "c1")

        self.assertEqual((100, 0), (loaded.health, loaded.stamina))

    def test_active_slot_upsert_and_clear(self) -> None:
        self.assertIsNone(self.repo.load_active())
        self.repo.save_active(_character("c1"))
        self.repo.save_active(_character("c2"))
        self.assertEqual("c2", self.repo.load_active().id)
        self.repo.clear_active()
        self.assertIsNone(self.repo.load_active())


class SqlActivityLogRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = _memory_engine()
        ensure_schema(self.engine)
        self.repo = SqlActivityLogRepository(build_session_factory(self.engine))

    def tearDown(self) -> None:
        self.engine.dispose()

    def test_entries_keep_their_order(self) -> None:
        entries = [
            ActivityEntry("item_sold", "Sold 1x Pistol for $350", "t2"),
            ActivityEntry("location_arrived", "Traveled to Miami", "t1"),
        ]
        self.repo.save("c1", entries)
        self.assertEqual(entries, self.repo.load("c1"))

    def test_clear_empties_log(self) -> None:
        self.repo.save("c1", [ActivityEntry("item_sold", "Sold", "t0")])
        self.repo.clear("c1")
        self.assertEqual([], self.repo.load("c1"))


class SqlGameServiceTests(unittest.TestCase):
    def test_game_session_persists_through_sql(self) -> None:
        engine = _memory_engine()
        ensure_schema(engine)
        session_factory = build_session_factory(engine)
        character_repo = SqlCharacterRepository(session_factory)
        activity_repo = SqlActivityLogRepository(session_factory)
        bus = EventBus()
        register_activity_log_handlers(bus, activity_repo)
        service = GameService(character_repo, build_default_catalog(), activity_repo=activity_repo, event_bus=bus)

        created = service.create_character_intent("acct", "Vince", "Los Angeles")
        character_id = created.character.id
        travel = service.travel_intent("acct", character_id, "tijuana")

        self.assertTrue(travel.success)
        reloaded = SqlCharacterRepository(session_factory).get("acct", character_id)
        self.assertEqual(("Tijuana", 850), (reloaded.location, reloaded.cash))
        self.assertEqual(character_id, character_repo.load_active().id)
        self.assertEqual(
            ["Traveled to Tijuana", "Arrived in Los Angeles", "Character created"],
            [row.message for row in service.get_activity_log_intent(character_id)],
        )
        engine.dispose()


if __name__ == "__main__":
    unittest.main()
