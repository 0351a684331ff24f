import json
import sys
import tempfile
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from narcolife.domain.models.activity import ActivityEntry
from narcolife.domain.models.character import Character, InventoryEntry
from narcolife.infrastructure.json_store import (
    ACTIVE_CHARACTER_KEY,
    JsonActivityLogRepository,
    JsonCharacterRepository,
    JsonFileStore,
    SaveFileError,
    activity_key,
    characters_key,
)


def _character(character_id: str = "c1", **overrides) -> Character:
    values = dict(id=character_id, account_id="acct", name=f"Name {character_id}", location="Miami")
    values.update(overrides)
    return Character(**values)


class JsonStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "nested" / "save.json"
        self.store = JsonFileStore(self.path)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_reads_as_empty(self) -> None:
        self.assertIsNone(self.store.get("anything"))
        self.assertEqual([], self.store.keys())

    def test_set_creates_parent_and_leaves_no_temp_file(self) -> None:
        self.store.set("k", {"v": 1})
        self.assertTrue(self.path.exists())
        self.assertFalse(self.path.with_suffix(".tmp").exists())
        self.assertEqual({"v": 1}, JsonFileStore(self.path).get("k"))

    def test_remove_deletes_key(self) -> None:
        self.store.set("a", 1)
        self.store.set("b", 2)
        self.store.remove("a")
        self.store.remove("missing")
        self.assertEqual(["b"], self.store.keys())

    def test_corrupt_file_raises_save_file_error(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(SaveFileError):
            self.store.get("k")

    def test_non_object_document_raises(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("[1, 2]", encoding="utf-8")
        with self.assertRaises(SaveFileError):
            self.store.keys()


class JsonRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "save.json"
        self.store = JsonFileStore(self.path)
        self.characters = JsonCharacterRepository(self.store)
        self.activity = JsonActivityLogRepository(self.store)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_characters_survive_a_new_repository(self) -> None:
        first = _character("c1", inventory=(InventoryEntry("pistol", 2),), xp=120)
        second = _character("c2")
        self.characters.save("acct", [first, second])

        reloaded = JsonCharacterRepository(JsonFileStore(self.path)).load("acct")

        self.assertEqual([first, second], reloaded)
        self.assertEqual([], self.characters.load("other"))

    def test_replace_updates_single_character(self) -> None:
        self.characters.save("acct", [_character("c1"), _character("c2")])
        self.characters.replace("acct", _character("c2", cash=5))
        self.assertEqual([1000, 5], [row.cash for row in self.characters.load("acct")])
        self.assertEqual(5, self.characters.get("acct", "c2").cash)
        self.assertIsNone(self.characters.get("acct", "zz"))

    def test_active_slot_round_trip_and_clear(self) -> None:
        self.assertIsNone(self.characters.load_active())
        self.characters.save_active(_character("c1"))
        self.assertEqual("c1", self.characters.load_active().id)
        self.characters.clear_active()
        self.assertIsNone(self.characters.load_active())

    def test_document_uses_flat_keys(self) -> None:
        self.characters.save("acct", [_character("c1")])
        self.characters.save_active(_character("c1"))
        self.activity.save("c1", [ActivityEntry("item_used", "Used Health Kit", "t0")])

        document = json.loads(self.path.read_text(encoding="utf-8"))

        self.assertEqual({characters_key("acct"), ACTIVE_CHARACTER_KEY, activity_key("c1")}, set(document))
        self.assertNotIn("level", document[characters_key("acct")][0])

    def test_activity_clear_removes_key(self) -> None:
        self.activity.save("c1", [ActivityEntry("item_used", "Used Health Kit", "t0")])
        self.assertEqual(1, len(self.activity.load("c1")))
        self.activity.clear("c1")
        self.assertEqual([], self.activity.load("c1"))
        self.assertNotIn(activity_key("c1"), self.store.keys())


if __name__ == "__main__":
    unittest.main()
