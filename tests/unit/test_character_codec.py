import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from narcolife.domain.models.activity import ActivityEntry
from narcolife.domain.models.character import Character, InventoryEntry
from narcolife.infrastructure.character_codec import (
    activity_from_payload,
    activity_to_payload,
    character_from_payload,
    character_to_payload,
)


class CharacterCodecTests(unittest.TestCase):
    def test_payload_never_stores_level(self) -> None:
        character = Character(
            id="c1",
            account_id="acct",
            name="Vince",
            location="Miami",
            xp=250,
            inventory=(InventoryEntry("pistol", 1),),
            completed_missions=frozenset({"heist-1", "delivery-1"}),
        )
        payload = character_to_payload(character)

        self.assertNotIn("level", payload)
        self.assertEqual(["delivery-1", "heist-1"], payload["completed_missions"])
        self.assertEqual([{"id": "pistol", "quantity": 1}], payload["inventory"])
        self.assertEqual(character, character_from_payload(payload))

    def test_out_of_range_vitals_are_clamped_on_load(self) -> None:
        loaded = character_from_payload({"id": "x", "name": "Nico", "location": "Miami", "health": 250, "stamina": -40})
        self.assertEqual((100, 0), (loaded.health, loaded.stamina))

    def test_browser_save_layout_is_accepted(self) -> None:
        legacy = {
            "id": "abc",
            "userId": "acct",
            "name": "Rosa",
            "level": 9,
            "health": 70,
            "stamina": 55,
            "cash": 4200,
            "xp": 130,
            "location": "Tijuana",
            "skills": {"strength": 3, "intelligence": 2, "endurance": 4, "shooting": 1},
            "inventory": {"items": [{"id": "cocaine", "quantity": 2}, {"id": "cocaine", "quantity": 3}]},
            "completedMissions": ["delivery-1"],
            "createdAt": "2024-01-01T00:00:00Z",
        }

        character = character_from_payload(legacy)

        self.assertEqual("acct", character.account_id)
        self.assertEqual(2, character.level)
        self.assertEqual(5, character.quantity_of("cocaine"))
        self.assertEqual(1, len(character.inventory))
        self.assertTrue(character.has_completed("delivery-1"))
        self.assertEqual("2024-01-01T00:00:00Z", character.created_at)

    def test_malformed_fields_fall_back_to_defaults(self) -> None:
        character = character_from_payload(
            {
                "id": "x",
                "name": "Broken",
                "location": "Miami",
                "health": "lots",
                "cash": -50,
                "skills": "none",
                "inventory": [{"id": "knife", "quantity": 0}, "junk", {"quantity": 2}],
            }
        )

        self.assertEqual(100, character.health)
        self.assertEqual(0, character.cash)
        self.assertEqual(1, character.skill_level("strength"))
        self.assertEqual((), character.inventory)

    def test_activity_payload_uses_type_key(self) -> None:
        entry = ActivityEntry(kind="item_sold", message="Sold 1x Pistol for $350", timestamp="t0")
        payload = activity_to_payload(entry)
        self.assertEqual({"type": "item_sold", "message": "Sold 1x Pistol for $350", "timestamp": "t0"}, payload)
        self.assertEqual(entry, activity_from_payload(payload))


if __name__ == "__main__":
    unittest.main()
