import io
import sys
from pathlib import Path
import unittest
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from narcolife.bootstrap import Settings, create_game_service
from narcolife.presentation.game_loop import run_game_loop
from narcolife.presentation.main_menu import main_menu


def _service():
    return create_game_service(Settings(storage="memory", rng_seed=1234))


class CliFlowTests(unittest.TestCase):
    def test_create_trade_use_travel_and_quit(self) -> None:
        game = _service()
        keys = [
            "acct",      # account
            "1",         # create character
            "Vince",
            "1",         # Los Angeles
            "",
            "2",         # streets
            "3",         # Dr. Rodriguez
            "1",         # health kit
            "1",         # buy
            "2",         # quantity
            "",
            "q",         # leave merchandise
            "q",         # leave streets
            "4",         # inventory
            "1",         # health kit
            "1",         # use
            "",
            "q",         # leave inventory
            "1",         # travel
            "2",         # Miami
            "y",
            "",
            "6",         # activity
            "",
            "7",         # back to characters
            "4",         # quit
        ]

        with mock.patch("builtins.input", side_effect=keys), mock.patch("sys.stdout", new_callable=io.StringIO) as output:
            main_menu(game)

        transcript = output.getvalue()
        self.assertIn("NARCO LIFE", transcript)
        self.assertIn("Vince arrives in Los Angeles", transcript)
        self.assertIn("Bought 2x Health Kit", transcript)
        self.assertIn("Used Health Kit", transcript)
        self.assertIn("Traveled to Miami", transcript)
        self.assertIn("Stay low", transcript)

        summaries = game.list_character_summaries("acct")
        self.assertEqual(["Miami"], [row.location for row in summaries])
        character = game.character_repo.get("acct", summaries[0].id)
        self.assertEqual(1, character.quantity_of("health-kit"))
        self.assertEqual("Traveled to Miami", game.get_activity_log_intent(character.id)[0].message)

    def test_invalid_name_is_reported_and_nothing_is_saved(self) -> None:
        game = _service()
        keys = ["acct", "1", "Al", "1", "", "2"]

        with mock.patch("builtins.input", side_effect=keys), mock.patch("sys.stdout", new_callable=io.StringIO) as output:
            main_menu(game)

        self.assertIn("Name must be at least 3 characters", output.getvalue())
        self.assertEqual([], game.list_character_summaries("acct"))

    def test_locked_mission_shows_requirements_without_attempt(self) -> None:
        game = _service()
        created = game.create_character_intent("acct", "Rosa", "Los Angeles")
        keys = [
            "3",         # missions
            "3",         # Jewelry Store Job (delivery, debt collection, heist)
            "",
            "q",         # leave missions
            "7",
        ]

        with mock.patch("builtins.input", side_effect=keys), mock.patch("sys.stdout", new_callable=io.StringIO) as output:
            run_game_loop(game, "acct", created.character.id)

        transcript = output.getvalue()
        self.assertIn("Jewelry Store Job", transcript)
        self.assertIn("Insufficient Skills", transcript)
        self.assertEqual(1000, game.character_repo.get("acct", created.character.id).cash)

    def test_closed_input_exits_cleanly(self) -> None:
        game = _service()
        with mock.patch("builtins.input", side_effect=EOFError), mock.patch("sys.stdout", new_callable=io.StringIO) as output:
            main_menu(game)
        self.assertIn("Stay low", output.getvalue())


if __name__ == "__main__":
    unittest.main()
