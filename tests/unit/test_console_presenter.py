import io
import sys
from pathlib import Path
import unittest

from rich.console import Console

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from narcolife.domain.models.character import Character
from narcolife.presentation.console_presenter import (
    ConsoleCharacterPresenter,
    format_number,
    health_style,
    stamina_style,
    vital_bar,
)


class FormattingTests(unittest.TestCase):
    def test_format_number_abbreviates(self) -> None:
        self.assertEqual("999", format_number(999))
        self.assertEqual("1.5K", format_number(1500))
        self.assertEqual("1.2M", format_number(1_234_567))

    def test_vital_styles_follow_thresholds(self) -> None:
        self.assertEqual("green", health_style(70))
        self.assertEqual("yellow", health_style(30))
        self.assertEqual("red", health_style(29))
        self.assertEqual("blue", stamina_style(50))
        self.assertEqual("yellow", stamina_style(20))
        self.assertEqual("red", stamina_style(5))

    def test_vital_bar_reports_value(self) -> None:
        self.assertTrue(vital_bar(55, "green").endswith("55/100"))


class ConsolePresenterTests(unittest.TestCase):
    def test_show_prints_hud_and_message(self) -> None:
        buffer = io.StringIO()
        presenter = ConsoleCharacterPresenter(Console(file=buffer, width=100, color_system=None))
        character = Character(id="c1", account_id="acct", name="[Vince]", location="Miami", cash=2500, xp=120)

        presenter.show(character, "Traveled to Miami")

        text = buffer.getvalue()
        self.assertIn("[Vince]", text)
        self.assertIn("Lv 2", text)
        self.assertIn("$2.5K", text)
        self.assertIn("Traveled to Miami", text)


if __name__ == "__main__":
    unittest.main()
