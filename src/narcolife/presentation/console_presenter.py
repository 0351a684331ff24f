from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from narcolife.application.presenter import CharacterPresenter
from narcolife.domain.models.character import Character
from narcolife.domain.services.character_rules import xp_to_next_level


_BAR_WIDTH = 20


def format_number(value: int) -> str:
    number = int(value)
    if number >= 1_000_000:
        return f"{number / 1_000_000:.1f}M"
    if number >= 1_000:
        return f"{number / 1_000:.1f}K"
    return str(number)


def health_style(health: int) -> str:
    if health >= 70:
        return "green"
    if health >= 30:
        return "yellow"
    return "red"


def stamina_style(stamina: int) -> str:
    if stamina >= 50:
        return "blue"
    if stamina >= 20:
        return "yellow"
    return "red"


def vital_bar(value: int, style: str, width: int = _BAR_WIDTH) -> str:
    filled = max(0, min(width, int(value) * width // 100))
    return f"[{style}]{'█' * filled}[/{style}][dim]{'░' * (width - filled)}[/dim] {int(value)}/100"


def build_hud_panel(character: Character) -> Panel:
    table = Table.grid(padding=(0, 1))
    table.add_column(style="bold yellow", justify="right")
    table.add_column(style="white")
    table.add_row("Name", f"{escape(character.name)} (Lv {character.level})")
    table.add_row("Location", character.location)
    table.add_row("Health", vital_bar(character.health, health_style(character.health)))
    table.add_row("Stamina", vital_bar(character.stamina, stamina_style(character.stamina)))
    table.add_row("Cash", f"${format_number(character.cash)}")
    table.add_row("XP", f"{format_number(character.xp)} XP ({xp_to_next_level(character.xp)} to next)")
    return Panel.fit(table, title="[bold yellow]Narco Life[/bold yellow]", border_style="yellow")


class ConsoleCharacterPresenter(CharacterPresenter):
    """Reprints the HUD with the latest message after each committed action."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show(self, character: Character, message: str) -> None:
        self.console.print(build_hud_panel(character))
        if message:
            self.console.print(f"[bold]{escape(message)}[/bold]")
