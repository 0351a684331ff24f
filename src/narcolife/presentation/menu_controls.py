from rich.console import Console
from rich.panel import Panel


_CONSOLE = Console()
_MENU_BORDER = "yellow"


def _decorate_title(title: str) -> str:
    core = str(title or "").strip()
    if not core:
        core = "Menu"
    return f"[bold yellow]{core}[/bold yellow]"


def clear_screen() -> None:
    """Clear the console; a no-op when output is not a terminal."""

    _CONSOLE.clear()


def normalize_menu_key(key):
    if key is None:
        return "ESC"

    lowered = str(key).strip().lower()
    if lowered in {"q", "esc", "b", "back", "x"}:
        return "ESC"
    if lowered.isdigit():
        return int(lowered)
    return lowered


def read_line(prompt: str = "> ") -> str | None:
    """Read one line of input; returns None when stdin is closed."""

    try:
        return _CONSOLE.input(prompt)
    except EOFError:
        return None


def numbered_menu(title: str, options: list[str], footer_hint: str | None = None) -> int:
    """Render a numbered menu and return the chosen index, or -1 for back."""

    if not options:
        raise ValueError("numbered_menu requires at least one option")

    body_lines: list[str] = []
    for idx, option in enumerate(options, start=1):
        body_lines.append(f"[bold yellow]{idx:>2}[/bold yellow]  {option}")
    body_lines.append("")
    if footer_hint:
        body_lines.append(f"[yellow]{footer_hint}[/yellow]")
    body_lines.append("[dim]Type a number and press ENTER. Q goes back.[/dim]")
    _CONSOLE.print(
        Panel.fit(
            "\n".join(body_lines),
            title=_decorate_title(title),
            border_style=_MENU_BORDER,
            padding=(0, 1),
        )
    )

    while True:
        key = normalize_menu_key(read_line())
        if key == "ESC":
            return -1
        if isinstance(key, int) and 1 <= key <= len(options):
            return key - 1
        _CONSOLE.print(f"[red]Choose a number between 1 and {len(options)}.[/red]")


def prompt_text(prompt: str) -> str:
    value = read_line(f"[bold]{prompt}[/bold] ")
    return (value or "").strip()


def prompt_quantity(prompt: str, maximum: int, default: int = 1) -> int:
    """Ask for a quantity in 1..maximum; blank keeps the default, 0 or Q cancels."""

    if maximum < 1:
        return 0
    while True:
        raw = read_line(f"[bold]{prompt}[/bold] [dim](1-{maximum}, default {default})[/dim] ")
        key = normalize_menu_key(raw)
        if key == "ESC" or key == 0:
            return 0
        if key == "":
            return max(1, min(int(default), maximum))
        if isinstance(key, int) and 1 <= key <= maximum:
            return key
        _CONSOLE.print(f"[red]Enter a quantity between 1 and {maximum}.[/red]")


def confirm(prompt: str) -> bool:
    answer = normalize_menu_key(read_line(f"[bold]{prompt}[/bold] [dim](y/n)[/dim] "))
    return answer in {"y", "yes"}


def prompt_continue(message: str = "Press ENTER to continue...") -> None:
    read_line(f"[dim]{message}[/dim]")
