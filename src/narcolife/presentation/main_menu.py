from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from narcolife.application.services.balance_tables import MAX_CHARACTERS_PER_ACCOUNT
from narcolife.presentation.game_loop import run_game_loop
from narcolife.presentation.menu_controls import clear_screen, confirm, numbered_menu, prompt_continue, prompt_text


_CONSOLE = Console()
_SPLASH_BORDER = "yellow"
_ERROR_BORDER = "red"
_EXIT_BORDER = "magenta"


def _ornate_title(title: str) -> str:
    return f"[bold yellow]{title}[/bold yellow]"


def _show_splash() -> None:
    clear_screen()
    _CONSOLE.print(
        Panel.fit(
            "[bold yellow]NARCO LIFE[/bold yellow]\n[dim]Build your empire from the streets up.[/dim]",
            border_style=_SPLASH_BORDER,
            title=_ornate_title("Welcome"),
        )
    )


def _show_messages(title: str, messages, *, error: bool = False) -> None:
    _CONSOLE.print(
        Panel.fit(
            "\n".join(escape(str(line)) for line in messages or ["No updates."]),
            title=_ornate_title(title),
            border_style=_ERROR_BORDER if error else _SPLASH_BORDER,
        )
    )


def prompt_account(default_account: str | None = None) -> str | None:
    if default_account:
        return default_account.strip()
    account = prompt_text("Account name (blank to quit):")
    return account or None


def _run_create_character(game_service, account_id: str) -> str | None:
    clear_screen()
    name = prompt_text("Character name (3-20 characters):")
    if not name:
        return None

    cities = game_service.list_starting_cities_intent()
    options = [f"{city.name}, {city.region} - {city.description}" for city in cities]
    choice = numbered_menu("Starting Location", options)
    if choice == -1:
        return None

    result = game_service.create_character_intent(account_id, name, cities[choice].name)
    _show_messages("New Character", result.messages, error=not result.success)
    prompt_continue()
    return result.character.id if result.success and result.character is not None else None


def _run_delete_character(game_service, account_id: str) -> None:
    summaries = game_service.list_character_summaries(account_id)
    if not summaries:
        return
    options = [escape(row.name) for row in summaries] + ["Back"]
    choice = numbered_menu("Delete which character?", options)
    if choice in {-1, len(options) - 1}:
        return
    target = summaries[choice]
    if not confirm(f"Delete {escape(target.name)} forever?"):
        return
    result = game_service.delete_character_intent(account_id, target.id)
    _show_messages("Delete Character", result.messages, error=not result.success)
    prompt_continue()


def character_select(game_service, account_id: str) -> None:
    while True:
        clear_screen()
        summaries = game_service.list_character_summaries(account_id)
        options = [
            f"{escape(row.name)} - Lv {row.level}, {row.location}, ${row.cash:,}"
            for row in summaries
        ]
        can_create = len(summaries) < MAX_CHARACTERS_PER_ACCOUNT
        actions = []
        if can_create:
            actions.append("Create character")
        if summaries:
            actions.append("Delete character")
        actions.append("Quit")
        footer = f"{len(summaries)}/{MAX_CHARACTERS_PER_ACCOUNT} characters on account {escape(account_id)}"
        choice = numbered_menu("Select Your Character", options + actions, footer_hint=footer)
        if choice == -1:
            return

        if choice < len(summaries):
            selected = summaries[choice]
            result = game_service.select_character_intent(account_id, selected.id)
            if not result.success:
                _show_messages("Select Character", result.messages, error=True)
                prompt_continue()
                continue
            run_game_loop(game_service, account_id, selected.id)
            continue

        action = actions[choice - len(summaries)]
        if action == "Create character":
            character_id = _run_create_character(game_service, account_id)
            if character_id is not None:
                game_service.select_character_intent(account_id, character_id)
                run_game_loop(game_service, account_id, character_id)
        elif action == "Delete character":
            _run_delete_character(game_service, account_id)
        else:
            return


def main_menu(game_service, default_account: str | None = None) -> None:
    _show_splash()
    account_id = prompt_account(default_account)
    if account_id:
        character_select(game_service, account_id)
    clear_screen()
    _CONSOLE.print(
        Panel.fit(
            "[bold magenta]Stay low. See you on the streets.[/bold magenta]",
            title=_ornate_title("Farewell"),
            border_style=_EXIT_BORDER,
        )
    )
