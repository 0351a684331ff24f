from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from narcolife.domain.errors import GameRuleError
from narcolife.presentation.console_presenter import format_number, health_style, stamina_style, vital_bar
from narcolife.presentation.menu_controls import (
    clear_screen,
    confirm,
    numbered_menu,
    prompt_continue,
    prompt_quantity,
)


_CONSOLE = Console()
_BORDER_LOOP = "yellow"
_BORDER_TRAVEL = "cyan"
_BORDER_STREETS = "magenta"
_BORDER_MISSIONS = "green"
_BORDER_INVENTORY = "blue"
_BORDER_SKILLS = "bright_yellow"
_BORDER_ERROR = "red"

HUB_OPTIONS = ["Travel", "Streets", "Missions", "Inventory", "Skills", "Activity", "Back to characters"]


def _ornate_title(title: str) -> str:
    return f"[bold yellow]{title}[/bold yellow]"


def _render_message_panel(title: str, lines: list[str], *, border_style: str = _BORDER_LOOP) -> None:
    rows = [str(line) for line in lines if str(line).strip()]
    _CONSOLE.print(
        Panel.fit(
            "\n".join(rows) if rows else "No updates.",
            title=_ornate_title(title),
            border_style=border_style,
        )
    )


def _render_result(game_service, result, title: str) -> None:
    # Committed actions are already shown by the presenter.
    if result.error_kind or getattr(game_service, "presenter", None) is None:
        border = _BORDER_ERROR if result.error_kind else _BORDER_LOOP
        _render_message_panel(title, list(result.messages or []), border_style=border)


def _render_hud(hud) -> None:
    table = Table.grid(padding=(0, 1))
    table.add_column(style="bold yellow", justify="right")
    table.add_column(style="white")
    table.add_row("Name", f"{escape(hud.name)} (Lv {hud.level})")
    table.add_row("Location", hud.location)
    table.add_row("Health", vital_bar(hud.health, health_style(hud.health)))
    table.add_row("Stamina", vital_bar(hud.stamina, stamina_style(hud.stamina)))
    table.add_row("Cash", f"${format_number(hud.cash)}")
    table.add_row("XP", f"{format_number(hud.xp)} XP ({hud.xp_to_next_level} to next, {hud.level_progress_percent}%)")
    table.add_row("Items", str(hud.total_items))
    _CONSOLE.print(Panel.fit(table, title=_ornate_title("Narco Life"), border_style=_BORDER_LOOP))


def _render_activity(entries) -> None:
    if not entries:
        _render_message_panel("Recent Activity", ["No recent activity"])
        return
    table = Table(show_header=True, header_style="bold yellow")
    table.add_column("When", style="dim")
    table.add_column("What")
    for entry in entries:
        table.add_row(entry.timestamp[:19].replace("T", " "), entry.message)
    _CONSOLE.print(Panel.fit(table, title=_ornate_title("Recent Activity"), border_style=_BORDER_LOOP))


def run_game_loop(game_service, account_id: str, character_id: str) -> None:
    while True:
        try:
            hud = game_service.get_hud_view_intent(account_id, character_id)
        except GameRuleError as exc:
            _render_message_panel("Narco Life", [str(exc)], border_style=_BORDER_ERROR)
            return
        clear_screen()
        _render_hud(hud)
        choice = numbered_menu(f"{hud.location}", HUB_OPTIONS)
        if choice in {-1, len(HUB_OPTIONS) - 1}:
            return
        if choice == 0:
            _run_travel(game_service, account_id, character_id)
        elif choice == 1:
            _run_streets(game_service, account_id, character_id)
        elif choice == 2:
            _run_missions(game_service, account_id, character_id)
        elif choice == 3:
            _run_inventory(game_service, account_id, character_id)
        elif choice == 4:
            _run_skills(game_service, account_id, character_id)
        elif choice == 5:
            _render_activity(game_service.get_activity_log_intent(character_id, limit=10))
            prompt_continue()


def _run_travel(game_service, account_id: str, character_id: str) -> None:
    view = game_service.get_travel_destinations_intent(account_id, character_id)
    clear_screen()
    _render_message_panel(
        "Travel Map",
        [f"Current location: {view.current_location}", f"Cash: ${view.cash:,} | Stamina: {view.stamina}/100"],
        border_style=_BORDER_TRAVEL,
    )
    options = []
    for row in view.destinations:
        label = f"{row.name}, {row.region} - ${row.travel_cost}, {row.stamina_cost} stamina"
        if row.note:
            label += f" ({row.note})"
        options.append(label)
    options.append("Back")
    choice = numbered_menu("Where to?", options)
    if choice in {-1, len(options) - 1}:
        return

    destination = view.destinations[choice]
    if destination.is_current:
        _render_message_panel("Travel", [f"You are already in {destination.name}."], border_style=_BORDER_TRAVEL)
        prompt_continue()
        return
    if not confirm(f"Travel to {destination.name} for ${destination.travel_cost} and {destination.stamina_cost} stamina?"):
        return
    result = game_service.travel_intent(account_id, character_id, destination.city_id)
    _render_result(game_service, result, "Travel")
    prompt_continue()


def _trade_item_labels(trade_view) -> list[str]:
    return [
        f"{row.name} ({row.category}) - buy ${row.buy_price:,} / sell ${row.sell_price:,} (own {row.owned})"
        for row in trade_view.items
    ]


def _run_streets(game_service, account_id: str, character_id: str) -> None:
    while True:
        streets = game_service.get_streets_view_intent(account_id, character_id)
        clear_screen()
        if not streets.npcs:
            _render_message_panel("Streets", [streets.empty_state_hint], border_style=_BORDER_STREETS)
            prompt_continue()
            return

        options = [f"{npc.name} - {npc.role}: {npc.description}" for npc in streets.npcs]
        options.append("Back")
        choice = numbered_menu(f"Streets of {streets.location}", options)
        if choice in {-1, len(options) - 1}:
            return
        _run_npc_trade(game_service, account_id, character_id, streets.npcs[choice].id)


def _run_npc_trade(game_service, account_id: str, character_id: str, npc_id: str) -> None:
    # The quote drawn here stays fixed until the contact is selected again.
    quote = game_service.select_npc_intent(account_id, character_id, npc_id).quote
    while True:
        trade_view = game_service.refresh_trade_view_intent(account_id, character_id, quote)
        clear_screen()
        _render_message_panel(
            trade_view.name,
            [f"{trade_view.role} in {trade_view.location}", trade_view.description, f"Your cash: ${trade_view.cash:,}"],
            border_style=_BORDER_STREETS,
        )
        options = _trade_item_labels(trade_view)
        options.append("Back")
        choice = numbered_menu("Merchandise", options)
        if choice in {-1, len(options) - 1}:
            return

        item = trade_view.items[choice]
        mode = numbered_menu(item.name, [f"Buy at ${item.buy_price:,}", f"Sell at ${item.sell_price:,}", "Back"])
        if mode in {-1, 2}:
            continue

        if mode == 0:
            if item.max_affordable < 1:
                _render_message_panel("Trade", ["Not enough cash for this purchase"], border_style=_BORDER_ERROR)
                prompt_continue()
                continue
            quantity = prompt_quantity("How many?", item.max_affordable)
            if quantity < 1:
                continue
            result = game_service.buy_item_intent(account_id, character_id, quote, item.item_id, quantity)
        else:
            if item.owned < 1:
                _render_message_panel("Trade", [f"You have no {item.name} to sell."], border_style=_BORDER_ERROR)
                prompt_continue()
                continue
            quantity = prompt_quantity("How many?", item.owned)
            if quantity < 1:
                continue
            result = game_service.sell_item_intent(account_id, character_id, quote, item.item_id, quantity)
        _render_result(game_service, result, "Trade")
        prompt_continue()


def _render_mission_details(mission) -> None:
    requirements = ", ".join(f"{skill.title()} {level}" for skill, level in mission.requirements.items())
    lines = [
        mission.description,
        f"Difficulty: {mission.difficulty} | Location: {mission.location}",
        f"Requirements: {requirements or 'None'}",
        f"Reward: ${mission.reward_cash:,} and {mission.reward_xp} XP",
        f"On failure: -{mission.penalty_health} health, -{mission.penalty_stamina} stamina, -${mission.penalty_cash}",
        f"Success chance: {mission.success_chance_percent}%",
    ]
    if mission.unmet_requirements:
        lines.append(f"[red]Insufficient Skills: {', '.join(mission.unmet_requirements)}[/red]")
    _render_message_panel(mission.title, lines, border_style=_BORDER_MISSIONS)


def _run_missions(game_service, account_id: str, character_id: str) -> None:
    filters = ["all", "Easy", "Medium", "Hard"]
    difficulty = "all"
    while True:
        view = game_service.get_missions_view_intent(account_id, character_id, difficulty)
        clear_screen()
        _render_message_panel(
            "Missions",
            [f"Location: {view.location} | Filter: {view.difficulty_filter} | Completed: {view.completed_count}"],
            border_style=_BORDER_MISSIONS,
        )
        options = []
        for mission in view.missions:
            marker = "" if mission.meets_requirements else " (locked)"
            options.append(
                f"{mission.title} ({mission.difficulty}) - ${mission.reward_cash:,}, "
                f"{mission.reward_xp} XP, {mission.success_chance_percent}%{marker}"
            )
        options.extend(["Change difficulty filter", "Back"])
        if not view.missions:
            _CONSOLE.print(f"[dim]{view.empty_state_hint}[/dim]")
        choice = numbered_menu("Available Missions", options)
        if choice in {-1, len(options) - 1}:
            return
        if choice == len(options) - 2:
            picked = numbered_menu("Difficulty", [label.title() for label in filters])
            if picked >= 0:
                difficulty = filters[picked]
            continue

        mission = view.missions[choice]
        clear_screen()
        _render_mission_details(mission)
        if not mission.meets_requirements:
            prompt_continue()
            continue
        if not confirm("Attempt this mission?"):
            continue
        result = game_service.attempt_mission_intent(account_id, character_id, mission.id)
        _render_result(game_service, result, "Mission Result")
        prompt_continue()


def _run_inventory(game_service, account_id: str, character_id: str) -> None:
    while True:
        view = game_service.get_inventory_view_intent(account_id, character_id)
        clear_screen()
        _render_message_panel(
            "Inventory",
            [f"Items: {view.total_items} | Estimated value: ${view.estimated_value:,}"],
            border_style=_BORDER_INVENTORY,
        )
        if not view.items:
            _render_message_panel("Inventory", [view.empty_state_hint], border_style=_BORDER_INVENTORY)
            prompt_continue()
            return

        options = [f"{row.name} x{row.quantity} ({row.category}) - {row.description}" for row in view.items]
        options.append("Back")
        choice = numbered_menu("Your Items", options)
        if choice in {-1, len(options) - 1}:
            return

        item = view.items[choice]
        actions = (["Use"] if item.usable else []) + ["Drop", "Back"]
        picked = numbered_menu(item.name, actions)
        if picked == -1 or actions[picked] == "Back":
            continue
        if actions[picked] == "Use":
            result = game_service.use_item_intent(account_id, character_id, item.item_id)
        else:
            quantity = prompt_quantity("Drop how many?", item.quantity)
            if quantity < 1:
                continue
            result = game_service.drop_item_intent(account_id, character_id, item.item_id, quantity)
        _render_result(game_service, result, "Inventory")
        prompt_continue()


def _run_skills(game_service, account_id: str, character_id: str) -> None:
    while True:
        tree = game_service.get_skill_tree_view_intent(account_id, character_id)
        clear_screen()
        _render_message_panel("Skill Tree", [f"Available XP: {tree.xp:,}"], border_style=_BORDER_SKILLS)
        options = []
        for skill in tree.skills:
            if skill.maxed:
                options.append(f"{skill.label} {skill.level}/{skill.max_level} [MAX]")
            else:
                state = "" if skill.can_upgrade else " (need more XP)"
                options.append(f"{skill.label} {skill.level}/{skill.max_level} - upgrade {skill.upgrade_cost:,} XP{state}")
        options.append("Back")
        choice = numbered_menu("Upgrade a skill", options)
        if choice in {-1, len(options) - 1}:
            return
        result = game_service.upgrade_skill_intent(account_id, character_id, tree.skills[choice].name)
        _render_result(game_service, result, "Skills")
        prompt_continue()
