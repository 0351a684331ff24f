CONTRACT_VERSION = "1.0.0"

COMMAND_INTENTS = (
    "create_character_intent",
    "delete_character_intent",
    "select_character_intent",
    "travel_intent",
    "buy_item_intent",
    "sell_item_intent",
    "use_item_intent",
    "drop_item_intent",
    "attempt_mission_intent",
    "upgrade_skill_intent",
)

QUERY_INTENTS = (
    "list_character_summaries",
    "list_starting_cities_intent",
    "get_active_character_intent",
    "get_hud_view_intent",
    "get_travel_destinations_intent",
    "get_streets_view_intent",
    "select_npc_intent",
    "refresh_trade_view_intent",
    "get_inventory_view_intent",
    "get_missions_view_intent",
    "get_skill_tree_view_intent",
    "get_activity_log_intent",
)

CONTRACT_DTO_TYPES = (
    "ActionResult",
    "CharacterSummaryView",
    "HudView",
    "TravelView",
    "StreetsView",
    "NpcTradeView",
    "InventoryView",
    "MissionsView",
    "SkillTreeView",
    "ActivityView",
)
