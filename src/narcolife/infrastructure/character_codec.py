from __future__ import annotations

from typing import Any, Mapping

from narcolife.domain.models.activity import ActivityEntry
from narcolife.domain.models.character import Character, InventoryEntry
from narcolife.domain.services.character_rules import clamp_vital


def _int_or(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _inventory_rows(raw: Any) -> list:
    # Browser saves nest the list under inventory.items.
    if isinstance(raw, Mapping):
        raw = raw.get("items", [])
    return list(raw) if isinstance(raw, (list, tuple)) else []


def character_to_payload(character: Character) -> dict[str, Any]:
    """JSON-able form; level is derived from xp and never written."""
    return {
        "id": character.id,
        "account_id": character.account_id,
        "name": character.name,
        "location": character.location,
        "health": int(character.health),
        "stamina": int(character.stamina),
        "cash": int(character.cash),
        "xp": int(character.xp),
        "skills": dict(character.skills),
        "inventory": [{"id": entry.item_id, "quantity": int(entry.quantity)} for entry in character.inventory],
        "completed_missions": sorted(character.completed_missions),
        "created_at": character.created_at,
    }


def character_from_payload(payload: Mapping[str, Any]) -> Character:
    merged: dict[str, int] = {}
    for row in _inventory_rows(payload.get("inventory")):
        if not isinstance(row, Mapping):
            continue
        item_id = str(row.get("id") or row.get("item_id") or "").strip()
        quantity = _int_or(row.get("quantity", 1), 0)
        if not item_id or quantity < 1:
            continue
        merged[item_id] = merged.get(item_id, 0) + quantity

    completed = payload.get("completed_missions", payload.get("completedMissions")) or []
    skills = payload.get("skills")
    return Character(
        id=str(payload.get("id", "")),
        account_id=str(payload.get("account_id", payload.get("userId", "")) or ""),
        name=str(payload.get("name", "")),
        location=str(payload.get("location", "")),
        health=clamp_vital(_int_or(payload.get("health"), 100)),
        stamina=clamp_vital(_int_or(payload.get("stamina"), 100)),
        cash=max(0, _int_or(payload.get("cash"), 0)),
        xp=max(0, _int_or(payload.get("xp"), 0)),
        skills=skills if isinstance(skills, Mapping) else {},
        inventory=tuple(InventoryEntry(item_id=key, quantity=value) for key, value in merged.items()),
        completed_missions=frozenset(str(mission_id) for mission_id in completed),
        created_at=payload.get("created_at", payload.get("createdAt")),
    )


def activity_to_payload(entry: ActivityEntry) -> dict[str, Any]:
    return {"type": entry.kind, "message": entry.message, "timestamp": entry.timestamp}


def activity_from_payload(payload: Mapping[str, Any]) -> ActivityEntry:
    return ActivityEntry(
        kind=str(payload.get("type", payload.get("kind", "")) or ""),
        message=str(payload.get("message", "") or ""),
        timestamp=str(payload.get("timestamp", "") or ""),
    )
