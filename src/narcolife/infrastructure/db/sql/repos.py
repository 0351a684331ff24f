import json
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.orm import sessionmaker

from narcolife.domain.models.activity import ActivityEntry
from narcolife.domain.models.character import Character
from narcolife.domain.repositories import ActivityLogRepository, CharacterRepository
from narcolife.infrastructure.character_codec import character_from_payload, character_to_payload


_ACTIVE_SLOT = 1

_CHARACTER_COLUMNS = (
    "character_id, account_id, sort_order, name, location, health, stamina, cash, xp, "
    "skills_json, inventory_json, completed_json, created_at"
)
_CHARACTER_VALUES = (
    ":cid, :account_id, :sort_order, :name, :location, :health, :stamina, :cash, :xp, "
    ":skills_json, :inventory_json, :completed_json, :created_at"
)
_UPDATABLE_COLUMNS = (
    "account_id",
    "sort_order",
    "name",
    "location",
    "health",
    "stamina",
    "cash",
    "xp",
    "skills_json",
    "inventory_json",
    "completed_json",
    "created_at",
)


def _dialect(session) -> str:
    return session.bind.dialect.name if session.bind is not None else "sqlite"


def _upsert_sql(dialect: str, table: str, columns: str, values: str, key: str, updatable) -> str:
    if dialect == "mysql":
        updates = ", ".join(f"{column} = VALUES({column})" for column in updatable)
        return f"INSERT INTO {table} ({columns}) VALUES ({values}) ON DUPLICATE KEY UPDATE {updates}"
    updates = ", ".join(f"{column} = excluded.{column}" for column in updatable)
    return f"INSERT INTO {table} ({columns}) VALUES ({values}) ON CONFLICT({key}) DO UPDATE SET {updates}"


def _row_to_character(row) -> Character:
    return character_from_payload(
        {
            "id": row.character_id,
            "account_id": row.account_id,
            "name": row.name,
            "location": row.location,
            "health": row.health,
            "stamina": row.stamina,
            "cash": row.cash,
            "xp": row.xp,
            "skills": json.loads(row.skills_json or "{}"),
            "inventory": json.loads(row.inventory_json or "[]"),
            "completed_missions": json.loads(row.completed_json or "[]"),
            "created_at": row.created_at,
        }
    )


class SqlCharacterRepository(CharacterRepository):
    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory

    def load(self, account_id: str) -> List[Character]:
        with self.session_factory() as session:
            rows = session.execute(
                text(
                    """
                    SELECT character_id, account_id, name, location, health, stamina, cash, xp,
                           skills_json, inventory_json, completed_json, created_at
                    FROM characters
                    WHERE account_id = :account_id
                    ORDER BY sort_order, character_id
                    """
                ),
                {"account_id": str(account_id)},
            ).all()
            return [_row_to_character(row) for row in rows]

    def save(self, account_id: str, characters: List[Character]) -> None:
        with self.session_factory.begin() as session:
            statement = text(
                _upsert_sql(
                    _dialect(session),
                    "characters",
                    _CHARACTER_COLUMNS,
                    _CHARACTER_VALUES,
                    "character_id",
                    _UPDATABLE_COLUMNS,
                )
            )
            keep_ids = [character.id for character in characters]
            existing = session.execute(
                text("SELECT character_id FROM characters WHERE account_id = :account_id"),
                {"account_id": str(account_id)},
            ).all()
            for row in existing:
                if row.character_id not in keep_ids:
                    session.execute(
                        text("DELETE FROM characters WHERE character_id = :cid"),
                        {"cid": row.character_id},
                    )

            for position, character in enumerate(characters):
                payload = character_to_payload(character)
                session.execute(
                    statement,
                    {
                        "cid": character.id,
                        "account_id": str(account_id),
                        "sort_order": position,
                        "name": character.name,
                        "location": character.location,
                        "health": int(character.health),
                        "stamina": int(character.stamina),
                        "cash": int(character.cash),
                        "xp": int(character.xp),
                        "skills_json": json.dumps(payload["skills"], sort_keys=True),
                        "inventory_json": json.dumps(payload["inventory"]),
                        "completed_json": json.dumps(payload["completed_missions"]),
                        "created_at": character.created_at,
                    },
                )

    def get(self, account_id: str, character_id: str) -> Optional[Character]:
        with self.session_factory() as session:
            row = session.execute(
                text(
                    """
                    SELECT character_id, account_id, name, location, health, stamina, cash, xp,
                           skills_json, inventory_json, completed_json, created_at
                    FROM characters
                    WHERE account_id = :account_id AND character_id = :cid
                    """
                ),
                {"account_id": str(account_id), "cid": str(character_id)},
            ).first()
            return _row_to_character(row) if row else None

    def load_active(self) -> Optional[Character]:
        with self.session_factory() as session:
            row = session.execute(
                text("SELECT payload_json FROM active_character WHERE slot = :slot"),
                {"slot": _ACTIVE_SLOT},
            ).first()
            if not row:
                return None
            return character_from_payload(json.loads(row.payload_json))

    def save_active(self, character: Character) -> None:
        with self.session_factory.begin() as session:
            statement = _upsert_sql(
                _dialect(session),
                "active_character",
                "slot, payload_json",
                ":slot, :payload_json",
                "slot",
                ("payload_json",),
            )
            session.execute(
                text(statement),
                {"slot": _ACTIVE_SLOT, "payload_json": json.dumps(character_to_payload(character))},
            )

    def clear_active(self) -> None:
        with self.session_factory.begin() as session:
            session.execute(text("DELETE FROM active_character WHERE slot = :slot"), {"slot": _ACTIVE_SLOT})


class SqlActivityLogRepository(ActivityLogRepository):
    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory

    def load(self, character_id: str) -> List[ActivityEntry]:
        with self.session_factory() as session:
            rows = session.execute(
                text(
                    """
                    SELECT kind, message, logged_at
                    FROM activity_log
                    WHERE character_id = :cid
                    ORDER BY position
                    """
                ),
                {"cid": str(character_id)},
            ).all()
            return [ActivityEntry(kind=row.kind, message=row.message, timestamp=row.logged_at) for row in rows]

    def save(self, character_id: str, entries: List[ActivityEntry]) -> None:
        with self.session_factory.begin() as session:
            session.execute(text("DELETE FROM activity_log WHERE character_id = :cid"), {"cid": str(character_id)})
            for position, entry in enumerate(entries):
                session.execute(
                    text(
                        """
                        INSERT INTO activity_log (character_id, position, kind, message, logged_at)
                        VALUES (:cid, :position, :kind, :message, :logged_at)
                        """
                    ),
                    {
                        "cid": str(character_id),
                        "position": position,
                        "kind": entry.kind,
                        "message": entry.message,
                        "logged_at": entry.timestamp,
                    },
                )
