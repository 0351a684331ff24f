from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional

from narcolife.domain.models.activity import ActivityEntry
from narcolife.domain.models.character import Character
from narcolife.domain.repositories import ActivityLogRepository, CharacterRepository
from narcolife.infrastructure.character_codec import (
    activity_from_payload,
    activity_to_payload,
    character_from_payload,
    character_to_payload,
)


logger = logging.getLogger(__name__)

ACTIVE_CHARACTER_KEY = "currentCharacter"


def characters_key(account_id: str) -> str:
    return f"characters_{account_id}"


def activity_key(character_id: str) -> str:
    return f"activity_{character_id}"


class SaveFileError(RuntimeError):
    pass


class JsonFileStore:
    """Flat key/value document on disk, rewritten atomically on every set."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SaveFileError(f"Save file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise SaveFileError(f"Save file {self.path} does not hold a JSON object")
        return payload

    def _write_all(self, payload: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._read_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        payload = self._read_all()
        payload[key] = value
        self._write_all(payload)

    def remove(self, key: str) -> None:
        payload = self._read_all()
        if key in payload:
            del payload[key]
            self._write_all(payload)

    def keys(self) -> list[str]:
        return sorted(self._read_all().keys())


class JsonCharacterRepository(CharacterRepository):
    def __init__(self, store: JsonFileStore) -> None:
        self.store = store

    def load(self, account_id: str) -> List[Character]:
        rows = self.store.get(characters_key(account_id), [])
        characters: List[Character] = []
        for row in rows if isinstance(rows, list) else []:
            if not isinstance(row, dict):
                logger.warning("Skipping malformed character row for account %s", account_id)
                continue
            characters.append(character_from_payload(row))
        return characters

    def save(self, account_id: str, characters: List[Character]) -> None:
        self.store.set(characters_key(account_id), [character_to_payload(row) for row in characters])

    def load_active(self) -> Optional[Character]:
        payload = self.store.get(ACTIVE_CHARACTER_KEY)
        if not isinstance(payload, dict):
            return None
        return character_from_payload(payload)

    def save_active(self, character: Character) -> None:
        self.store.set(ACTIVE_CHARACTER_KEY, character_to_payload(character))

    def clear_active(self) -> None:
        self.store.remove(ACTIVE_CHARACTER_KEY)


class JsonActivityLogRepository(ActivityLogRepository):
    def __init__(self, store: JsonFileStore) -> None:
        self.store = store

    def load(self, character_id: str) -> List[ActivityEntry]:
        rows = self.store.get(activity_key(character_id), [])
        return [activity_from_payload(row) for row in rows if isinstance(row, dict)] if isinstance(rows, list) else []

    def save(self, character_id: str, entries: List[ActivityEntry]) -> None:
        self.store.set(activity_key(character_id), [activity_to_payload(entry) for entry in entries])

    def clear(self, character_id: str) -> None:
        self.store.remove(activity_key(character_id))
