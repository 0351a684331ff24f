from typing import Dict, List, Optional

from narcolife.domain.models.activity import ActivityEntry
from narcolife.domain.models.character import Character
from narcolife.domain.repositories import ActivityLogRepository, CharacterRepository


class InMemoryCharacterRepository(CharacterRepository):
    def __init__(self, characters: Optional[Dict[str, List[Character]]] = None) -> None:
        self._characters: Dict[str, List[Character]] = {
            str(account_id): list(rows) for account_id, rows in (characters or {}).items()
        }
        self._active: Optional[Character] = None

    def load(self, account_id: str) -> List[Character]:
        return list(self._characters.get(str(account_id), []))

    def save(self, account_id: str, characters: List[Character]) -> None:
        self._characters[str(account_id)] = list(characters)

    def load_active(self) -> Optional[Character]:
        return self._active

    def save_active(self, character: Character) -> None:
        self._active = character

    def clear_active(self) -> None:
        self._active = None


class InMemoryActivityLogRepository(ActivityLogRepository):
    def __init__(self) -> None:
        self._entries: Dict[str, List[ActivityEntry]] = {}

    def load(self, character_id: str) -> List[ActivityEntry]:
        return list(self._entries.get(str(character_id), []))

    def save(self, character_id: str, entries: List[ActivityEntry]) -> None:
        self._entries[str(character_id)] = list(entries)
