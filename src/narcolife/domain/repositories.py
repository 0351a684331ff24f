from abc import ABC, abstractmethod
from typing import List, Optional

from narcolife.domain.models.activity import ActivityEntry
from narcolife.domain.models.character import Character


class CharacterRepository(ABC):
    @abstractmethod
    def load(self, account_id: str) -> List[Character]:
        raise NotImplementedError

    @abstractmethod
    def save(self, account_id: str, characters: List[Character]) -> None:
        raise NotImplementedError

    @abstractmethod
    def load_active(self) -> Optional[Character]:
        raise NotImplementedError

    @abstractmethod
    def save_active(self, character: Character) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear_active(self) -> None:
        raise NotImplementedError

    def get(self, account_id: str, character_id: str) -> Optional[Character]:
        """Convenience lookup over load(); stores may override with a direct read."""
        for character in self.load(account_id):
            if character.id == character_id:
                return character
        return None

    def replace(self, account_id: str, character: Character) -> None:
        characters = self.load(account_id)
        updated = [character if row.id == character.id else row for row in characters]
        if not any(row.id == character.id for row in characters):
            updated.append(character)
        self.save(account_id, updated)


class ActivityLogRepository(ABC):
    @abstractmethod
    def load(self, character_id: str) -> List[ActivityEntry]:
        raise NotImplementedError

    @abstractmethod
    def save(self, character_id: str, entries: List[ActivityEntry]) -> None:
        raise NotImplementedError

    def clear(self, character_id: str) -> None:
        self.save(character_id, [])
