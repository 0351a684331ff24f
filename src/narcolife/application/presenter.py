from abc import ABC, abstractmethod

from narcolife.domain.models.character import Character


class CharacterPresenter(ABC):
    """Receives the committed character after every successful action."""

    @abstractmethod
    def show(self, character: Character, message: str) -> None:
        raise NotImplementedError
