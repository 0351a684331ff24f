from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable, List

from narcolife.application.services.balance_tables import (
    CHARACTER_NAME_MAX_LENGTH,
    CHARACTER_NAME_MIN_LENGTH,
    MAX_CHARACTERS_PER_ACCOUNT,
    STARTING_CASH,
    STARTING_HEALTH,
    STARTING_STAMINA,
    STARTING_SKILL_LEVEL,
)
from narcolife.domain.catalog import Catalog
from narcolife.domain.errors import IneligibleAction, NotFound
from narcolife.domain.models.character import SKILL_NAMES, Character
from narcolife.domain.repositories import CharacterRepository


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CharacterCreationService:
    def __init__(
        self,
        character_repo: CharacterRepository,
        catalog: Catalog,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], str] | None = None,
    ):
        self.character_repo = character_repo
        self.catalog = catalog
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._clock = clock or _utc_now_iso

    @staticmethod
    def sanitize_name(raw: str) -> str:
        trimmed = (raw or "").strip()
        return "".join(ch for ch in trimmed if ch.isprintable() and ch not in "\t\r\n")

    def validate_name(self, account_id: str, raw_name: str) -> str:
        name = self.sanitize_name(raw_name)
        if not name:
            raise IneligibleAction("Character name is required")
        if len(name) < CHARACTER_NAME_MIN_LENGTH:
            raise IneligibleAction(f"Name must be at least {CHARACTER_NAME_MIN_LENGTH} characters")
        if len(name) > CHARACTER_NAME_MAX_LENGTH:
            raise IneligibleAction(f"Name must be less than {CHARACTER_NAME_MAX_LENGTH + 1} characters")

        existing = self.character_repo.load(account_id)
        if any(row.name.lower() == name.lower() for row in existing):
            raise IneligibleAction("You already have a character with this name")
        return name

    def list_characters(self, account_id: str) -> List[Character]:
        return list(self.character_repo.load(account_id))

    def create_character(self, account_id: str, name: str, starting_location: str) -> Character:
        account = str(account_id or "").strip()
        if not account:
            raise IneligibleAction("An account is required to create a character")

        existing = self.character_repo.load(account)
        if len(existing) >= MAX_CHARACTERS_PER_ACCOUNT:
            raise IneligibleAction(f"Maximum {MAX_CHARACTERS_PER_ACCOUNT} characters allowed per account")
        clean_name = self.validate_name(account, name)
        city = self.catalog.get_city_by_name(starting_location)

        character = Character(
            id=self._id_factory(),
            account_id=account,
            name=clean_name,
            location=city.name,
            health=STARTING_HEALTH,
            stamina=STARTING_STAMINA,
            cash=STARTING_CASH,
            xp=0,
            skills={skill: STARTING_SKILL_LEVEL for skill in SKILL_NAMES},
            created_at=self._clock(),
        )
        self.character_repo.save(account, existing + [character])
        return character

    def delete_character(self, account_id: str, character_id: str) -> Character:
        existing = self.character_repo.load(account_id)
        target = next((row for row in existing if row.id == character_id), None)
        if target is None:
            raise NotFound("character", character_id)

        self.character_repo.save(account_id, [row for row in existing if row.id != character_id])
        active = self.character_repo.load_active()
        if active is not None and active.id == character_id:
            self.character_repo.clear_active()
        return target

    def select_character(self, account_id: str, character_id: str) -> Character:
        character = self.character_repo.get(account_id, character_id)
        if character is None:
            raise NotFound("character", character_id)
        self.character_repo.save_active(character)
        return character
