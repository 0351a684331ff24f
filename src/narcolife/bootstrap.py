import logging
import os
import random
from dataclasses import dataclass
from pathlib import Path

from narcolife.application.presenter import CharacterPresenter
from narcolife.application.services.activity_log import register_activity_log_handlers
from narcolife.application.services.event_bus import EventBus
from narcolife.application.services.game_service import GameService
from narcolife.application.services.seed_policy import SeededRngFactory, derive_seed
from narcolife.domain.repositories import ActivityLogRepository, CharacterRepository
from narcolife.infrastructure.inmemory.inmemory_repos import InMemoryActivityLogRepository, InMemoryCharacterRepository
from narcolife.infrastructure.inmemory.static_catalog import build_default_catalog
from narcolife.infrastructure.json_store import JsonActivityLogRepository, JsonCharacterRepository, JsonFileStore


logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("memory", "json", "sql")
DEFAULT_SAVE_PATH = "~/.narcolife/save.json"
DEFAULT_DATABASE_URL = "sqlite:///narcolife.db"


@dataclass(frozen=True)
class Settings:
    storage: str = "json"
    save_path: str = DEFAULT_SAVE_PATH
    database_url: str = DEFAULT_DATABASE_URL
    rng_seed: int | None = None
    account: str | None = None
    log_level: str = "WARNING"


def load_settings() -> Settings:
    storage = os.getenv("NARCO_STORAGE", "json").strip().lower() or "json"
    if storage not in STORAGE_BACKENDS:
        logger.warning("Unknown NARCO_STORAGE=%s; using json", storage)
        storage = "json"

    raw_seed = os.getenv("NARCO_RNG_SEED", "").strip()
    rng_seed = None
    if raw_seed:
        try:
            rng_seed = int(raw_seed)
        except ValueError:
            # Non-numeric seeds still give a reproducible session.
            rng_seed = derive_seed("session", {"seed": raw_seed})

    return Settings(
        storage=storage,
        save_path=os.getenv("NARCO_SAVE_PATH", DEFAULT_SAVE_PATH).strip() or DEFAULT_SAVE_PATH,
        database_url=os.getenv("NARCO_DATABASE_URL", DEFAULT_DATABASE_URL).strip() or DEFAULT_DATABASE_URL,
        rng_seed=rng_seed,
        account=os.getenv("NARCO_ACCOUNT", "").strip() or None,
        log_level=os.getenv("NARCO_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
    )


def _build_inmemory_repos() -> tuple[CharacterRepository, ActivityLogRepository]:
    return InMemoryCharacterRepository(), InMemoryActivityLogRepository()


def _build_json_repos(save_path: str) -> tuple[CharacterRepository, ActivityLogRepository]:
    store = JsonFileStore(Path(save_path).expanduser())
    return JsonCharacterRepository(store), JsonActivityLogRepository(store)


def _build_sql_repos(database_url: str) -> tuple[CharacterRepository, ActivityLogRepository]:
    from narcolife.infrastructure.db.sql.connection import build_engine, build_session_factory, ensure_schema, probe
    from narcolife.infrastructure.db.sql.repos import SqlActivityLogRepository, SqlCharacterRepository

    engine = build_engine(database_url)
    # Force an early connectivity check so fallback happens before entering menus.
    probe(engine)
    ensure_schema(engine)
    session_factory = build_session_factory(engine)
    return SqlCharacterRepository(session_factory), SqlActivityLogRepository(session_factory)


def build_repositories(settings: Settings) -> tuple[CharacterRepository, ActivityLogRepository]:
    if settings.storage == "memory":
        return _build_inmemory_repos()
    if settings.storage == "sql":
        try:
            return _build_sql_repos(settings.database_url)
        except Exception as exc:
            logger.warning("SQL store unavailable at %s: %s", settings.database_url, exc)
            print(f"Database unavailable, falling back to in-memory. Reason: {exc}")
            return _build_inmemory_repos()
    return _build_json_repos(settings.save_path)


def create_game_service(
    settings: Settings | None = None,
    presenter: CharacterPresenter | None = None,
) -> GameService:
    settings = settings or load_settings()
    character_repo, activity_repo = build_repositories(settings)

    event_bus = EventBus()
    register_activity_log_handlers(event_bus, activity_repo)

    rng = random.Random(settings.rng_seed) if settings.rng_seed is not None else random.Random()
    rng_factory = SeededRngFactory(settings.rng_seed) if settings.rng_seed is not None else None
    return GameService(
        character_repo,
        build_default_catalog(),
        activity_repo=activity_repo,
        event_bus=event_bus,
        presenter=presenter,
        rng=rng,
        rng_factory=rng_factory,
    )
