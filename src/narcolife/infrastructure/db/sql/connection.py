from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker


DEFAULT_DATABASE_URL = "sqlite:///narcolife.db"

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS characters (
        character_id VARCHAR(64) PRIMARY KEY,
        account_id VARCHAR(128) NOT NULL,
        sort_order INTEGER NOT NULL DEFAULT 0,
        name VARCHAR(64) NOT NULL,
        location VARCHAR(64) NOT NULL,
        health INTEGER NOT NULL,
        stamina INTEGER NOT NULL,
        cash INTEGER NOT NULL,
        xp INTEGER NOT NULL,
        skills_json TEXT NOT NULL,
        inventory_json TEXT NOT NULL,
        completed_json TEXT NOT NULL,
        created_at VARCHAR(64)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS active_character (
        slot INTEGER PRIMARY KEY,
        payload_json TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS activity_log (
        character_id VARCHAR(64) NOT NULL,
        position INTEGER NOT NULL,
        kind VARCHAR(32) NOT NULL,
        message TEXT NOT NULL,
        logged_at VARCHAR(64) NOT NULL,
        PRIMARY KEY (character_id, position)
    )
    """,
)


def build_engine(database_url: str = DEFAULT_DATABASE_URL) -> Engine:
    return create_engine(database_url, echo=False, future=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False)


def ensure_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))


def probe(engine: Engine) -> None:
    """Open one connection so an unreachable database fails before the menus start."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
