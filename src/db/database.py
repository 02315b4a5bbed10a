"""Generate database session"""

from functools import lru_cache
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.settings import AppSettings
from src.db.schema import Base


@lru_cache(maxsize=None)
def build_session_factory(database_url: str) -> sessionmaker[Session]:
    """Engine + session factory for the given database. Ensures all tables are created."""
    engine: Engine = create_engine(database_url)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db(settings: AppSettings | None = None) -> Generator[Session, None, None]:
    settings = settings or AppSettings.from_env()
    SessionLocal = build_session_factory(settings.database_url)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
