"""Generate database session"""

from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import get_settings
from src.db.schema import Base


def build_engine(database_url: str | None = None) -> Engine:
    """Engine for the configured database. Makes sure all tables exist."""
    engine = create_engine(database_url or get_settings().database_url)
    Base.metadata.create_all(bind=engine)
    return engine


def get_db(engine: Engine | None = None) -> Generator[Session, None, None]:
    SessionLocal = sessionmaker(bind=engine or build_engine())
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
