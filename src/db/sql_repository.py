"""Implementation of (History)Repository using SQLAlchemy"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.db.schema import DBHistoryEntry

logger = logging.getLogger(__name__)


class SQLHistoryRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def load_entries(self, owner_id: str) -> list[str]:
        """Stored entries of an owner, oldest first."""
        query = (
            select(DBHistoryEntry.payload)
            .where(DBHistoryEntry.owner_id == owner_id)
            .order_by(DBHistoryEntry.position)
        )
        return list(self.db.scalars(query))

    def save_entries(self, owner_id: str, entries: list[str]) -> None:
        """Replace all entries of an owner in a single transaction."""
        try:
            self.db.execute(delete(DBHistoryEntry).where(DBHistoryEntry.owner_id == owner_id))
            self.db.add_all(
                DBHistoryEntry(owner_id=owner_id, position=position, payload=payload)
                for position, payload in enumerate(entries)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Could not save history of %s: %s", owner_id, e)
            raise RepositoryError(f"Could not save history of {owner_id!r}.") from e
