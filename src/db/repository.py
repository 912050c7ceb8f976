"""Protocol repository (implemented with SQLAlchemy, but anything that can store a few strings per owner will do)"""

from typing import Protocol


class HistoryRepository(Protocol):
    """Persistence layer for the games history"""

    def load_entries(self, owner_id: str) -> list[str]:
        """Stored entries of an owner, oldest first. Empty list if there are none."""
        ...

    def save_entries(self, owner_id: str, entries: list[str]) -> None:
        """Replace all entries of an owner by the given ones (oldest first)."""
        ...
