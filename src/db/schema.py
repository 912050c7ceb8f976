"""Database tables / schema"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBHistoryEntry(Base):
    """One game of a participant's history, stored as the query string it traveled in."""

    __tablename__ = "history_entries"
    __table_args__ = (UniqueConstraint("owner_id", "position"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[str] = mapped_column(String(255), index=True)
    # 0 is the oldest entry
    position: Mapped[int]
    payload: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
