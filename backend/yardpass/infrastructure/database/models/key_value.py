"""SQLAlchemy ORM models backing the SQL key-value store."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from yardpass.infrastructure.database.base import Base


class KeyValueModel(Base):
    """ORM model — maps to the 'kv_entries' table."""

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<KeyValueModel(key='{self.key}')>"


class SetMemberModel(Base):
    """ORM model — maps to the 'kv_set_members' table (one row per set member)."""

    __tablename__ = "kv_set_members"

    set_key: Mapped[str] = mapped_column(String(255), primary_key=True)
    member: Mapped[str] = mapped_column(String(255), primary_key=True)

    def __repr__(self) -> str:
        return f"<SetMemberModel(set='{self.set_key}', member='{self.member}')>"
