"""Key-value store backed by a SQL database through async SQLAlchemy."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from yardpass.application.interfaces import KeyValueStore
from yardpass.domain.exceptions import StorageError
from yardpass.infrastructure.database import (
    Base,
    KeyValueModel,
    SetMemberModel,
    build_engine,
    build_session_factory,
)

logger = logging.getLogger(__name__)


class SQLAlchemyKeyValueStore(KeyValueStore):
    """Implements the KeyValueStore port on two tables: entries and set members."""

    name = "sql"

    def __init__(self, database_url: str, *, echo: bool = False):
        self._engine = build_engine(database_url, echo=echo)
        self._session_factory = build_session_factory(self._engine)
        self._schema_ready = False

    async def start(self) -> None:
        if self._schema_ready:
            return
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(self.name, f"Could not create tables: {exc}") from exc
        self._schema_ready = True
        logger.info("SQL key-value store ready (%s)", self._engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        await self._engine.dispose()

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session inside one transaction, mapping driver errors to StorageError."""
        await self.start()
        try:
            async with self._session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(self.name, str(exc)) from exc

    async def get(self, key: str) -> Any | None:
        async with self._session() as session:
            model = await session.get(KeyValueModel, key)
            return json.loads(model.value) if model else None

    async def set(self, key: str, value: Any) -> None:
        async with self._session() as session:
            await session.merge(KeyValueModel(key=key, value=json.dumps(value)))

    async def sadd(self, key: str, member: str) -> None:
        async with self._session() as session:
            await session.merge(SetMemberModel(set_key=key, member=member))

    async def smembers(self, key: str) -> set[str]:
        async with self._session() as session:
            result = await session.execute(
                select(SetMemberModel.member).where(SetMemberModel.set_key == key)
            )
            return set(result.scalars().all())
