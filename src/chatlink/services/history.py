# region Docstring
"""
chatlink.services.history

Server history repository.

Overview:
- Persists the servers the user connected to (ServerHistoryEntity) and serves the
    short suggestion list shown under the address input.

Contents:
- ServerHistoryRepository:
    - init(): create the table.
    - query(filter_text, limit) -> list[ServerHistoryEntry]:
        Authenticated servers only (username not null), optionally restricted to
        URLs containing filter_text literally, most recently used first, at most
        `limit` rows.
    - record(url, username) -> Optional[ServerHistoryEntry]:
        Insert or touch the row for a canonical URL.
    - remove(entry) -> bool:
        Delete the row permanently.

Design Notes:
- Every public method degrades instead of raising: a broken store yields no
    suggestions, a failed delete leaves the entry in place. Failures are logged.
- The filter is matched with LIKE ... ESCAPE '\\' after escaping %, _ and the escape
    character itself, so user input is never interpreted as a pattern.
"""
# endregion
# region Imports
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chatlink.constants import HISTORY_LIMIT
from chatlink.database import DatabaseSessionGenerator
from chatlink.errors import DeleteFailed, StorageUnavailable
from chatlink.logger import get_logger
from chatlink.models import ServerHistoryEntity, ServerHistoryEntry
from chatlink.utils import LIKE_ESCAPE_CHAR, get_time, sanitize_like_string

# endregion

logger = get_logger(__name__)


class ServerHistoryRepository:
    """
    Repository over the servers_history table.
    """

    def __init__(self, db: DatabaseSessionGenerator):
        """
        Args:
            db (DatabaseSessionGenerator): Source of async sessions.
        """
        if db is None:
            raise ValueError("A DatabaseSessionGenerator is required.")
        self.db_session_generator = db

    def _session(self) -> AsyncSession:
        return self.db_session_generator.get_async_session()

    async def init(self) -> None:
        await self.db_session_generator.init_db()

    # region Query
    async def _fetch(
        self, filter_text: Optional[str], limit: int
    ) -> list[ServerHistoryEntry]:
        stmt = select(ServerHistoryEntity).where(ServerHistoryEntity.username.is_not(None))
        if filter_text:
            like = f"%{sanitize_like_string(filter_text)}%"
            stmt = stmt.where(ServerHistoryEntity.url.like(like, escape=LIKE_ESCAPE_CHAR))
        stmt = stmt.order_by(
            ServerHistoryEntity.updated_at.desc(), ServerHistoryEntity.id.desc()
        ).limit(limit)

        try:
            async with self._session() as session:
                rows = (await session.scalars(stmt)).all()
                return [row.model for row in rows]
        except SQLAlchemyError as e:
            raise StorageUnavailable(str(e)) from e

    async def query(
        self, filter_text: Optional[str] = None, limit: int = HISTORY_LIMIT
    ) -> list[ServerHistoryEntry]:
        """
        Return the authenticated servers matching filter_text, most recent first.

        Args:
            filter_text (Optional[str]): Literal substring the URL must contain.
            limit (int): Maximum number of entries.

        Returns:
            list[ServerHistoryEntry]: Possibly empty; never raises.
        """
        try:
            return await self._fetch(filter_text, limit)
        except StorageUnavailable as e:
            logger.warning(f"Server history unavailable: {e}")
            return []

    # endregion
    # region Record
    async def record(
        self, url: str, username: Optional[str] = None
    ) -> Optional[ServerHistoryEntry]:
        """
        Insert or refresh the history row for a canonical URL.

        An existing username is kept when username is None.
        """
        try:
            async with self._session() as session:
                entity = await session.scalar(
                    select(ServerHistoryEntity).where(ServerHistoryEntity.url == url)
                )
                if entity is None:
                    entity = ServerHistoryEntity(url=url, username=username)
                    session.add(entity)
                else:
                    if username is not None:
                        entity.username = username
                    entity.updated_at = get_time()
                await session.commit()
                await session.refresh(entity)
                return entity.model
        except SQLAlchemyError as e:
            logger.warning(f"Could not record server history for {url}: {e}")
            return None

    # endregion
    # region Remove
    async def _delete(self, entry_id: int) -> None:
        try:
            async with self._session() as session:
                result = await session.execute(
                    delete(ServerHistoryEntity).where(ServerHistoryEntity.id == entry_id)
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise DeleteFailed(str(e)) from e
        if result.rowcount == 0:
            raise DeleteFailed(f"No server history entry with id {entry_id}")

    async def remove(self, entry: ServerHistoryEntry) -> bool:
        """Permanently delete entry. False when the delete did not happen."""
        try:
            await self._delete(entry.id)
        except DeleteFailed as e:
            logger.warning(f"Could not delete server history entry {entry.url}: {e}")
            return False
        logger.debug(f"Deleted server history entry {entry.url}")
        return True

    # endregion


__all__ = ["ServerHistoryRepository"]
