import asyncio
import sqlite3
import threading
from typing import Optional

from sqlite_utils import Database
from sqlite_utils.db import NotFoundError

from chatlink.constants import CREDENTIALS_TABLE
from chatlink.errors import StorageUnavailable
from chatlink.utils import get_time


class SqliteCredentialStore:
    """
    Secure key-value store for basic-auth credentials backed by sqlite_utils.

    Rows live in the `credentials` table keyed by storage key. Calls run in a
    worker thread so the event loop never waits on SQLite; the connection must
    allow cross-thread use (see DatabaseSettings.credentials_db).
    """

    __db__: Database

    def __init__(self, db: Database) -> None:
        if db is None or not isinstance(db, Database):
            raise ValueError("A valid sqlite_utils.Database instance is required.")
        self.__db__ = db
        self._lock = threading.Lock()

    def _set(self, key: str, value: str) -> None:
        try:
            with self._lock:
                self.__db__[CREDENTIALS_TABLE].upsert(
                    {"key": key, "value": value, "updated_at": get_time().isoformat()},
                    pk="key",
                )
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Could not store credential {key}: {e}") from e

    def _get(self, key: str) -> Optional[str]:
        try:
            with self._lock:
                table = self.__db__[CREDENTIALS_TABLE]
                if not table.exists():
                    return None
                return table.get(key)["value"]
        except NotFoundError:
            return None
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Could not read credential {key}: {e}") from e

    async def set_credential(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)

    async def get_credential(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._get, key)


__all__ = ["SqliteCredentialStore"]
