import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlite_utils import Database

from chatlink.config import BootstrapSettings
from chatlink.database import Base, DatabaseSessionGenerator
from chatlink.errors import PickerCancelled
from chatlink.events import DeepLinkChannel
from chatlink.models import Certificate, ConnectionIntent, ServerHistoryEntity
from chatlink.services import (
    BootstrapController,
    CertificateSelector,
    CredentialExtractor,
    ServerHistoryRepository,
)

BOOTSTRAP_ENV_VARS = [
    "CHATLINK_DEFAULT_SERVER",
    "CHATLINK_DEFAULT_DOMAIN",
    "CHATLINK_AUTO_CONNECT",
    "CHATLINK_HISTORY_LIMIT",
    "CHATLINK_OPEN_WORKSPACE_URL",
    "CHATLINK_CREATE_WORKSPACE_URL",
    "CHATLINK_REMOVE_CERTIFICATE_MESSAGE",
]

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


# region Fakes


class RecordingConnectionManager:
    def __init__(self):
        self.intents: list[ConnectionIntent] = []

    def connect(self, intent: ConnectionIntent) -> None:
        self.intents.append(intent)


class RecordingSessionSelector:
    def __init__(self):
        self.selected: list[str] = []

    def select_previous_server(self, server_url: str) -> None:
        self.selected.append(server_url)


class RecordingInviteLinks:
    def __init__(self):
        self.cleared = 0

    def clear_pending_invite(self) -> None:
        self.cleared += 1


class ScriptedFilePicker:
    """Returns queued results in order; exceptions in the queue are raised."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def pick_certificate_file(self) -> Optional[Certificate]:
        self.calls += 1
        result = self.results.pop(0) if self.results else PickerCancelled()
        if isinstance(result, Exception):
            raise result
        return result


class ScriptedConfirmation:
    def __init__(self, answer: bool = True):
        self.answer = answer
        self.messages: list[str] = []

    async def confirm(self, message: str) -> bool:
        self.messages.append(message)
        return self.answer


class MemoryKeyValueStore:
    def __init__(self):
        self.values: dict[str, str] = {}

    async def set_credential(self, key: str, value: str) -> None:
        self.values[key] = value

    async def get_credential(self, key: str) -> Optional[str]:
        return self.values.get(key)


# endregion
# region Fixtures


@pytest.fixture
def bootstrap_settings(monkeypatch) -> BootstrapSettings:
    """BootstrapSettings with env vars cleared and auto-connect off."""
    for name in BOOTSTRAP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return BootstrapSettings(
        default_server="chat.schooleducation.online",
        default_domain="rocket.chat",
        auto_connect=False,
        history_limit=3,
    )


@pytest_asyncio.fixture
async def db():
    """In-memory async SQLite database with the ORM tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    generator = DatabaseSessionGenerator.from_engine(engine)
    await generator.init_db()
    try:
        yield generator
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest_asyncio.fixture
async def history(db) -> ServerHistoryRepository:
    return ServerHistoryRepository(db)


@pytest.fixture
def add_servers(db):
    """Insert history rows directly; minutes_ago orders them by recency."""

    async def _add(*rows: tuple[str, Optional[str], int]) -> list[ServerHistoryEntity]:
        entities = [
            ServerHistoryEntity(
                url=url,
                username=username,
                created_at=BASE_TIME - timedelta(minutes=minutes_ago),
                updated_at=BASE_TIME - timedelta(minutes=minutes_ago),
            )
            for url, username, minutes_ago in rows
        ]
        async with db.get_async_session() as session:
            session.add_all(entities)
            await session.commit()
        return entities

    return _add


@pytest.fixture
def credentials_db() -> Database:
    return Database(sqlite3.connect(":memory:", check_same_thread=False))


@pytest.fixture
def key_value_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def connection_manager() -> RecordingConnectionManager:
    return RecordingConnectionManager()


@pytest.fixture
def session_selector() -> RecordingSessionSelector:
    return RecordingSessionSelector()


@pytest.fixture
def invite_links() -> RecordingInviteLinks:
    return RecordingInviteLinks()


@pytest.fixture
def confirmation() -> ScriptedConfirmation:
    return ScriptedConfirmation(answer=True)


@pytest.fixture
def file_picker() -> ScriptedFilePicker:
    return ScriptedFilePicker(
        Certificate(path="file:///tmp/client.p12", display_name="client.p12")
    )


@pytest.fixture
def make_controller(
    bootstrap_settings,
    history,
    key_value_store,
    file_picker,
    connection_manager,
    session_selector,
    invite_links,
    confirmation,
):
    """Build a controller with recording fakes; keyword overrides replace any part."""

    def _make(**overrides) -> BootstrapController:
        parts = {
            "settings": bootstrap_settings,
            "history": history,
            "credentials": CredentialExtractor(key_value_store),
            "certificates": CertificateSelector(file_picker),
            "connection_manager": connection_manager,
            "session_selector": session_selector,
            "invite_links": invite_links,
            "confirmation": confirmation,
            "deep_links": DeepLinkChannel(),
            "previous_server": None,
        }
        parts.update(overrides)
        return BootstrapController(**parts)

    return _make


# endregion
