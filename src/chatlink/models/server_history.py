# region Docstring
"""
chatlink.models.server_history
Persistence and domain models for the recently used server list.
Overview:
- Provides a SQLAlchemy entity persisting one row per canonical server URL with the
    username last used on it and access timestamps.
- Provides a Pydantic model mirroring the persisted entity for safe I/O, validation,
    and serialization to the input screen.
Contents:
- SQLAlchemy entities:
    - ServerHistoryEntity:
        Stores the canonical URL (unique), the optional username, and created/updated
        timestamps. Includes helpers for equality, hashing, and conversion to a
        ServerHistoryEntry Pydantic model via the .model property.
- Pydantic models:
    - ServerHistoryEntry:
        A frozen domain model for a single history entry as shown to the user.
Design notes:
- `url` always holds normalizer output; rows are keyed by it so reconnecting to the
    same server updates the existing row instead of adding a duplicate.
- A null `username` means the server was visited but never authenticated against;
    such rows are stored but never offered as suggestions.
- updated_at drives the recency ordering of suggestions. It is set on the Python
    side (microsecond resolution) so consecutive records order deterministically.
"""
# endregion
# region Imports
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from chatlink.constants import SERVERS_HISTORY_TABLE
from chatlink.database import Base
from chatlink.utils import get_time


# endregion
# region SQLAlchemy Model
class ServerHistoryEntity(Base):
    """
    Model representing a previously used server.
    Attributes:
        id (int): Primary key.
        url (str): Canonical server URL.
        username (Optional[str]): Username last authenticated on the server.
        created_at (datetime): When the server was first recorded.
        updated_at (datetime): When the server was last used.
    """

    __tablename__ = SERVERS_HISTORY_TABLE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    username: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=get_time
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=get_time, onupdate=get_time, index=True
    )

    def __repr__(self) -> str:
        return f"<ServerHistory(id={self.id}, url='{self.url}', username='{self.username}')>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ServerHistoryEntity):
            return NotImplemented
        return self.id == other.id and self.url == other.url

    def __hash__(self) -> int:
        return hash((self.id, self.url))

    @property
    def model(self) -> "ServerHistoryEntry":
        return ServerHistoryEntry.model_validate(self)


# endregion
# region Pydantic Model
class ServerHistoryEntry(BaseModel):
    id: int = Field(..., description="The unique ID of the history entry")
    url: str = Field(..., description="Canonical server URL")
    username: Optional[str] = Field(
        None, description="Username last authenticated on this server"
    )
    updated_at: Optional[datetime] = Field(
        None, description="Timestamp when the server was last used"
    )

    @field_serializer("updated_at")
    def serialize_updated_at(self, v: Optional[datetime]) -> Optional[str]:
        if v:
            return v.isoformat()
        return None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "id": 1,
                    "url": "https://open.rocket.chat",
                    "username": "john.doe",
                    "updated_at": "2024-01-01T12:00:00Z",
                }
            ]
        },
        from_attributes=True,
        frozen=True,
    )


# endregion

__all__ = ["ServerHistoryEntity", "ServerHistoryEntry"]
