"""
chatlink.config
Configuration and settings management for the chatlink bootstrap.
Overview:
- Provides Pydantic-based settings classes for the bootstrap flow, its local
    storage, and logging.
- Each settings class inherits from FactoryBaseSettings and supports environment
    variable overrides via Field aliases.
Contents:
- Imports:
    - Database: SQLite utility backing the credential store.
    - FactoryBaseSettings: Base settings class with factory pattern support.
    - get_settings: Factory function for retrieving settings instances (exported).
- Settings Classes:
    - BootstrapSettings:
        Default server, default organizational domain, auto-connect flag, history
        limit, open-workspace and create-workspace URLs, certificate removal prompt.
    - DatabaseSettings:
        Async SQLAlchemy URL for the server history store and the path of the
        SQLite credential store, with a convenience property for database access.
    - LoggingSettings:
        Log level and JSON log file location.
Design Notes:
- All settings classes use Pydantic Field with aliases to support environment variable
    configuration (e.g., CHATLINK_DEFAULT_DOMAIN, CHATLINK_HISTORY_LIMIT).
- Default values are provided for all fields enabling zero-configuration startup.
- The default domain and default server are product constants and belong here,
    not in the normalizer or the controller.
"""

import sqlite3
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from sqlite_utils import Database

from chatlink.config.base import APP_ROOT, CACHE_DIR
from chatlink.constants import DEFAULT_DOMAIN, HISTORY_LIMIT
from chatlink.config.factory import FactoryBaseSettings
from chatlink.config.factory import get_settings  # noqa: F401  This is used externally


class BootstrapSettings(FactoryBaseSettings):
    """
    Connection bootstrap configuration settings.
    """

    default_server: str = Field(
        default="chat.schooleducation.online",
        alias="CHATLINK_DEFAULT_SERVER",
        description="Server address submitted automatically when the bootstrap starts.",
    )
    default_domain: str = Field(
        default=DEFAULT_DOMAIN,
        alias="CHATLINK_DEFAULT_DOMAIN",
        description="Domain appended to bare workspace slugs (e.g. 'team' -> 'team.rocket.chat').",
    )
    auto_connect: bool = Field(
        default=True,
        alias="CHATLINK_AUTO_CONNECT",
        description="Submit the default server as soon as the bootstrap starts.",
    )
    history_limit: int = Field(
        default=HISTORY_LIMIT,
        ge=1,
        alias="CHATLINK_HISTORY_LIMIT",
        description="Maximum number of server history suggestions.",
    )
    open_workspace_url: str = Field(
        default="https://open.rocket.chat",
        alias="CHATLINK_OPEN_WORKSPACE_URL",
        description="Public workspace joined by the 'join open workspace' action.",
    )
    create_workspace_url: str = Field(
        default="https://cloud.rocket.chat/trial",
        alias="CHATLINK_CREATE_WORKSPACE_URL",
        description="Signup page opened by the onboarding 'create workspace' action.",
    )
    remove_certificate_message: str = Field(
        default="You will unset a certificate for this server",
        alias="CHATLINK_REMOVE_CERTIFICATE_MESSAGE",
        description="Confirmation message shown before the certificate is removed.",
    )

    @field_validator("default_domain", mode="before")
    def strip_leading_dot(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lstrip(".")
        return v


class DatabaseSettings(FactoryBaseSettings):
    """
    Local storage configuration settings.
    """

    database_url: str = Field(
        default=f"sqlite+aiosqlite:///{(CACHE_DIR / 'servers.db').as_posix()}",
        alias="CHATLINK_DATABASE_URL",
        description="Async SQLAlchemy URL of the server history database.",
    )
    credentials_db_path: Path = Field(
        default=CACHE_DIR / "credentials.db",
        alias="CHATLINK_CREDENTIALS_DB",
        description="Path to the SQLite database file holding basic-auth credentials.",
    )

    @property
    def credentials_db(self) -> Database:
        """SQLite database instance for the credential store."""
        self.credentials_db_path.parent.mkdir(parents=True, exist_ok=True)
        return Database(
            sqlite3.connect(str(self.credentials_db_path), check_same_thread=False)
        )


class LoggingSettings(FactoryBaseSettings):
    """
    Logging configuration settings.
    """

    log_level: str = Field(
        default="info",
        alias="CHATLINK_LOG_LEVEL",
        description="Log level for the chatlink logger.",
    )
    log_file: Path = Field(
        default=APP_ROOT / "logs" / "chatlink.jsonl",
        alias="CHATLINK_LOG_FILE",
        description="JSON lines log file.",
    )


__all__ = [
    "BootstrapSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "get_settings",
]
