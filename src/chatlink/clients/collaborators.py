"""Contracts of the external collaborators driven by the bootstrap."""

from typing import Optional, Protocol

from chatlink.models import Certificate, ConnectionIntent


class ConnectionManager(Protocol):
    """Owns retries, timeouts and auth challenges for a dispatched intent."""

    def connect(self, intent: ConnectionIntent) -> None:
        """Start connecting. Fire-and-forget."""


class SessionSelector(Protocol):
    def select_previous_server(self, server_url: str) -> None:
        """Switch the active session back to server_url."""


class InviteLinkState(Protocol):
    def clear_pending_invite(self) -> None:
        """Drop any invite link waiting for a connection."""


class FilePicker(Protocol):
    async def pick_certificate_file(self) -> Optional[Certificate]:
        """Let the user choose a certificate. None (or PickerCancelled) when dismissed."""


class SecureKeyValueStore(Protocol):
    async def set_credential(self, key: str, value: str) -> None:
        """Persist a secret string under key."""

    async def get_credential(self, key: str) -> Optional[str]:
        """Load a secret string, None when absent."""


class ConfirmationPrompt(Protocol):
    async def confirm(self, message: str) -> bool:
        """Ask a yes/no question. True when accepted."""


class Navigator(Protocol):
    def open_new_server(self) -> None:
        """Show the server bootstrap screen."""


class LinkOpener(Protocol):
    async def open_url(self, url: str) -> None:
        """Open url in the system browser."""


class AppStarter(Protocol):
    def app_start(self, root: str) -> None:
        """Restart the app on the given root."""


__all__ = [
    "AppStarter",
    "ConfirmationPrompt",
    "ConnectionManager",
    "FilePicker",
    "InviteLinkState",
    "LinkOpener",
    "Navigator",
    "SecureKeyValueStore",
    "SessionSelector",
]
