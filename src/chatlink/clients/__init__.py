"""
chatlink.clients
Collaborator contracts consumed by the bootstrap and the concrete SQLite-backed
credential store.
"""

from .collaborators import (  # noqa: F401
    AppStarter,
    ConfirmationPrompt,
    ConnectionManager,
    FilePicker,
    InviteLinkState,
    LinkOpener,
    Navigator,
    SecureKeyValueStore,
    SessionSelector,
)
from .credential_store import SqliteCredentialStore  # noqa: F401
