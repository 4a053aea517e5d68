"""
chatlink.models
Package initialization for persistence and domain models.
Overview:
- Provides the SQLAlchemy entity backing the server history store and the Pydantic
    models exchanged between the bootstrap controller, its collaborators and the UI.
Contents:
- Entity Models:
    - ServerHistoryEntity: persisted recently used server.
- Domain Models:
    - ServerHistoryEntry: history entry as exposed to callers.
    - Credential: basic-auth credential keyed by canonical server URL.
    - Certificate: client certificate handle from the file picker.
    - ConnectionIntent: connect request for the connection manager.
    - BootstrapState, BootstrapPhase: controller snapshot for rendering.
Design Notes:
- Exports are organized into __entities__ and __models__ lists for clear separation
    of concerns.
"""

from .server_history import ServerHistoryEntity, ServerHistoryEntry  # noqa: F401
from .credential import Credential  # noqa: F401
from .certificate import Certificate  # noqa: F401
from .bootstrap import BootstrapPhase, BootstrapState, ConnectionIntent  # noqa: F401


__entities__ = ["ServerHistoryEntity"]
__models__ = [
    "BootstrapPhase",
    "BootstrapState",
    "Certificate",
    "ConnectionIntent",
    "Credential",
    "ServerHistoryEntry",
]
__all__ = [*__entities__, *__models__]
