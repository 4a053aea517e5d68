# region Docstring
"""
chatlink.models.bootstrap
Values produced and exposed by the connection bootstrap controller.
Contents:
- BootstrapPhase:
    IDLE -> RESOLVING -> DISPATCHED for every connect attempt; CLOSING once the user
    went back to the previous server.
- ConnectionIntent:
    What the controller hands to the connection manager. Not retained after dispatch.
- BootstrapState:
    Frozen snapshot of the controller's session state for rendering.
"""
# endregion
# region Imports
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from chatlink.models.certificate import Certificate
from chatlink.models.server_history import ServerHistoryEntry

# endregion
# region Models


class BootstrapPhase(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    DISPATCHED = "dispatched"
    CLOSING = "closing"


class ConnectionIntent(BaseModel):
    """
    Connect request for the connection manager.
    Attributes:
        url (str): Canonical server URL.
        certificate (Optional[Certificate]): Client certificate selected for this attempt.
        username (Optional[str]): Username hint when the server came from history.
        basic_auth (Optional[str]): base64 `user:pass` extracted from the typed address.
    """

    url: str = Field(..., description="Canonical server URL")
    certificate: Optional[Certificate] = Field(
        None, description="Client certificate selected for this attempt"
    )
    username: Optional[str] = Field(
        None, description="Username hint when the server was picked from history"
    )
    basic_auth: Optional[str] = Field(
        None, description="Encoded basic-auth credential for this server"
    )

    model_config = ConfigDict(frozen=True)


class BootstrapState(BaseModel):
    phase: BootstrapPhase = BootstrapPhase.IDLE
    text: str = ""
    connecting_open: bool = False
    certificate: Optional[Certificate] = None
    servers_history: tuple[ServerHistoryEntry, ...] = ()
    previous_server: Optional[str] = None

    model_config = ConfigDict(frozen=True)


# endregion

__all__ = ["BootstrapPhase", "BootstrapState", "ConnectionIntent"]
