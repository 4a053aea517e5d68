"""
chatlink.models.credential
Basic-auth credential extracted from a server address.
"""

from pydantic import BaseModel, ConfigDict, Field

from chatlink.constants import BASIC_AUTH_KEY


class Credential(BaseModel):
    """
    Base64 encoded `user:pass` pair keyed by canonical server URL.
    Attributes:
        server_key (str): Canonical URL of the server the credential belongs to.
        encoded_auth (str): base64 of the `user:pass` string.
    """

    server_key: str = Field(..., description="Canonical server URL")
    encoded_auth: str = Field(..., description="base64 encoded user:pass")

    model_config = ConfigDict(frozen=True)

    @property
    def storage_key(self) -> str:
        """Key under which the credential is persisted in the secure store."""
        return f"{BASIC_AUTH_KEY}-{self.server_key}"


__all__ = ["Credential"]
