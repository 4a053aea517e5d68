"""
chatlink.models.certificate
Client TLS certificate picked by the user.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chatlink.utils import uri_to_path


class Certificate(BaseModel):
    """
    Opaque handle to a client certificate file returned by the file picker.
    Attributes:
        path (str): Local filesystem path (file:// prefix removed).
        display_name (str): Name shown to the user.
    """

    path: str = Field(..., description="Local path of the certificate file")
    display_name: str = Field(..., description="Name shown to the user")

    @field_validator("path", mode="before")
    def strip_file_uri(cls, v):
        if isinstance(v, str):
            return uri_to_path(v)
        return v

    model_config = ConfigDict(frozen=True)


__all__ = ["Certificate"]
