"""
chatlink package.

Server address resolution and connection bootstrap for the chat client: the URL
normalizer, the recently used server history, basic-auth extraction, client
certificate selection and the controller that dispatches the connection intent.

Settings come from Pydantic settings classes (environment variables, .env and
YAML files); see chatlink.config.
"""

from . import constants  # noqa: F401
from .config import (  # noqa: F401
    BootstrapSettings,
    DatabaseSettings,
    LoggingSettings,
    get_settings,
)
from .urls import normalize, split_credentials  # noqa: F401
