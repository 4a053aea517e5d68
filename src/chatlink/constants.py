"""
chatlink.constants

Product constants shared by the normalizer, the credential store and the
bootstrap controller. Values that vary per deployment live in
`chatlink.config.BootstrapSettings`; these are the fallbacks and fixed keys.
"""

DEFAULT_DOMAIN = "rocket.chat"
"""Domain appended to bare workspace slugs when no settings are supplied."""

BASIC_AUTH_KEY = "BASIC_AUTH_KEY"
"""Prefix of the credential store key: f"{BASIC_AUTH_KEY}-{server}"."""

HISTORY_LIMIT = 3
"""Default number of server history suggestions."""

SERVERS_HISTORY_TABLE = "servers_history"
CREDENTIALS_TABLE = "credentials"

BACKGROUND_ROOT = "background"
"""App-start root requested when onboarding is left with the back button."""


class Events:
    """Analytics event names recorded through `chatlink.logger.log_event`."""

    NEWSERVER_CONNECT_TO_WORKSPACE = "NEWSERVER_CONNECT_TO_WORKSPACE"
    NEWSERVER_JOIN_OPEN_WORKSPACE = "NEWSERVER_JOIN_OPEN_WORKSPACE"
    ONBOARD_JOIN_A_WORKSPACE = "ONBOARD_JOIN_A_WORKSPACE"
    ONBOARD_CREATE_NEW_WORKSPACE = "ONBOARD_CREATE_NEW_WORKSPACE"
    ONBOARD_CREATE_NEW_WORKSPACE_F = "ONBOARD_CREATE_NEW_WORKSPACE_F"
