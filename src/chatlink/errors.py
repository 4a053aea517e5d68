"""
chatlink.errors

Exception types of the bootstrap layer.

- InvalidInput is for connection manager implementations: the bootstrap itself
    never rejects an address, the connect attempt reports unreachable hosts.
- StorageUnavailable, PickerCancelled and DeleteFailed are raised by stores and
    collaborators and caught by the services, which log them and degrade the
    feature.
"""


class ChatlinkError(Exception):
    """Base class for chatlink errors."""


class InvalidInput(ChatlinkError):
    """The address cannot be resolved to any plausible host."""


class StorageUnavailable(ChatlinkError):
    """The history or credential store could not be reached."""


class PickerCancelled(ChatlinkError):
    """The user dismissed the certificate file picker."""


class DeleteFailed(ChatlinkError):
    """A history entry could not be deleted."""


__all__ = [
    "ChatlinkError",
    "DeleteFailed",
    "InvalidInput",
    "PickerCancelled",
    "StorageUnavailable",
]
