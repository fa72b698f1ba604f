"""Exceptions raised by tvremote."""

from __future__ import annotations


class TVRemoteError(Exception):
    """Base class for tvremote errors."""


class TransportError(TVRemoteError):
    """A command could not be delivered to the TV.

    The message is meant to be shown to the user as-is.
    """


class StoreError(TVRemoteError):
    """The device store could not be written."""
