"""Exceptions raised by session actions."""

from __future__ import annotations


class SessionActionError(Exception):
    """Base class for failures of a session action."""


class QueryFailure(SessionActionError):
    """An OS introspection query could not be completed."""


class SignalFailure(SessionActionError):
    """The interrupt signal could not be delivered to a process."""

    def __init__(self, pid: int, reason: str, not_found: bool = False, invalid: bool = False):
        super().__init__(f"Failed to stop process {pid}: {reason}")
        self.pid = pid
        self.reason = reason
        self.not_found = not_found
        self.invalid = invalid


class SpawnFailure(SessionActionError):
    """The CLI process could not be spawned or fed its prompt."""


class ActivationFailure(SessionActionError):
    """A window-focus or launcher command failed."""
