"""
Golf Worlds - Errors
=====================
Exceptions raised by the core.  None of them is fatal: the worst case
is a request for a world that is not registered, which leaves the
session exactly as it was.
"""

from __future__ import annotations


class GolfWorldsError(Exception):
    """Base class for every error raised by this package."""


class UnknownWorldError(GolfWorldsError, LookupError):
    """The requested world identifier is not in the registry."""

    def __init__(self, world_id: str) -> None:
        super().__init__(f"No world registered under {world_id!r}")
        self.world_id = world_id


class RegistryFrozenError(GolfWorldsError):
    """A registration was attempted after startup finished."""


class InvalidPlacementError(GolfWorldsError):
    """An action needs state that has not been set up yet.

    Worlds raise this internally and turn it into a transient message;
    it never reaches the session.
    """
