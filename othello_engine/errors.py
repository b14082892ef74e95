from __future__ import annotations


class EngineError(Exception):
    """Base class for errors raised by the engine."""


class InvalidSize(EngineError, ValueError):
    """Board dimension is not usable (must be even and at least 2)."""


class InvalidDepth(EngineError, ValueError):
    """Search depth or difficulty level out of range."""


class SessionError(EngineError):
    """A session transition was requested from a state that forbids it."""
