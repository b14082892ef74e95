"""Game session state machine"""

from .controller import EndReason, GameController, GameSession, SessionState

__all__ = [
    'EndReason',
    'GameController',
    'GameSession',
    'SessionState',
]
