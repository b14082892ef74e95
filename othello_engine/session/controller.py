from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Tuple

from ..engine.board import BoardState, Side, initial_board
from ..engine.eval import DEFAULT_WEIGHTS, EvalWeights
from ..engine.movegen import has_any_legal_move
from ..engine.notation import PASS_MOVE, coord_to_notation, moves_to_string
from ..engine.rules import Outcome, apply_move, apply_pass, compute_score, is_forced_end, winner_by_score
from ..engine.search import SearchResult, Searcher
from ..engine.strength import limits_for_level, profile_for_level
from ..errors import SessionError
from ..tools.diag import log_event

logger = logging.getLogger(__name__)

_KEEP: Any = object()


class SessionState(Enum):
    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    ENDED = "ended"


class EndReason(Enum):
    FORCED_END = "forced_end"    # board full or one side wiped out
    DOUBLE_PASS = "double_pass"  # neither side can move


@dataclass(frozen=True)
class GameSession:
    state: SessionState
    board: BoardState
    human_side: Optional[Side]  # None: the computer plays both sides
    difficulty: int
    winner: Optional[Outcome] = None
    end_reason: Optional[EndReason] = None
    history: Tuple[int, ...] = ()  # squares played, PASS_MOVE for passes

    @property
    def score(self) -> Tuple[int, int]:
        return compute_score(self.board)

    @property
    def is_computer_turn(self) -> bool:
        return self.state is SessionState.IN_PROGRESS and self.board.turn != self.human_side

    @property
    def is_human_turn(self) -> bool:
        return self.state is SessionState.IN_PROGRESS and self.board.turn == self.human_side

    @property
    def record(self) -> str:
        return moves_to_string(list(self.history), self.board.size)


class GameController:
    """Turn, pass and termination state machine over GameSession values.

    Every operation takes a session and returns a session; a request that is
    not allowed in the current position (wrong turn, illegal square) returns
    the very same session object.
    """

    def __init__(self, size: int = 8, weights: EvalWeights = DEFAULT_WEIGHTS) -> None:
        self.size = size
        self.weights = weights

    def new_session(self, human_side: Optional[Side] = Side.FIRST, difficulty: int = 1) -> GameSession:
        profile_for_level(difficulty)
        return GameSession(SessionState.SETUP, initial_board(self.size), human_side, difficulty)

    def configure(self, session: GameSession, human_side: Optional[Side] = _KEEP, difficulty: Optional[int] = None) -> GameSession:
        if session.state is not SessionState.SETUP:
            raise SessionError(f"cannot configure a session in state {session.state.value}")
        changes: dict = {}
        if human_side is not _KEEP:
            changes["human_side"] = human_side
        if difficulty is not None:
            profile_for_level(difficulty)
            changes["difficulty"] = difficulty
        return replace(session, **changes) if changes else session

    def start(self, session: GameSession) -> GameSession:
        if session.state is not SessionState.SETUP:
            raise SessionError(f"cannot start a session in state {session.state.value}")
        started = GameSession(
            SessionState.IN_PROGRESS,
            initial_board(session.board.size),
            session.human_side,
            session.difficulty,
        )
        log_event(
            "session", "session_started",
            size=started.board.size,
            human_side=started.human_side.name if started.human_side else None,
            difficulty=started.difficulty,
        )
        return self.settle(started)

    def reset(self, session: GameSession) -> GameSession:
        logger.info("Resetting session (was %s)", session.state.value)
        return GameSession(SessionState.SETUP, initial_board(session.board.size), session.human_side, session.difficulty)

    def settle(self, session: GameSession) -> GameSession:
        """Apply automatic passes and detect the end of the game."""
        if session.state is not SessionState.IN_PROGRESS:
            return session
        board = session.board
        if is_forced_end(board):
            return self._end(session, EndReason.FORCED_END)
        if has_any_legal_move(board, board.turn):
            return session
        if not has_any_legal_move(board, board.turn.opponent):
            return self._end(session, EndReason.DOUBLE_PASS)
        log_event("session", "pass", side=board.turn.name, ply=len(session.history))
        return replace(session, board=apply_pass(board), history=session.history + (PASS_MOVE,))

    def play_human(self, session: GameSession, index: int) -> GameSession:
        if not session.is_human_turn:
            return session
        return self.play_move(session, index)

    def choose_computer_move(self, session: GameSession, level: Optional[int] = None) -> Optional[SearchResult]:
        """Run the search for the side to move without applying the result.

        `level` overrides the session difficulty for this one search.
        """
        if not session.is_computer_turn or is_forced_end(session.board):
            return None
        level = session.difficulty if level is None else level
        return Searcher(self.weights).search(session.board, limits_for_level(level))

    def play_computer(self, session: GameSession, level: Optional[int] = None) -> GameSession:
        result = self.choose_computer_move(session, level)
        if result is None:
            return session
        if result.best_move is None:
            # Only reachable for a session that was not settled
            return self.settle(session)
        return self.play_move(session, result.best_move)

    def play_move(self, session: GameSession, index: int) -> GameSession:
        """Play `index` for whichever side is to move, without a turn check."""
        if session.state is not SessionState.IN_PROGRESS:
            return session
        board = apply_move(session.board, index)
        if board is session.board:
            logger.debug("Rejected move %s for %s", index, session.board.turn.name)
            return session
        log_event(
            "session", "move",
            side=session.board.turn.name,
            index=index,
            square=coord_to_notation(index, board.size),
            ply=len(session.history),
        )
        return self.settle(replace(session, board=board, history=session.history + (index,)))

    def _end(self, session: GameSession, reason: EndReason) -> GameSession:
        winner = winner_by_score(session.board)
        first, second = compute_score(session.board)
        log_event(
            "session", "game_ended",
            reason=reason.value, winner=winner.name, first=first, second=second,
            record=session.record,
        )
        return replace(session, state=SessionState.ENDED, winner=winner, end_reason=reason)
