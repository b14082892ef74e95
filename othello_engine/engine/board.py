from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from typing import Iterable, Sequence, Tuple

from ..errors import InvalidSize

# Squares are numbered row * size + col, a1 = 0 (LSB). Each side owns one
# bitboard with bit i set when it has a disc on square i.

EMPTY = 0


class Side(IntEnum):
    FIRST = 1   # black, moves first
    SECOND = 2  # white

    @property
    def opponent(self) -> "Side":
        return Side.SECOND if self is Side.FIRST else Side.FIRST


# Characters used by the text diagram form
_CHARS = {EMPTY: ".", Side.FIRST: "X", Side.SECOND: "O"}
_PARSE = {".": EMPTY, "-": EMPTY, "X": Side.FIRST, "B": Side.FIRST, "O": Side.SECOND, "W": Side.SECOND}


@lru_cache(maxsize=None)
def full_mask(size: int) -> int:
    return (1 << (size * size)) - 1


@dataclass(frozen=True)
class BoardState:
    size: int
    first: int   # bitboard of FIRST discs
    second: int  # bitboard of SECOND discs
    turn: Side

    def __post_init__(self) -> None:
        if self.size < 1:
            raise InvalidSize(f"board size must be positive, got {self.size}")
        if not isinstance(self.turn, Side):
            object.__setattr__(self, "turn", Side(self.turn))
        outside = ~full_mask(self.size)
        if (self.first | self.second) & outside:
            raise ValueError(f"disc bits outside a {self.size}x{self.size} board")
        if self.first & self.second:
            raise ValueError(f"squares held by both sides: {self.first & self.second:#x}")

    @property
    def cells(self) -> Tuple[int, ...]:
        out = []
        for i in range(self.size * self.size):
            bit = 1 << i
            if self.first & bit:
                out.append(Side.FIRST)
            elif self.second & bit:
                out.append(Side.SECOND)
            else:
                out.append(EMPTY)
        return tuple(out)

    def cell(self, index: int) -> int:
        bit = 1 << index
        if self.first & bit:
            return Side.FIRST
        if self.second & bit:
            return Side.SECOND
        return EMPTY

    def discs(self, side: Side) -> int:
        return self.first if side is Side.FIRST else self.second

    def me_opp(self, side: Side | None = None) -> Tuple[int, int]:
        side = self.turn if side is None else side
        return (self.first, self.second) if side is Side.FIRST else (self.second, self.first)

    @property
    def empty(self) -> int:
        return ~(self.first | self.second) & full_mask(self.size)

    def empty_count(self) -> int:
        return self.empty.bit_count()

    def with_turn(self, side: Side) -> "BoardState":
        return BoardState(self.size, self.first, self.second, side)

    def to_text(self) -> str:
        rows = []
        for r in range(self.size):
            rows.append("".join(_CHARS[self.cell(r * self.size + c)] for c in range(self.size)))
        return "\n".join(rows)

    def __str__(self) -> str:
        return self.to_text()

    @staticmethod
    def from_cells(size: int, cells: Sequence[int], turn: Side = Side.FIRST) -> "BoardState":
        """Build a board from an explicit row-major cell sequence."""
        if size < 1 or len(cells) != size * size:
            raise InvalidSize(f"expected {size * size} cells for size {size}, got {len(cells)}")
        first = second = 0
        for i, v in enumerate(cells):
            if v == Side.FIRST:
                first |= 1 << i
            elif v == Side.SECOND:
                second |= 1 << i
            elif v != EMPTY:
                raise ValueError(f"bad cell value {v!r} at index {i}")
        return BoardState(size, first, second, Side(turn))

    @staticmethod
    def from_text(rows: Iterable[str] | str, turn: Side = Side.FIRST) -> "BoardState":
        """Parse a diagram like ``["....", ".XO.", ".OX.", "...."]``.

        ``X``/``B`` mark FIRST discs, ``O``/``W`` SECOND discs, ``.``/``-`` empty
        cells. Whitespace inside a row is ignored.
        """
        if isinstance(rows, str):
            rows = rows.split()
        lines = ["".join(r.split()) for r in rows]
        lines = [line for line in lines if line]
        size = len(lines)
        cells = []
        for line in lines:
            if len(line) != size:
                raise InvalidSize(f"row {line!r} does not match board size {size}")
            for ch in line:
                try:
                    cells.append(_PARSE[ch.upper()])
                except KeyError:
                    raise ValueError(f"bad cell character {ch!r}") from None
        return BoardState.from_cells(size, cells, turn)


def initial_board(size: int = 8) -> BoardState:
    if size < 2 or size % 2:
        raise InvalidSize(f"board size must be even and >= 2, got {size}")
    m = size // 2
    first = (1 << ((m - 1) * size + m)) | (1 << (m * size + m - 1))
    second = (1 << ((m - 1) * size + m - 1)) | (1 << (m * size + m))
    return BoardState(size, first, second, Side.FIRST)
