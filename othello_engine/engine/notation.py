"""
Coordinate notation for Othello moves.

Squares are written as a column letter followed by a 1-based row number:
index 0 is 'a1', index 1 is 'b1', index ``size`` is 'a2'. Boards wider than
26 columns continue with two-letter columns ('z1', 'aa1', 'ab1', ...). A pass
is written as '--' and stored as -1 in move lists.
"""

import re

# Special string for pass moves (no available moves)
PASS_NOTATION = '--'
PASS_MOVE = -1

_TOKEN = re.compile(r"--|[a-zA-Z]+\d+")
_SQUARE = re.compile(r"([a-zA-Z]+)(\d+)")


def _column_letters(col: int) -> str:
    letters = ""
    col += 1
    while col:
        col, rem = divmod(col - 1, 26)
        letters = chr(ord('a') + rem) + letters
    return letters


def _column_index(letters: str) -> int:
    col = 0
    for ch in letters.lower():
        col = col * 26 + (ord(ch) - ord('a') + 1)
    return col - 1


def coord_to_notation(coord: int, size: int = 8) -> str:
    """Convert board coordinate (0..size*size-1) to notation (e.g. 'e4')."""
    if coord == PASS_MOVE:
        return PASS_NOTATION
    if not 0 <= coord < size * size:
        raise ValueError(f"Invalid coordinate: {coord}")
    row, col = divmod(coord, size)
    return f"{_column_letters(col)}{row + 1}"


def notation_to_coord(notation: str, size: int = 8) -> int:
    """Convert notation (e.g. 'e4', case-insensitive) to a board coordinate."""
    if notation == PASS_NOTATION:
        raise ValueError(f"Cannot convert pass notation '{PASS_NOTATION}' to coordinate")
    m = _SQUARE.fullmatch(notation)
    if m is None:
        raise ValueError(f"Invalid notation format: {notation}")

    col = _column_index(m.group(1))
    row = int(m.group(2)) - 1
    if not (0 <= col < size and 0 <= row < size):
        raise ValueError(f"Invalid notation: {notation}")
    return row * size + col


def moves_to_string(moves: list[int], size: int = 8) -> str:
    """Convert a move list (-1 for pass) to a compact notation string."""
    return ''.join(coord_to_notation(m, size) for m in moves)


def string_to_moves(moves_str: str, size: int = 8) -> list[int]:
    """Parse a compact notation string such as 'd3c5--f6'.

    Raises ValueError on anything that is not a move or a pass.
    """
    moves: list[int] = []
    pos = 0
    while pos < len(moves_str):
        m = _TOKEN.match(moves_str, pos)
        if m is None:
            raise ValueError(f"Invalid notation at offset {pos}: {moves_str[pos:]!r}")
        token = m.group(0)
        moves.append(PASS_MOVE if token == PASS_NOTATION else notation_to_coord(token, size))
        pos = m.end()
    return moves


def is_valid_notation(moves_str: str, size: int = 8) -> bool:
    try:
        string_to_moves(moves_str, size)
    except ValueError:
        return False
    return True
