# constants.py
"""Shared constants/helpers for the adaptive Reversi engine.

- EMPTY, DARK, LIGHT cell values
- ROWS, COLS board dimensions
- DIRECTIONS (8 compass offsets)
- opponent(color)
- to_notation / from_notation ("e6" style coordinates)
"""
from __future__ import annotations
from typing import Tuple

# ---------------------- Colors ----------------------
EMPTY, DARK, LIGHT = 0, 1, 2  # keep numeric and contiguous

COLOR_NAMES = {EMPTY: "Empty", DARK: "Dark", LIGHT: "Light"}
PIECE_CHARS = {EMPTY: ".", DARK: "D", LIGHT: "L"}

# ---------------------- Geometry ----------------------
ROWS = 8
COLS = 8

DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (1, 0), (-1, 0), (0, -1), (0, 1),
    (-1, -1), (-1, 1), (1, 1), (1, -1),
)

Coord = Tuple[int, int]


def opponent(color: int) -> int:
    """Other color. DARK/LIGHT are 1/2 so XOR 3 swaps them; EMPTY stays EMPTY."""
    if color == EMPTY:
        return EMPTY
    return color ^ 3


def color_name(color: int) -> str:
    return COLOR_NAMES.get(color, "Empty")


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < ROWS and 0 <= col < COLS


# ---------------------- Notation ----------------------

def to_notation(row: int, col: int) -> str:
    """(row, col) -> 'a1' style: column letter, then 1-based row."""
    return f"{chr(col + ord('a'))}{row + 1}"


def from_notation(text: str) -> Coord:
    s = text.strip().lower()
    if len(s) != 2 or not ('a' <= s[0] <= 'h') or not ('1' <= s[1] <= '8'):
        raise ValueError(f"Invalid square: {text!r}")
    return int(s[1]) - 1, ord(s[0]) - ord('a')


__all__ = [
    'EMPTY', 'DARK', 'LIGHT', 'COLOR_NAMES', 'PIECE_CHARS',
    'ROWS', 'COLS', 'DIRECTIONS', 'Coord',
    'opponent', 'color_name', 'in_bounds', 'to_notation', 'from_notation',
]
