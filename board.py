from constants import EMPTY, DARK, LIGHT, ROWS, COLS, DIRECTIONS, PIECE_CHARS, opponent
import numpy as np

GRID_DTYPE = np.int8

_CHAR_TO_CELL = {'.': EMPTY, 'D': DARK, 'L': LIGHT}


def _freeze(grid):
    grid.flags.writeable = False
    return grid


def new_grid():
    """Canonical opening position: two discs of each color in the center."""
    grid = np.zeros((ROWS, COLS), dtype=GRID_DTYPE)
    mid_row, mid_col = ROWS // 2, COLS // 2
    grid[mid_row - 1, mid_col] = grid[mid_row, mid_col - 1] = DARK
    grid[mid_row - 1, mid_col - 1] = grid[mid_row, mid_col] = LIGHT
    return _freeze(grid)


def as_grid(grid):
    """Frozen int8 grid from any 8x8 array-like; frozen grids pass through untouched."""
    if isinstance(grid, np.ndarray) and grid.dtype == GRID_DTYPE and not grid.flags.writeable:
        return grid
    arr = np.array(grid, dtype=GRID_DTYPE)
    if arr.shape != (ROWS, COLS):
        raise ValueError(f"Board must be {ROWS}x{COLS}, got shape {arr.shape}")
    return _freeze(arr)


def grid_from_rows(rows):
    """Build a frozen grid from 8 rows of '.', 'D', 'L' characters (or cell ints)."""
    if len(rows) != ROWS or any(len(r) != COLS for r in rows):
        raise ValueError(f"Board must be {ROWS}x{COLS}")
    grid = np.zeros((ROWS, COLS), dtype=GRID_DTYPE)
    for i, row in enumerate(rows):
        for j, cell in enumerate(row):
            if isinstance(cell, str):
                if cell.upper() not in _CHAR_TO_CELL:
                    raise ValueError(f"Invalid cell: {cell!r}")
                cell = _CHAR_TO_CELL[cell.upper()]
            elif cell not in (EMPTY, DARK, LIGHT):
                raise ValueError(f"Invalid cell: {cell!r}")
            grid[i, j] = cell
    return _freeze(grid)


class CopyOnWriteBoard:
    """Scratch board for trying one candidate move against a shared grid.

    The wrapped grid is only cloned on the first ``mark`` after ``set_board``,
    so trials that capture nothing never copy anything and the base grid is
    never written to.
    """

    __slots__ = ('board', 'piece_count')

    def __init__(self, board=None):
        self.board = board
        self.piece_count = 0

    def set_board(self, board):
        self.board = board
        self.piece_count = 0

    def forget_board(self):
        self.board = None

    def at(self, row, col):
        return self.board[row, col]

    def mark(self, row, col, color):
        if self.piece_count == 0:
            self.board = self.board.copy()
        self.piece_count += 1
        self.board[row, col] = color

    def freeze(self):
        """Publish the current grid; it must not be marked again afterwards."""
        return _freeze(self.board)


def could_be_legal(grid, color, row, col):
    """Cheap pre-check: empty target with at least one adjacent opponent disc."""
    if not (0 <= row < ROWS and 0 <= col < COLS) or grid[row, col] != EMPTY:
        return False
    other = opponent(color)
    for dr, dc in DIRECTIONS:
        r, c = row + dr, col + dc
        if 0 <= r < ROWS and 0 <= c < COLS and grid[r, c] == other:
            return True
    return False


def candidate_cells(grid, color):
    """All cells passing ``could_be_legal``, in row-major order, as (row, col) lists."""
    near = np.zeros((ROWS, COLS), dtype=bool)
    opp = np.pad(grid == opponent(color), 1)
    for dr, dc in DIRECTIONS:
        near |= opp[1 + dr:1 + dr + ROWS, 1 + dc:1 + dc + COLS]
    return np.argwhere((grid == EMPTY) & near).tolist()


def apply_move(board, color, row, col):
    """Place ``color`` at (row, col) on a CopyOnWriteBoard, capturing in all 8 directions.

    Rays are scanned against the grid as it was before the move, so captures in
    one direction never influence another. Returns the number of captured discs;
    0 means the move is illegal and the board was left untouched.
    """
    grid = board.board
    if not could_be_legal(grid, color, row, col):
        return 0
    other = opponent(color)

    for dr, dc in DIRECTIONS:
        r, c = row + dr, col + dc
        while 0 <= r < ROWS and 0 <= c < COLS and grid[r, c] == other:
            r += dr
            c += dc
        if 0 <= r < ROWS and 0 <= c < COLS and grid[r, c] == color:
            k, l = row + dr, col + dc
            while k != r or l != c:
                board.mark(k, l, color)
                k += dr
                l += dc

    captured = board.piece_count
    if captured:
        board.mark(row, col, color)
    return captured


def try_apply(grid, color, row, col):
    """Return (captured, resulting grid) for a move; (0, None) when illegal."""
    board = CopyOnWriteBoard(grid)
    captured = apply_move(board, color, row, col)
    if not captured:
        return 0, None
    return captured, board.freeze()


def count_pieces(grid):
    """Return (dark, light) disc counts."""
    return int(np.count_nonzero(grid == DARK)), int(np.count_nonzero(grid == LIGHT))


def render(grid):
    """Board as text for the console and debug logs."""
    header = "  " + " ".join(chr(ord('a') + j) for j in range(COLS))
    lines = [header]
    for i in range(ROWS):
        lines.append(f"{i + 1} " + " ".join(PIECE_CHARS[int(v)] for v in grid[i]))
    return "\n".join(lines)
