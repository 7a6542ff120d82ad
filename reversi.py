# reversi.py
# Game controller: owns the live position, the cached move tree and the skill model.

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from board import as_grid, count_pieces, new_grid
from config import DEFAULT_CONFIG
from constants import DARK, EMPTY, LIGHT, color_name, opponent, to_notation
from errors import ContractViolation
from move import MoveNode
from opponent_model import SkillModel, normalize_score
from tree import TreeBuilder

logger = logging.getLogger(__name__)


class Outcome(Enum):
    CONTINUE = "continue"
    SKIPPED = "skipped"
    ENDED = "ended"


@dataclass(frozen=True)
class ThinkResult:
    """What happened after the tree caught up with the last move."""
    outcome: Outcome
    skipped_color: int = EMPTY  # side that had to pass (SKIPPED only)
    dark: Optional[int] = None  # final disc counts (ENDED only)
    light: Optional[int] = None

    @classmethod
    def proceed(cls) -> ThinkResult:
        return cls(Outcome.CONTINUE)

    @classmethod
    def skipped(cls, color: int) -> ThinkResult:
        return cls(Outcome.SKIPPED, skipped_color=color)

    @classmethod
    def ended(cls, dark: int, light: int) -> ThinkResult:
        return cls(Outcome.ENDED, dark=dark, light=light)


class Reversi:
    """Adaptive Reversi engine.

    The caller alternates cheap synchronous moves (``play`` for the human,
    ``computer_play`` for the engine) with ``think``, which must run after every
    applied move and is meant for a background thread. ``init`` builds the
    first tree and is background work too. A move attempted while the previous
    one has not been through ``think`` raises ContractViolation.
    """

    def __init__(self, log: Optional[Callable[[str], None]] = None, config: Optional[dict] = None) -> None:
        cfg = DEFAULT_CONFIG.copy()
        if config:
            cfg.update({k: v for k, v in config.items() if v is not None})
        self._log = log if log is not None else logger.info
        self._lock = threading.RLock()
        self._max_depth = int(cfg["max_depth"])
        self._model = SkillModel(float(cfg["alpha"]), float(cfg["initial_estimate"]))
        self._computer = EMPTY
        self._generation = 0
        self.reset()

    # ---------------------- queries ----------------------

    @property
    def in_game(self) -> bool:
        with self._lock:
            return self._game

    @property
    def human_color(self) -> int:
        with self._lock:
            return opponent(self._computer)

    @property
    def computer_color(self) -> int:
        with self._lock:
            return self._computer

    @property
    def grid(self):
        with self._lock:
            return self._grid

    @property
    def skill_estimate(self) -> float:
        with self._lock:
            return self._model.estimate

    @property
    def alpha(self) -> float:
        with self._lock:
            return self._model.alpha

    @property
    def to_move(self) -> int:
        """Color expected to move next."""
        with self._lock:
            return DARK if self._last_mover == EMPTY else opponent(self._last_mover)

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def at(self, row: int, col: int) -> int:
        with self._lock:
            return int(self._grid[row, col])

    def piece_counts(self) -> Tuple[int, int]:
        with self._lock:
            return count_pieces(self._grid)

    def legal_moves(self) -> List[Tuple[int, int]]:
        """Squares the human may play right now; empty outside the human's turn."""
        with self._lock:
            if self._current_moves is None:
                return []
            return sorted(self._current_moves)

    def scored_moves(self) -> List[Tuple[Tuple[int, int], int]]:
        """(square, score) of the moves on offer for the side to move, best first."""
        with self._lock:
            return [(m.root, m.score) for m in self._move_list or ()]

    # ---------------------- commands ----------------------

    def set_human_color(self, color: int) -> None:
        if color not in (DARK, LIGHT):
            raise ValueError(f"Invalid color: {color!r}")
        with self._lock:
            if self._game:
                raise ContractViolation("cannot change sides during a game")
            self._computer = opponent(color)

    def reset(self, grid=None, to_move: int = DARK) -> None:
        """Back to the opening position, or to ``grid`` with ``to_move`` to play."""
        if to_move not in (DARK, LIGHT):
            raise ValueError(f"Invalid color: {to_move!r}")
        with self._lock:
            self._grid = new_grid() if grid is None else as_grid(grid)
            self._last_mover = EMPTY if to_move == DARK else DARK
            self._model.reset()
            self._current_moves: Optional[Dict[Tuple[int, int], MoveNode]] = None
            self._move_list: Optional[List[MoveNode]] = None
            self._pending: Optional[MoveNode] = None
            self._game = False
            # background work started earlier keeps the old builder and cannot publish
            self._builder = TreeBuilder(self._max_depth)
            self._generation += 1

    def set_alpha(self, alpha: float) -> None:
        """Smoothing factor for the skill estimate; applies from the next human move."""
        with self._lock:
            self._model.alpha = alpha

    def init(self) -> None:
        """Build the first tree. Background work; needs the human's color first."""
        with self._lock:
            if self._computer == EMPTY:
                raise ContractViolation("human color must be chosen before init()")
            if self._game:
                raise ContractViolation("init() called during a game")
            grid = self._grid
            to_move = self.to_move
            builder = self._builder
            generation = self._generation

        start = time.time()
        moves = builder.build(to_move, grid)
        index = {m.root: m for m in moves} if self.human_color == to_move else None

        with self._lock:
            if generation != self._generation:
                logger.info("Game was reset while the opening tree was built; discarding it")
                return
            self._move_list = moves
            self._current_moves = index
            self._game = True
        logger.info(f"New game with human as {color_name(self.human_color)} "
                    f"({len(moves)} opening moves, {time.time() - start:.2f}s)")

    def play(self, row: int, col: int) -> bool:
        """Human move. False when it is not the human's turn or the square is illegal."""
        with self._lock:
            if self._pending is not None:
                raise ContractViolation("play() before think() finished the previous move")
            if self._current_moves is None or self._last_mover == self.human_color:
                return False
            m = self._current_moves.get((row, col))
            if m is None:
                return False

            scores = [n.score for n in self._move_list]
            old, observed, new = self._model.observe(m.score, scores)
            self._grid = m.grid
            self._last_mover = self.human_color
            self._pending = m
            self._current_moves = None

        self._log(f"H: {to_notation(row, col)}   Your average was {old:.3f}.  "
                  f"Your move scored {observed:.3f}.  Your new average is {new:.3f}.")
        return True

    def computer_play(self) -> Optional[Tuple[int, int]]:
        """Engine move matched to the human's estimated skill; None if it cannot move now."""
        with self._lock:
            if self._pending is not None:
                raise ContractViolation("computer_play() before think() finished the previous move")
            if not self._game or not self._move_list or self._current_moves is not None:
                return None
            if self._last_mover == self._computer:
                return None

            scores = [n.score for n in self._move_list]
            idx = self._model.choose(scores)
            m = self._move_list[idx]
            estimate = self._model.estimate
            self._grid = m.grid
            self._last_mover = self._computer
            self._pending = m

        self._log(f"C: {to_notation(*m.root)}   Human average is {estimate:.3f}.  "
                  f"Choosing move of score {normalize_score(m.score, scores[0], scores[-1]):.3f} "
                  f"from {len(scores)} possibilities.")
        return m.root

    def think(self) -> ThinkResult:
        """Catch the tree up with the last applied move. Background work.

        Returns CONTINUE normally, SKIPPED when the side to move has to pass
        (the same side moves again), or ENDED with the final disc counts.
        """
        with self._lock:
            m = self._pending
            if m is None:
                raise ContractViolation("think() called with no move to think about")
            builder = self._builder
            generation = self._generation

        try:
            if m.is_frontier:
                builder.reconsider(m)

            if m.is_terminal:
                dark, light = count_pieces(m.grid)
                with self._lock:
                    if generation != self._generation:
                        return ThinkResult.proceed()
                    self._game = False
                    self._move_list = []
                    self._current_moves = None
                logger.info(f"Game over. Dark: {dark}  Light: {light}")
                return ThinkResult.ended(dark, light)

            next_mover = m.mover if m.skip_next else opponent(m.mover)
            moves = builder.advance(m.children)
            index = {n.root: n for n in moves} if next_mover == self.human_color else None

            with self._lock:
                if generation != self._generation:
                    return ThinkResult.proceed()
                if m.skip_next:
                    self._last_mover = opponent(self._last_mover)
                self._move_list = moves
                self._current_moves = index

            if m.skip_next:
                logger.info(f"{color_name(opponent(m.mover))} has no legal moves; "
                            f"{color_name(m.mover)} moves again")
                return ThinkResult.skipped(opponent(m.mover))
            return ThinkResult.proceed()
        finally:
            with self._lock:
                if generation == self._generation:
                    self._pending = None
