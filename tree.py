# tree.py
# Bounded-depth move tree: initial build plus incremental deepening as real moves are played.

from __future__ import annotations

import logging
import time
from typing import List

from board import CopyOnWriteBoard, apply_move, candidate_cells
from constants import opponent
from move import MoveNode, sort_moves

logger = logging.getLogger(__name__)

MAX_DEPTH = 4  # 5 layers including the root ply


class TreeBuilder:
    """Generates and maintains the game tree.

    ``think`` expands every legal move ``max_depth - depth`` layers deep, scoring
    each move as its own gain minus the best immediate reply. ``reconsider``
    pushes a known subtree one layer further and refreshes the scores on the
    way back up, so the tree keeps deepening across the game instead of being
    rebuilt from scratch.
    """

    def __init__(self, max_depth: int = MAX_DEPTH) -> None:
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        self.max_depth = max_depth
        # one scratch board per depth; a layer reuses it for every candidate cell
        self._boards = [CopyOnWriteBoard() for _ in range(max_depth + 1)]
        self.nodes_generated = 0

    def think(self, color: int, grid, depth: int = 0) -> List[MoveNode]:
        """All legal moves for ``color`` on ``grid``, in discovery (row-major) order."""
        board = self._boards[depth]
        moves: List[MoveNode] = []

        for row, col in candidate_cells(grid, color):
            board.set_board(grid)
            captured = apply_move(board, color, row, col)
            if not captured:
                continue
            result = board.freeze()
            # the placed disc counts alongside the captures
            node = MoveNode((row, col), captured + 1, result, color)
            if depth < self.max_depth:
                replies = self.think(opponent(color), result, depth + 1)
                if replies:
                    sort_moves(replies)
                    node.score -= replies[0].score
                    node.expand(replies)
                # no replies: stays a frontier so reconsider can tell a pass from game over
            moves.append(node)

        board.forget_board()
        self.nodes_generated += len(moves)
        return moves

    def reconsider(self, node: MoveNode) -> None:
        """Deepen ``node`` by one layer and recompute its score from its children."""
        if node.is_frontier:
            replies = self.think(opponent(node.mover), node.grid, self.max_depth)
            if replies:
                sort_moves(replies)
                node.score -= replies[0].score
                node.expand(replies)
                return
            # opponent must pass: the mover goes again
            own = self.think(node.mover, node.grid, self.max_depth)
            if own:
                sort_moves(own)
                node.skip_next = True
                node.score += own[0].score
            node.expand(own)
        elif node.children:
            best = node.children[0].score
            base = node.score - best if node.skip_next else node.score + best
            for child in node.children:
                self.reconsider(child)
            sort_moves(node.children)
            best = node.children[0].score
            node.score = base + best if node.skip_next else base - best

    def build(self, color: int, grid) -> List[MoveNode]:
        """Top-level build from a live position; result sorted best first."""
        start = time.time()
        before = self.nodes_generated
        moves = sort_moves(self.think(color, grid))
        logger.debug(f"[Tree] Built {len(moves)} root moves, "
                     f"{self.nodes_generated - before} nodes in {time.time() - start:.3f}s")
        return moves

    def advance(self, moves: List[MoveNode]) -> List[MoveNode]:
        """Reconsider a whole reply layer and return it sorted best first."""
        start = time.time()
        before = self.nodes_generated
        for m in moves:
            self.reconsider(m)
        sort_moves(moves)
        logger.debug(f"[Tree] Deepened {len(moves)} moves, "
                     f"{self.nodes_generated - before} new nodes in {time.time() - start:.3f}s")
        return moves
