from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from constants import to_notation


class Expansion(Enum):
    FRONTIER = "frontier"   # replies not generated yet
    TERMINAL = "terminal"   # generated, nobody can move
    EXPANDED = "expanded"   # children hold the replies


@dataclass(slots=True, eq=False)
class MoveNode:
    """One ply in the persistent game tree.

    ``score`` is the mover's immediate gain adjusted by the best known child:
    minus it for a normal exchange, plus it when the opponent has to pass and
    the children are the mover's own follow-ups (``skip_next``).
    """
    root: Tuple[int, int]
    score: int
    grid: object
    mover: int
    skip_next: bool = False
    children: List[MoveNode] = field(default_factory=list)
    expansion: Expansion = Expansion.FRONTIER

    @property
    def is_frontier(self) -> bool:
        return self.expansion is Expansion.FRONTIER

    @property
    def is_terminal(self) -> bool:
        return self.expansion is Expansion.TERMINAL

    @property
    def best(self) -> Optional[MoveNode]:
        return self.children[0] if self.children else None

    def expand(self, children: List[MoveNode]) -> None:
        self.children = children
        self.expansion = Expansion.EXPANDED if children else Expansion.TERMINAL

    def __repr__(self) -> str:
        return (f"MoveNode({to_notation(*self.root)}, score={self.score}, "
                f"mover={self.mover}, {self.expansion.value}, children={len(self.children)})")


def sort_moves(moves: List[MoveNode]) -> List[MoveNode]:
    """Sort in place by score, best first. Stable, so ties keep discovery order."""
    moves.sort(key=lambda m: -m.score)
    return moves
