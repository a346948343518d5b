"""
tacticube_play/engine/permutation.py

Face-turn permutation over the 54-facelet board.

A quarter turn of one face is three families of 4-cycles:

  - the face's own corners   (grid positions 0, 2, 8, 6)
  - the face's own edges     (grid positions 1, 5, 7, 3)
  - three strips of the four neighbouring faces (absolute indices below)

A cycle ``(a, b, c, d)`` under a clockwise turn sends the facelet at
``a`` to ``b``, ``b`` to ``c``, ``c`` to ``d`` and ``d`` back to ``a``.
A counter-clockwise turn walks the same cycles the other way.  The grid
centre (position 4) never moves.
"""

from typing import Dict, List, Tuple

from .board import FACE_OFFSETS, Board

Cycle = Tuple[int, int, int, int]

FACE_LOCAL_CYCLES: Tuple[Cycle, ...] = (
    (0, 2, 8, 6),   # corners
    (1, 5, 7, 3),   # edges
)

ADJACENT_CYCLES: Dict[str, Tuple[Cycle, ...]] = {
    'U': ((18, 9, 36, 27),  (19, 10, 37, 28), (20, 11, 38, 29)),
    'D': ((24, 33, 42, 15), (25, 34, 43, 16), (26, 35, 44, 17)),
    'L': ((0, 18, 45, 44),  (3, 21, 48, 41),  (6, 24, 51, 38)),
    'R': ((20, 2, 42, 47),  (23, 5, 39, 50),  (26, 8, 36, 53)),
    'F': ((6, 27, 47, 17),  (7, 30, 46, 14),  (8, 33, 45, 11)),
    'B': ((2, 9, 51, 35),   (1, 12, 52, 32),  (0, 15, 53, 29)),
}


def face_cycles(face: str) -> List[Cycle]:
    """Return every 4-cycle (absolute indices) moved by a turn of ``face``.

    Raises:
        ValueError: if ``face`` is not one of U, L, F, R, B, D.
    """
    if face not in ADJACENT_CYCLES:
        raise ValueError(f"Unknown face {face!r}.")
    offset = FACE_OFFSETS[face]
    local = [tuple(offset + p for p in cycle) for cycle in FACE_LOCAL_CYCLES]
    return local + list(ADJACENT_CYCLES[face])


def rotate(board: Board, face: str, clockwise: bool = True) -> Board:
    """Return a new board with ``face`` turned a quarter turn.

    The input board is left untouched.  Each facelet keeps its own
    owner/colour pairing; only positions change.
    """
    result = list(board)
    for cycle in face_cycles(face):
        path = cycle if clockwise else tuple(reversed(cycle))
        for src, dst in zip(path, path[1:] + path[:1]):
            result[dst] = board[src]
    return tuple(result)
