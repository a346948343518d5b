"""
tacticube_play/engine/scoring.py

Pattern scoring for both players over the whole board.

Scores are never maintained incrementally: ``score(board)`` is recomputed
from scratch after every commit, so the result depends on the board alone.

Per face and per player:

    line       +1   each fully owned row, column or diagonal (max 8)
    square     +2   each fully owned 2x2 block (max 4)
    face bonus +5   all nine facelets owned (max 1)
    cross      +3   centre and its four orthogonal neighbours owned AND
                    all five share the centre's colour (max 1)

The breakdown counters hold raw pattern counts; only ``total`` is
point-weighted.
"""

from dataclasses import asdict, dataclass
from typing import Dict

from .board import DRAW, FACES, P1, P2, PLAYER_IDS, Board, face_indices

LINE_POINTS   = 1
SQUARE_POINTS = 2
FACE_POINTS   = 5
CROSS_POINTS  = 3

# Grid positions within one face.
LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),    # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),    # columns
    (0, 4, 8), (2, 4, 6),               # diagonals
)
SQUARES = (
    (0, 1, 3, 4), (1, 2, 4, 5),
    (3, 4, 6, 7), (4, 5, 7, 8),
)
CROSS_CENTER = 4
CROSS_ARMS   = (1, 3, 5, 7)


@dataclass
class ScoreBreakdown:
    lines:      int = 0
    squares:    int = 0
    face_bonus: int = 0
    crosses:    int = 0
    total:      int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def _score_face(cells, player_id: str) -> ScoreBreakdown:
    """Score one face (nine facelets in grid order) for one player."""
    owned = [c.owner == player_id for c in cells]

    lines   = sum(1 for line in LINES if all(owned[p] for p in line))
    squares = sum(1 for sq in SQUARES if all(owned[p] for p in sq))
    face_bonus = 1 if all(owned) else 0

    crosses = 0
    center = cells[CROSS_CENTER]
    if owned[CROSS_CENTER] and all(
        owned[p] and cells[p].color == center.color for p in CROSS_ARMS
    ):
        crosses = 1

    total = (lines * LINE_POINTS + squares * SQUARE_POINTS
             + face_bonus * FACE_POINTS + crosses * CROSS_POINTS)
    return ScoreBreakdown(lines, squares, face_bonus, crosses, total)


def score(board: Board) -> Dict[str, ScoreBreakdown]:
    """Return ``{'P1': ScoreBreakdown, 'P2': ScoreBreakdown}`` for ``board``.

    Both players are scored against the same board; ownership patterns are
    evaluated independently per player.
    """
    result = {pid: ScoreBreakdown() for pid in PLAYER_IDS}
    for face in FACES:
        cells = [board[i] for i in face_indices(face)]
        for pid in PLAYER_IDS:
            part = _score_face(cells, pid)
            acc  = result[pid]
            acc.lines      += part.lines
            acc.squares    += part.squares
            acc.face_bonus += part.face_bonus
            acc.crosses    += part.crosses
            acc.total      += part.total
    return result


def empty_scores() -> Dict[str, ScoreBreakdown]:
    return {pid: ScoreBreakdown() for pid in PLAYER_IDS}


def winner_for(scores: Dict[str, ScoreBreakdown]) -> str:
    """Return the player with the strictly higher total, or ``DRAW``."""
    s1, s2 = scores[P1].total, scores[P2].total
    if s1 > s2:
        return P1
    if s2 > s1:
        return P2
    return DRAW
