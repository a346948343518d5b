"""
tacticube_play/engine/board.py

The facelet board: 54 ownership slots on the surface of a 3x3x3 cube.

Index layout (six faces of nine, in this fixed order):

    U:  0-8     L:  9-17    F: 18-26
    R: 27-35    B: 36-44    D: 45-53

Within a face the nine indices form a row-major 3x3 grid
(``offset + row*3 + col``, row 0 at the top).

A board is an immutable tuple of ``Facelet`` values.  Every mutation
(placement, face turn) builds a new tuple, so a board can be shared
freely between the session, the serializer and the tests.
"""

from typing import Dict, List, NamedTuple, Optional, Tuple

# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------

P1 = 'P1'
P2 = 'P2'
PLAYER_IDS = (P1, P2)
DRAW = 'DRAW'


def other_player(player_id: str) -> str:
    return P2 if player_id == P1 else P1


class PlayerConfig(NamedTuple):
    """Static display and palette configuration for one player."""
    id:           str
    display_name: str
    palette:      Tuple[str, str, str]
    theme_color:  str

    def to_dict(self) -> dict:
        return {
            'id':           self.id,
            'display_name': self.display_name,
            'palette':      list(self.palette),
            'theme_color':  self.theme_color,
        }


PLAYERS: Dict[str, PlayerConfig] = {
    # Warm palette: red, orange, yellow.
    P1: PlayerConfig(P1, 'Player 1', ('#ef4444', '#f97316', '#eab308'), '#ef4444'),
    # Cool palette: blue, green, white.
    P2: PlayerConfig(P2, 'Player 2', ('#3b82f6', '#22c55e', '#ffffff'), '#3b82f6'),
}

COLOR_SLOTS   = 3
MAX_PER_COLOR = 9

# ---------------------------------------------------------------------------
# Faces
# ---------------------------------------------------------------------------

FACES = ('U', 'L', 'F', 'R', 'B', 'D')
FACE_OFFSETS = {face: i * 9 for i, face in enumerate(FACES)}
NUM_FACELETS = 9 * len(FACES)


def face_indices(face: str) -> List[int]:
    """Return the nine facelet indices of ``face`` in grid order."""
    offset = FACE_OFFSETS[face]
    return list(range(offset, offset + 9))


def face_of(index: int) -> str:
    """Return the face letter that facelet ``index`` belongs to."""
    if not 0 <= index < NUM_FACELETS:
        raise IndexError(f"Facelet index {index} is out of range.")
    return FACES[index // 9]


# ---------------------------------------------------------------------------
# Facelets and boards
# ---------------------------------------------------------------------------

EMPTY_COLOR = '#333333'


class Facelet(NamedTuple):
    owner: Optional[str] = None
    color: str           = EMPTY_COLOR

    @property
    def is_empty(self) -> bool:
        return self.owner is None


EMPTY_FACELET = Facelet()

Board = Tuple[Facelet, ...]


def new_board() -> Board:
    """Return a board with all 54 facelets unowned."""
    return (EMPTY_FACELET,) * NUM_FACELETS


def is_full(board: Board) -> bool:
    return all(f.owner is not None for f in board)


def owned_count(board: Board, player_id: Optional[str] = None) -> int:
    """Count owned facelets, optionally only those owned by ``player_id``."""
    if player_id is None:
        return sum(1 for f in board if f.owner is not None)
    return sum(1 for f in board if f.owner == player_id)


def empty_indices(board: Board) -> List[int]:
    return [i for i, f in enumerate(board) if f.owner is None]
