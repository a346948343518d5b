"""
tacticube_play/engine/game_session.py

Turn/phase state machine for one TactiCube engine instance.

Phases:

    SETUP --start_game--> PLACE --place_tile--> TWIST
                            ^                     |
                            +--rotate/skip--------+
                                                  |
                               (full board / 3rd skip)
                                                  v
                                              GAME_OVER

GAME_OVER is terminal until ``reset_game()``.

Every entry point runs to completion synchronously and either commits all
of its changes (board, scores, phase, player) or none of them.  Invalid
calls are silently ignored: the entry point returns ``False`` and logs the
reason at DEBUG.  Invalid actions can only come from adapter bugs or relay
races, never from something a player should be told about.

Usage:

    session = GameSession()                       # hot-seat
    session.start_game(GameMode.MULTI)
    session.place_tile(4, color_slot=1)
    session.rotate_face('U', clockwise=True)

In a networked match each peer owns a session with ``local_player`` set to
its seat.  Local calls are then refused while it is the other seat's turn;
calls replayed from the relay pass ``from_network=True`` and skip that
check (the sender already enforced it), but phase checks still apply.
"""

import enum
import logging
from typing import Dict, List, Optional

from . import permutation, scoring
from .board import (
    COLOR_SLOTS,
    FACES,
    MAX_PER_COLOR,
    NUM_FACELETS,
    P1,
    PLAYER_IDS,
    PLAYERS,
    Board,
    Facelet,
    is_full,
    new_board,
    other_player,
)

logger = logging.getLogger(__name__)

MAX_CONSECUTIVE_SKIPS = 2


class Phase(str, enum.Enum):
    SETUP     = 'SETUP'
    PLACE     = 'PLACE'
    TWIST     = 'TWIST'
    GAME_OVER = 'GAME_OVER'


class GameMode(str, enum.Enum):
    """How a player's colour is picked when placing a tile.

    SINGLE  one colour: every placement uses palette slot 0.
    MULTI   three colours: the player picks a slot, each capped at 9 uses.
    RANDOM  the system picks the facelet; manual placements are refused
            and automatic ones use palette slot 0.
    """
    SINGLE = 'SINGLE'
    MULTI  = 'MULTI'
    RANDOM = 'RANDOM'


RANDOM_COLOR_SLOT = 0


class GameSession:
    """Authoritative game state for one engine instance."""

    def __init__(self, local_player: Optional[str] = None):
        """
        Args:
            local_player: ``None`` for a hot-seat game; otherwise the seat
                          (``'P1'`` or ``'P2'``) this instance plays for.
        """
        if local_player is not None and local_player not in PLAYER_IDS:
            raise ValueError(f"Unknown player {local_player!r}.")
        self.local_player = local_player
        self.mode         = GameMode.MULTI
        self._clear()

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def start_game(self, mode, from_network: bool = False) -> bool:
        """SETUP -> PLACE with a fresh board in ``mode``.

        In a networked session only the host seat (P1) may start a game
        locally; the guest starts when the host's SYNC_START arrives.
        """
        if self.phase is not Phase.SETUP:
            return self._reject('start_game', 'phase is %s' % self.phase.value)
        if not from_network and self.local_player not in (None, P1):
            return self._reject('start_game', 'only the host starts a networked game')
        try:
            mode = GameMode(mode)
        except ValueError:
            return self._reject('start_game', 'unknown mode %r' % (mode,))

        self._clear()
        self.mode  = mode
        self.phase = Phase.PLACE
        logger.info("Game started in %s mode (local_player=%s)",
                    mode.value, self.local_player)
        return True

    def place_tile(
        self,
        index: int,
        color_slot: Optional[int] = None,
        from_network: bool = False,
        automatic: bool = False,
    ) -> bool:
        """Claim the empty facelet at ``index`` for the current player.

        Args:
            index:        Facelet index, 0-53.
            color_slot:   Palette slot 0-2.  ``None`` means the mode's
                          default (slot 0, or the selected slot in MULTI).
            from_network: Replayed from the peer; skips the turn check.
            automatic:    Placed by the random placer (RANDOM mode only).
        """
        if self.phase is not Phase.PLACE:
            return self._reject('place_tile', 'phase is %s' % self.phase.value)
        if not self.owns_turn(from_network):
            return self._reject('place_tile', 'not this seat\'s turn')
        if self.mode is GameMode.RANDOM and not (automatic or from_network):
            return self._reject('place_tile', 'manual placement in RANDOM mode')
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < NUM_FACELETS:
            return self._reject('place_tile', 'index %r out of range' % (index,))
        if self.board[index].owner is not None:
            return self._reject('place_tile', 'facelet %d already owned' % index)

        slot = self.resolve_color_slot(color_slot)
        if slot is None:
            return self._reject('place_tile', 'bad colour slot %r' % (color_slot,))
        player = self.current_player
        if self.mode is GameMode.MULTI and self.color_usage[player][slot] >= MAX_PER_COLOR:
            return self._reject('place_tile', 'colour slot %d exhausted' % slot)

        board = list(self.board)
        board[index] = Facelet(player, PLAYERS[player].palette[slot])
        self._commit_board(tuple(board))
        self.color_usage[player][slot] += 1
        self.last_placed_index = index
        self.phase = Phase.TWIST
        return True

    def rotate_face(self, face: str, clockwise: bool = True, from_network: bool = False) -> bool:
        """Turn ``face`` a quarter turn and end the current player's turn."""
        if self.phase is not Phase.TWIST:
            return self._reject('rotate_face', 'phase is %s' % self.phase.value)
        if not self.owns_turn(from_network):
            return self._reject('rotate_face', 'not this seat\'s turn')
        if face not in FACES:
            return self._reject('rotate_face', 'unknown face %r' % (face,))

        self.consecutive_skips = 0
        self._commit_board(permutation.rotate(self.board, face, bool(clockwise)))
        self._end_turn()
        return True

    def skip_twist(self, from_network: bool = False) -> bool:
        """Pass on the twist phase.

        The third consecutive skip (by either player, counted since the
        last rotation) is a forfeit: the skipping player loses at once,
        whatever the board or the scores.
        """
        if self.phase is not Phase.TWIST:
            return self._reject('skip_twist', 'phase is %s' % self.phase.value)
        if not self.owns_turn(from_network):
            return self._reject('skip_twist', 'not this seat\'s turn')

        self.consecutive_skips += 1
        if self.consecutive_skips > MAX_CONSECUTIVE_SKIPS:
            self.winner = other_player(self.current_player)
            self.phase  = Phase.GAME_OVER
            logger.info("%s forfeits after %d consecutive skips; winner=%s",
                        self.current_player, self.consecutive_skips, self.winner)
            return True

        self._end_turn()
        return True

    def reset_game(self) -> bool:
        """Return to SETUP from any phase, clearing every field."""
        self._clear()
        return True

    # ------------------------------------------------------------------
    # Presentation hooks
    # ------------------------------------------------------------------

    def select_color(self, slot: int) -> bool:
        """Remember the palette slot used when ``place_tile`` gets no slot."""
        if not isinstance(slot, int) or not 0 <= slot < COLOR_SLOTS:
            return self._reject('select_color', 'bad colour slot %r' % (slot,))
        if (self.mode is GameMode.MULTI
                and self.color_usage[self.current_player][slot] >= MAX_PER_COLOR):
            return self._reject('select_color', 'colour slot %d exhausted' % slot)
        self.selected_color_slot = slot
        return True

    def set_animating(self, animating: bool) -> None:
        self.is_animating = bool(animating)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def owns_turn(self, from_network: bool = False) -> bool:
        """True when this instance may act for the current player."""
        if from_network or self.local_player is None:
            return True
        return self.current_player == self.local_player

    def is_my_turn(self) -> bool:
        return self.owns_turn(from_network=False)

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def snapshot(self) -> dict:
        """Return a JSON-compatible read-only view of the session."""
        return {
            'board':               [{'owner': f.owner, 'color': f.color} for f in self.board],
            'phase':               self.phase.value,
            'current_player':      self.current_player,
            'scores':              {pid: s.to_dict() for pid, s in self.scores.items()},
            'color_usage':         {pid: list(c) for pid, c in self.color_usage.items()},
            'consecutive_skips':   self.consecutive_skips,
            'winner':              self.winner,
            'mode':                self.mode.value,
            'last_placed_index':   self.last_placed_index,
            'is_animating':        self.is_animating,
            'selected_color_slot': self.selected_color_slot,
            'local_player':        self.local_player,
            'players':             {pid: PLAYERS[pid].to_dict() for pid in PLAYER_IDS},
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _clear(self) -> None:
        self.board:  Board = new_board()
        self.phase         = Phase.SETUP
        self.current_player = P1
        self.scores        = scoring.empty_scores()
        self.color_usage: Dict[str, List[int]] = {pid: [0] * COLOR_SLOTS for pid in PLAYER_IDS}
        self.consecutive_skips = 0
        self.winner: Optional[str] = None
        self.last_placed_index: Optional[int] = None
        self.is_animating  = False
        self.selected_color_slot = 0

    def resolve_color_slot(self, color_slot: Optional[int]) -> Optional[int]:
        """Return the palette slot a placement with ``color_slot`` would use."""
        if self.mode is GameMode.SINGLE:
            return 0
        if self.mode is GameMode.RANDOM:
            return RANDOM_COLOR_SLOT
        if color_slot is None:
            return self.selected_color_slot
        if not isinstance(color_slot, int) or not 0 <= color_slot < COLOR_SLOTS:
            return None
        return color_slot

    def _commit_board(self, board: Board) -> None:
        self.board  = board
        self.scores = scoring.score(board)

    def _end_turn(self) -> None:
        """Finish a twist phase: game over on a full board, else next player."""
        self.last_placed_index = None
        if is_full(self.board):
            self.winner = scoring.winner_for(self.scores)
            self.phase  = Phase.GAME_OVER
            logger.info("Board full; P1=%d P2=%d winner=%s",
                        self.scores['P1'].total, self.scores['P2'].total, self.winner)
            return
        self.current_player = other_player(self.current_player)
        self.phase = Phase.PLACE

    def _reject(self, action: str, reason: str) -> bool:
        logger.debug("%s ignored: %s", action, reason)
        return False
