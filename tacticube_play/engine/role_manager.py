"""
tacticube_play/engine/role_manager.py

Manages the two seats of one networked match.

A *seat token* is a UUID hex string issued to each player when they create
or join a match.  It is passed as a URL segment when the player opens the
match WebSocket (``/ws/match/<match_key>/<seat_token>/``), allowing
PeerGameConsumer to look up the player's seat without any login.

The host always sits in P1 and the guest in P2.
"""

import uuid
from typing import Dict, List, Optional

from .board import P1, P2, PLAYERS


class SeatInfo:
    """Mutable record for one seated player."""

    __slots__ = ('token', 'name', 'player_id', 'connected')

    def __init__(self, token: str, name: str, player_id: str):
        self.token     = token
        self.name      = name
        self.player_id = player_id
        self.connected = False

    @property
    def is_host(self) -> bool:
        return self.player_id == P1


class RoleManager:
    """Seat assignments for one match: a host and, once joined, a guest."""

    def __init__(self):
        self._seats: Dict[str, SeatInfo] = {}

    # ------------------------------------------------------------------
    # Seat lifecycle
    # ------------------------------------------------------------------

    def add_host(self, name: str = '') -> str:
        """Seat the host in P1 and return their token."""
        return self._add(P1, name)

    def add_guest(self, name: str = '') -> Optional[str]:
        """Seat the guest in P2 and return their token, or None if taken."""
        return self._add(P2, name)

    def _add(self, player_id: str, name: str) -> Optional[str]:
        if self.get_token_for_player(player_id) is not None:
            return None
        token = uuid.uuid4().hex
        self._seats[token] = SeatInfo(token, name or PLAYERS[player_id].display_name, player_id)
        return token

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_seat(self, token: str) -> Optional[SeatInfo]:
        return self._seats.get(token)

    def get_token_for_player(self, player_id: str) -> Optional[str]:
        for seat in self._seats.values():
            if seat.player_id == player_id:
                return seat.token
        return None

    def get_all_seats(self) -> List[SeatInfo]:
        return list(self._seats.values())

    def is_full(self) -> bool:
        return len(self._seats) == 2

    def to_dict(self) -> dict:
        """Serialise for sending over WebSocket (tokens are not exposed)."""
        return {
            'seats': [
                {'player_id': s.player_id, 'name': s.name, 'connected': s.connected}
                for s in sorted(self._seats.values(), key=lambda s: s.player_id)
            ],
        }
