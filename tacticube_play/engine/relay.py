"""
tacticube_play/engine/relay.py

Peer relay that keeps two remote GameSessions in lock-step.

One peer is the host (seat P1), the other the guest (seat P2).  Each peer
owns its own GameSession; the relay forwards every locally committed
action to the other side, which replays it through the same entry point
with ``from_network=True``.

── Wire messages ─────────────────────────────────────────────────────────
  {type: "PLACE",      index: <int>, color_slot: <int>}
  {type: "ROTATE",     face: "U"|"L"|"F"|"R"|"B"|"D", clockwise: <bool>}
  {type: "SKIP"}
  {type: "SYNC_START", mode: "SINGLE"|"MULTI"|"RANDOM"}

Messages are decoded once, at the channel boundary, into the message
classes below.  The protocol is best-effort and non-reconciling: no
sequence numbers, no conflict resolution, no replay on reconnect.  The
per-side turn check (``is_my_turn``) is what keeps the two sessions from
diverging.

── Channel contract ──────────────────────────────────────────────────────
A channel is any ``PeerChannel`` subclass providing ``send(message)`` and
``close()``; it reports ``on_open`` / ``on_message`` / ``on_close`` events
to registered handlers.  ``LoopbackChannel`` connects two relays in one
process; the Channels-backed transport lives in
``tacticube_play.consumers.peer_channel``.
"""

import json
import logging
import weakref
from typing import Callable, List, NamedTuple, Optional, Union

from .board import FACES, NUM_FACELETS, P1, P2
from .game_session import GameMode, GameSession, Phase

logger = logging.getLogger(__name__)

DISCONNECT_NOTICE = 'Your opponent disconnected. The game has been reset.'


class ProtocolError(ValueError):
    """Raised when an inbound relay message cannot be decoded."""


# ---------------------------------------------------------------------------
# Message variants
# ---------------------------------------------------------------------------

class PlaceMessage(NamedTuple):
    index:      int
    color_slot: int

    def to_dict(self) -> dict:
        return {'type': 'PLACE', 'index': self.index, 'color_slot': self.color_slot}


class RotateMessage(NamedTuple):
    face:      str
    clockwise: bool

    def to_dict(self) -> dict:
        return {'type': 'ROTATE', 'face': self.face, 'clockwise': self.clockwise}


class SkipMessage(NamedTuple):
    def to_dict(self) -> dict:
        return {'type': 'SKIP'}


class SyncStartMessage(NamedTuple):
    mode: GameMode

    def to_dict(self) -> dict:
        return {'type': 'SYNC_START', 'mode': self.mode.value}


Message = Union[PlaceMessage, RotateMessage, SkipMessage, SyncStartMessage]


def _int_field(data: dict, key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ProtocolError(f"{key!r} must be an integer, got {value!r}.")
    return value


def decode_message(data) -> Message:
    """Turn a wire dict into one of the message classes.

    Raises:
        ProtocolError: for anything that is not a well-formed message.
    """
    if not isinstance(data, dict):
        raise ProtocolError(f"Relay message must be an object, got {type(data).__name__}.")

    msg_type = data.get('type')
    if msg_type == 'PLACE':
        index = _int_field(data, 'index')
        if not 0 <= index < NUM_FACELETS:
            raise ProtocolError(f"Facelet index {index} is out of range.")
        return PlaceMessage(index, _int_field(data, 'color_slot'))

    if msg_type == 'ROTATE':
        face = data.get('face')
        if face not in FACES:
            raise ProtocolError(f"Unknown face {face!r}.")
        clockwise = data.get('clockwise')
        if not isinstance(clockwise, bool):
            raise ProtocolError("'clockwise' must be a boolean.")
        return RotateMessage(face, clockwise)

    if msg_type == 'SKIP':
        return SkipMessage()

    if msg_type == 'SYNC_START':
        try:
            return SyncStartMessage(GameMode(data.get('mode')))
        except ValueError:
            raise ProtocolError(f"Unknown game mode {data.get('mode')!r}.") from None

    raise ProtocolError(f"Unknown relay message type {msg_type!r}.")


# ---------------------------------------------------------------------------
# Channels
# ---------------------------------------------------------------------------

class PeerChannel:
    """Base class for a bidirectional message channel to one peer."""

    def __init__(self):
        self.is_open = False
        self._open_handlers:    List[Callable[[], None]] = []
        self._message_handlers: List[Callable[[dict], None]] = []
        self._close_handlers:   List[Callable[[], None]] = []

    def on_open(self, handler: Callable[[], None]) -> None:
        self._open_handlers.append(handler)

    def on_message(self, handler: Callable[[dict], None]) -> None:
        self._message_handlers.append(handler)

    def on_close(self, handler: Callable[[], None]) -> None:
        self._close_handlers.append(handler)

    def send(self, message: dict) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Close the channel.  The remote side sees ``on_close``; we do not."""
        raise NotImplementedError

    # -- Event delivery (called by transports) --

    def fire_open(self) -> None:
        self.is_open = True
        for handler in list(self._open_handlers):
            handler()

    def fire_message(self, message: dict) -> None:
        for handler in list(self._message_handlers):
            handler(message)

    def fire_close(self) -> None:
        was_open = self.is_open
        self.is_open = False
        if was_open:
            for handler in list(self._close_handlers):
                handler()


class LoopbackChannel(PeerChannel):
    """In-process channel; ``pair()`` returns two connected ends.

    Messages are JSON round-tripped so the receiving side sees exactly
    what a network transport would deliver.
    """

    def __init__(self):
        super().__init__()
        self._peer: Optional['LoopbackChannel'] = None

    @classmethod
    def pair(cls):
        a, b = cls(), cls()
        a._peer, b._peer = b, a
        return a, b

    def connect(self) -> None:
        """Open both ends, then fire ``on_open`` on this end first."""
        ends = [self] if self._peer is None else [self, self._peer]
        for end in ends:
            end.is_open = True
        for end in ends:
            end.fire_open()

    def send(self, message: dict) -> None:
        if not self.is_open or self._peer is None or not self._peer.is_open:
            logger.debug("LoopbackChannel: dropping %r on closed channel", message)
            return
        self._peer.fire_message(json.loads(json.dumps(message)))

    def close(self) -> None:
        if not self.is_open:
            return
        self.is_open = False
        if self._peer is not None:
            self._peer.fire_close()


# ---------------------------------------------------------------------------
# Relay
# ---------------------------------------------------------------------------

class SyncRelay:
    """Forwards local actions to the peer and replays the peer's actions."""

    def __init__(
        self,
        session: GameSession,
        channel: PeerChannel,
        is_host: bool,
        mode=GameMode.MULTI,
        on_disconnect: Optional[Callable[[str], None]] = None,
    ):
        """
        Args:
            session:       This peer's GameSession.  The relay keeps only a
                           weak reference; the caller owns the session.
            channel:       Transport to the peer.
            is_host:       True for the host (P1), False for the guest (P2).
            mode:          Mode the host starts in when the channel opens.
            on_disconnect: ``callable(notice)`` for the presentation layer,
                           called when the peer closes the channel.
        """
        self._session_ref  = weakref.ref(session)
        self.channel       = channel
        self.is_host       = is_host
        self.mode          = GameMode(mode)
        self.on_disconnect = on_disconnect

        session.local_player = P1 if is_host else P2

        channel.on_open(self._handle_open)
        channel.on_message(self._handle_message)
        channel.on_close(self._handle_close)

    @property
    def session(self) -> Optional[GameSession]:
        return self._session_ref()

    def is_my_turn(self) -> bool:
        session = self.session
        if session is None:
            return False
        return (session.current_player == P1) == self.is_host

    # ------------------------------------------------------------------
    # Local actions
    # ------------------------------------------------------------------

    def start_game(self, mode=None) -> bool:
        """Host only: start the local game and tell the guest to do the same."""
        session = self.session
        if session is None or not self.is_host or not self.channel.is_open:
            return False
        mode = GameMode(mode) if mode is not None else self.mode
        if not session.start_game(mode):
            return False
        self.mode = mode
        self.channel.send(SyncStartMessage(mode).to_dict())
        return True

    def place_tile(self, index: int, color_slot: Optional[int] = None, automatic: bool = False) -> bool:
        session = self.session
        if session is None or not self.is_my_turn():
            return False
        slot = session.resolve_color_slot(color_slot)
        if slot is None or not session.place_tile(index, slot, automatic=automatic):
            return False
        self.channel.send(PlaceMessage(index, slot).to_dict())
        return True

    def rotate_face(self, face: str, clockwise: bool = True) -> bool:
        session = self.session
        if session is None or not self.is_my_turn():
            return False
        if not session.rotate_face(face, clockwise):
            return False
        self.channel.send(RotateMessage(face, bool(clockwise)).to_dict())
        return True

    def skip_twist(self) -> bool:
        session = self.session
        if session is None or not self.is_my_turn():
            return False
        if not session.skip_twist():
            return False
        self.channel.send(SkipMessage().to_dict())
        return True

    def reset_game(self) -> bool:
        """Reset the local session and end the relay session with the peer."""
        session = self.session
        if session is not None:
            session.reset_game()
        self.channel.close()
        return True

    # ------------------------------------------------------------------
    # Channel events
    # ------------------------------------------------------------------

    def _handle_open(self) -> None:
        session = self.session
        if session is None or not self.is_host:
            return
        if session.phase is Phase.SETUP:
            self.start_game(self.mode)

    def _handle_message(self, data) -> None:
        session = self.session
        if session is None:
            return
        try:
            message = decode_message(data)
        except ProtocolError as exc:
            logger.warning("SyncRelay: dropping bad message %r: %s", data, exc)
            return

        if isinstance(message, PlaceMessage):
            applied = session.place_tile(message.index, message.color_slot, from_network=True)
        elif isinstance(message, RotateMessage):
            applied = session.rotate_face(message.face, message.clockwise, from_network=True)
        elif isinstance(message, SkipMessage):
            applied = session.skip_twist(from_network=True)
        elif self.is_host:
            # Only the host announces game starts.
            applied = False
        else:
            self.mode = message.mode
            applied = session.start_game(message.mode, from_network=True)

        if not applied:
            logger.warning("SyncRelay: peer message %r did not apply (phase=%s)",
                           message.to_dict(), session.phase.value)

    def _handle_close(self) -> None:
        session = self.session
        if session is not None:
            session.reset_game()
        logger.info("SyncRelay: peer channel closed; session reset")
        if self.on_disconnect is not None:
            self.on_disconnect(DISCONNECT_NOTICE)
