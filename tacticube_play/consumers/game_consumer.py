"""
tacticube_play/consumers/game_consumer.py

In-game WebSocket consumers.

Each connection is the input adapter and presentation feed for one
engine instance:

  - LocalGameConsumer:  hot-seat play; both players share one GameSession.
  - PeerGameConsumer:   one seat of a networked match.  Owns this seat's
                        GameSession and a SyncRelay over a
                        ChannelsPeerChannel to the other seat's consumer.

WebSocket URLs:
    ws://<host>/ws/local/
    ws://<host>/ws/match/<match_key>/<seat_token>/

── Messages from client ──────────────────────────────────────────────────
  {type: "start_game",    mode: "SINGLE"|"MULTI"|"RANDOM"}
  {type: "select_color",  slot: <int>}
  {type: "place_tile",    index: <int>, color_slot: <int>}   (slot optional)
  {type: "rotate_face",   face: "U"|"L"|"F"|"R"|"B"|"D", clockwise: <bool>}
  {type: "skip_twist"}
  {type: "set_animating", animating: <bool>}
  {type: "reset_game"}
  {type: "request_state"}

── Messages to client ────────────────────────────────────────────────────
  {type: "state_update",      state}
  {type: "peer_disconnected", message}
  {type: "error",             message}

Rule violations (wrong phase, occupied facelet, not your turn, ...) are
silent: the client just receives the unchanged state.  Only malformed
commands get an ``error`` reply.

Each consumer handles one event at a time.  In RANDOM mode the placer's
delay (TACTICUBE_RANDOM_DELAY) is awaited inside that handling, so the
seat's next client command or relay event waits until the automatic
placement has been made.

In a networked match ``reset_game`` closes the relay (the peer resets
and gets a ``peer_disconnected`` notice), puts the match back to
``waiting`` and announces the seat again.  The two seats then repeat the
hello handshake and the host starts a fresh game in the match's mode.
"""

import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.conf import settings

from tacticube_play import session_store
from tacticube_play.consumers.peer_channel import ChannelsPeerChannel, group_name_for
from tacticube_play.engine.board import FACES
from tacticube_play.engine.game_session import GameMode, GameSession
from tacticube_play.engine.random_placer import RandomPlacer
from tacticube_play.engine.relay import SyncRelay
from tacticube_play.engine.state_serializer import serialize_session

logger = logging.getLogger(__name__)


class CommandError(ValueError):
    """A client command that could not be parsed."""


class BaseGameConsumer(AsyncJsonWebsocketConsumer):
    """Command parsing and state pushes shared by both consumers.

    Subclasses set ``self.session`` and ``self.actions`` in ``connect``.
    ``actions`` is whatever carries the turn actions: the session itself
    for hot-seat play, the SyncRelay for a networked seat.
    """

    session = None
    actions = None

    def make_placer(self) -> RandomPlacer:
        return RandomPlacer(delay=getattr(settings, 'TACTICUBE_RANDOM_DELAY', 1.2))

    # ----------------------------------------------------------------
    # Message dispatch
    # ----------------------------------------------------------------

    async def receive_json(self, content):
        if self.session is None:
            await self.send_json({'type': 'error', 'message': 'Game engine not ready.'})
            return

        msg_type = content.get('type') if isinstance(content, dict) else None
        handler = self._handlers().get(msg_type)
        if handler is None:
            await self.send_json({
                'type': 'error', 'message': f'Unknown message type: {msg_type!r}'
            })
            return

        try:
            handler(content)
        except CommandError as exc:
            await self.send_json({'type': 'error', 'message': str(exc)})
            return
        await self.after_event()

    def _handlers(self) -> dict:
        return {
            'start_game':    self._handle_start,
            'select_color':  self._handle_select_color,
            'place_tile':    self._handle_place,
            'rotate_face':   self._handle_rotate,
            'skip_twist':    lambda content: self.actions.skip_twist(),
            'set_animating': lambda content: self.session.set_animating(bool(content.get('animating'))),
            'reset_game':    self._handle_reset,
            'request_state': lambda content: None,
        }

    # ----------------------------------------------------------------
    # Command handlers
    # ----------------------------------------------------------------

    def _handle_start(self, content):
        self.actions.start_game(_parse_mode(content.get('mode')))

    def _handle_select_color(self, content):
        self.session.select_color(_parse_int(content, 'slot'))

    def _handle_place(self, content):
        index = _parse_int(content, 'index')
        color_slot = None
        if content.get('color_slot') is not None:
            color_slot = _parse_int(content, 'color_slot')
        self.actions.place_tile(index, color_slot)

    def _handle_rotate(self, content):
        face = content.get('face')
        if face not in FACES:
            raise CommandError(f'face must be one of {", ".join(FACES)}.')
        clockwise = content.get('clockwise', True)
        if not isinstance(clockwise, bool):
            raise CommandError('clockwise must be true or false.')
        self.actions.rotate_face(face, clockwise)

    def _handle_reset(self, content):
        self.actions.reset_game()

    # ----------------------------------------------------------------
    # After every engine call
    # ----------------------------------------------------------------

    async def after_event(self):
        """Flush outbound traffic, push the state, run the random placer."""
        await self.flush()
        await self.push_state()

        placed = await self.placer.maybe_place(self.session, self.actions.place_tile)
        if placed is not None:
            await self.flush()
            await self.push_state()

    async def flush(self):
        pass

    async def push_state(self):
        await self.send_json({'type': 'state_update', 'state': serialize_session(self.session)})


class LocalGameConsumer(BaseGameConsumer):
    """Hot-seat game: one session, both players on the same connection."""

    async def connect(self):
        self.session = GameSession()
        self.actions = self.session
        self.placer  = self.make_placer()
        await self.accept()
        await self.push_state()

    async def disconnect(self, close_code):
        self.session = None


class PeerGameConsumer(BaseGameConsumer):
    """One seat of a networked match."""

    # ----------------------------------------------------------------
    # Connection lifecycle
    # ----------------------------------------------------------------

    async def connect(self):
        self.match_key  = self.scope['url_route']['kwargs']['match_key']
        self.seat_token = self.scope['url_route']['kwargs']['seat_token']
        self.group_name = group_name_for(self.match_key)
        self.notices    = []

        match = session_store.get_match(self.match_key)
        if match is None:
            await self.close(code=4404)
            return

        seat = match['role_manager'].get_seat(self.seat_token)
        if seat is None:
            await self.close(code=4403)
            return
        if seat.connected:
            await self.close(code=4409)
            return
        seat.connected = True
        self.seat = seat

        self.session = GameSession()
        self.channel = ChannelsPeerChannel(self.channel_layer, self.group_name, self.channel_name)
        self.relay   = SyncRelay(
            self.session,
            self.channel,
            is_host=seat.is_host,
            mode=match['mode'],
            on_disconnect=self.notices.append,
        )
        self.actions = self.relay
        self.placer  = self.make_placer()

        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        await self.push_state()

        self.channel.announce()
        await self.flush()
        logger.info("Seat %s connected to match %s", seat.player_id, self.match_key)

    async def disconnect(self, close_code):
        seat = getattr(self, 'seat', None)
        if seat is None:
            return
        seat.connected = False
        self.channel.close()
        await self.flush()
        await self.channel_layer.group_discard(self.group_name, self.channel_name)
        self.session = None

        match = session_store.get_match(self.match_key)
        if match is not None:
            if not any(s.connected for s in match['role_manager'].get_all_seats()):
                session_store.delete_match(self.match_key)
            else:
                session_store.update_match(self.match_key, {'status': 'waiting'})
        logger.info("Seat %s left match %s", seat.player_id, self.match_key)

    # ----------------------------------------------------------------
    # Commands
    # ----------------------------------------------------------------

    def _handle_reset(self, content):
        self.relay.reset_game()
        session_store.update_match(self.match_key, {'status': 'waiting'})
        # Queued after relay.close, so the peer resets before it answers.
        self.channel.announce()

    # ----------------------------------------------------------------
    # Channel layer message handlers (called by group_send)
    # ----------------------------------------------------------------

    async def relay_hello(self, event):
        if self.session is None or self.channel.is_own(event) or self.channel.is_open:
            return
        # Answer first so the peer is open before anything we send on open.
        self.channel.announce()
        self.channel.fire_open()
        session_store.update_match(self.match_key, {'status': 'in_progress'})
        await self.after_event()

    async def relay_message(self, event):
        if self.session is None or self.channel.is_own(event) or not self.channel.is_open:
            return
        self.channel.fire_message(event.get('payload'))
        await self.after_event()

    async def relay_close(self, event):
        if self.session is None or self.channel.is_own(event):
            return
        self.channel.fire_close()
        await self.after_event()

    # ----------------------------------------------------------------
    # After every engine call
    # ----------------------------------------------------------------

    async def flush(self):
        await self.channel.flush()
        while self.notices:
            await self.send_json({'type': 'peer_disconnected', 'message': self.notices.pop(0)})
        if self.session is not None and self.session.is_over:
            session_store.update_match(self.match_key, {'status': 'ended'})


# ---------------------------------------------------------------------------
# Module-level sync helpers
# ---------------------------------------------------------------------------

def _parse_int(content: dict, key: str) -> int:
    value = content.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise CommandError(f'{key} must be an integer.')
    return value


def _parse_mode(value) -> GameMode:
    try:
        return GameMode(value)
    except ValueError:
        modes = ', '.join(m.value for m in GameMode)
        raise CommandError(f'mode must be one of {modes}.') from None
