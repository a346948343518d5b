"""
tacticube_play/consumers/peer_channel.py

PeerChannel transport over a Django Channels group.

Both seats of a match join the group ``match_<match_key>``.  Everything a
relay sends is buffered in an outbox and group-sent, in order, when the
owning consumer calls ``flush()`` after the engine call returns; engine
entry points never await.  Each consumer ignores group events carrying
its own ``channel_name`` as ``sender``.

── Group events ──────────────────────────────────────────────────────────
  {type: "relay.hello",   sender}            seat is connected and listening
  {type: "relay.message", sender, payload}   one relay wire message
  {type: "relay.close",   sender}            seat closed its side

Handshake: every consumer announces ``relay.hello`` on connect.  A seat
that is not yet open answers a peer's hello with its own hello *before*
opening, so the peer is open by the time anything the open handlers send
(e.g. the host's SYNC_START) arrives.
"""

import logging
from typing import List

from tacticube_play.engine.relay import PeerChannel

logger = logging.getLogger(__name__)


def group_name_for(match_key: str) -> str:
    return f"match_{match_key}"


class ChannelsPeerChannel(PeerChannel):

    def __init__(self, channel_layer, group_name: str, channel_name: str):
        super().__init__()
        self.channel_layer = channel_layer
        self.group_name    = group_name
        self.channel_name  = channel_name
        self._outbox: List[dict] = []

    # ------------------------------------------------------------------
    # PeerChannel API (synchronous; buffered until flush)
    # ------------------------------------------------------------------

    def send(self, message: dict) -> None:
        if not self.is_open:
            logger.debug("ChannelsPeerChannel: dropping %r on closed channel", message)
            return
        self._queue('relay.message', payload=message)

    def close(self) -> None:
        if not self.is_open:
            return
        self.is_open = False
        self._queue('relay.close')

    def announce(self) -> None:
        self._queue('relay.hello')

    # ------------------------------------------------------------------
    # Consumer-side plumbing
    # ------------------------------------------------------------------

    def is_own(self, event: dict) -> bool:
        return event.get('sender') == self.channel_name

    async def flush(self) -> None:
        """Group-send every buffered event, oldest first."""
        while self._outbox:
            event = self._outbox.pop(0)
            await self.channel_layer.group_send(self.group_name, event)

    def _queue(self, event_type: str, **fields) -> None:
        self._outbox.append({'type': event_type, 'sender': self.channel_name, **fields})
