"""
tacticube_play/engine/random_placer.py

Automatic tile placement for RANDOM mode.

In RANDOM mode players never choose where to place: after every commit
that lands in PLACE, the consumer calls ``maybe_place()``, which waits for
the presentation layer's camera swing (``delay`` seconds), picks a
uniformly random empty facelet and places it through the normal
``place_tile`` path with ``automatic=True``.

In a networked match the consumer passes the relay's ``place_tile`` so the
automatic placement is forwarded to the peer exactly like a manual one.
"""

import asyncio
import logging
import random
from typing import Callable, Optional

from .board import Board, empty_indices
from .game_session import RANDOM_COLOR_SLOT, GameMode, Phase

logger = logging.getLogger(__name__)


def choose_index(board: Board, rng=random) -> Optional[int]:
    """Return a uniformly chosen empty facelet index, or None if full."""
    candidates = empty_indices(board)
    if not candidates:
        return None
    return rng.choice(candidates)


class RandomPlacer:
    """Places tiles on behalf of whichever player is to move."""

    def __init__(self, delay: float = 1.2, rng=None):
        """
        Args:
            delay: Seconds to wait before placing (lets the client move its
                   camera to the chosen face).
            rng:   ``random.Random``-like source; the module RNG by default.
        """
        self.delay = delay
        self.rng   = rng or random

    def should_place(self, session) -> bool:
        return (
            session.mode is GameMode.RANDOM
            and session.phase is Phase.PLACE
            and not session.is_animating
            and session.is_my_turn()
        )

    async def maybe_place(self, session, place_tile: Optional[Callable[..., bool]] = None) -> Optional[int]:
        """Place one random tile if the session is waiting for one.

        Args:
            session:    The local GameSession.
            place_tile: Callable with ``place_tile``'s signature; defaults
                        to ``session.place_tile``.

        Returns:
            The index that was placed, or None if nothing was placed.
        """
        if not self.should_place(session):
            return None

        if self.delay:
            await asyncio.sleep(self.delay)
        # The session may have moved on (reset, peer close) while we slept.
        if not self.should_place(session):
            return None

        index = choose_index(session.board, self.rng)
        if index is None:
            logger.warning("RandomPlacer: no empty facelet in PLACE phase")
            return None

        place = place_tile or session.place_tile
        if not place(index, RANDOM_COLOR_SLOT, automatic=True):
            return None
        logger.debug("RandomPlacer placed facelet %d for %s", index, session.current_player)
        return index
