"""
Pytest configuration and fixtures for the TactiCube tests.

Django is configured with the test settings before any test module
imports consumers or views.
"""

import os

import django
import pytest

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'tacticube_portal.settings.test')
django.setup()

from tacticube_play.engine.board import NUM_FACELETS, P1, P2, Facelet, new_board  # noqa: E402


def board_with(owned, base=None):
    """Return a board with ``owned`` = {index: Facelet} applied on ``base``."""
    cells = list(base or new_board())
    for index, facelet in owned.items():
        cells[index] = facelet
    return tuple(cells)


@pytest.fixture
def labelled_board():
    """Every facelet distinct: alternating owners, colour encodes the index."""
    return tuple(
        Facelet(P1 if i % 2 else P2, f'#{i:06x}')
        for i in range(NUM_FACELETS)
    )
