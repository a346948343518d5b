"""
tacticube_play/routing.py

WebSocket URL routing for TactiCube.
"""

from django.urls import re_path
from .consumers import game_consumer

websocket_urlpatterns = [
    # Hot-seat game on a single connection.
    re_path(r'ws/local/$', game_consumer.LocalGameConsumer.as_asgi()),

    # One seat of a networked match.
    re_path(r'ws/match/(?P<match_key>[0-9a-f-]+)/(?P<seat_token>[0-9a-f]+)/$',
            game_consumer.PeerGameConsumer.as_asgi()),
]
