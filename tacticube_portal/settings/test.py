"""
tacticube_portal/settings/test.py

Settings for the pytest suite: in-memory channel layer, no placement
delay, permissive hosts.
"""

from .base import *

DEBUG = False
SECRET_KEY = 'tacticube-test-key'
ALLOWED_HOSTS = ['*']

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer',
    },
}

TACTICUBE_RANDOM_DELAY = 0
