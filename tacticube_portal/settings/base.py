"""
tacticube_portal/settings/base.py

Base settings shared by all environments.
Environment-specific overrides live in development.py, production.py
and test.py.  Sensitive values are read from a .env file via
python-decouple.

There is no database: matches live in the in-process session store and
game state lives in the consumers.
"""

from pathlib import Path
from decouple import config, Csv

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# ---------------------------------------------------------------------------
# Security
# ---------------------------------------------------------------------------

SECRET_KEY = config('DJANGO_SECRET_KEY', default='CHANGE-ME-IN-PRODUCTION')
DEBUG = config('DJANGO_DEBUG', default=False, cast=bool)
ALLOWED_HOSTS = config('DJANGO_ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())

# ---------------------------------------------------------------------------
# Application definition
# ---------------------------------------------------------------------------

INSTALLED_APPS = [
    # ASGI server (must come first so runserver serves WebSockets)
    'daphne',

    # Third-party
    'channels',

    # TactiCube apps
    'tacticube_play',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'tacticube_portal.urls'

# ASGI application (Daphne uses this entry point)
ASGI_APPLICATION = 'tacticube_portal.asgi.application'

DATABASES = {}

# ---------------------------------------------------------------------------
# Internationalisation
# ---------------------------------------------------------------------------

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

# ---------------------------------------------------------------------------
# Channel Layer
# ---------------------------------------------------------------------------

_use_redis = config('USE_REDIS', default=False, cast=bool)

if _use_redis:
    CHANNEL_LAYERS = {
        'default': {
            'BACKEND': 'channels_redis.core.RedisChannelLayer',
            'CONFIG': {
                'hosts': [config('REDIS_URL', default='redis://127.0.0.1:6379')],
            },
        },
    }
else:
    # In-memory channel layer: works without Redis, single-process only.
    CHANNEL_LAYERS = {
        'default': {
            'BACKEND': 'channels.layers.InMemoryChannelLayer',
        },
    }

# ---------------------------------------------------------------------------
# Game
# ---------------------------------------------------------------------------

# Seconds the random placer waits before each RANDOM-mode placement
# (the client swings its camera to the chosen face meanwhile).
TACTICUBE_RANDOM_DELAY = config('TACTICUBE_RANDOM_DELAY', default=1.2, cast=float)
