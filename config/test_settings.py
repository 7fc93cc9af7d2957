# config/test_settings.py

import tempfile
from pathlib import Path

from .settings import *

# =============================================
# TEST-SPECIFIC SETTINGS
# =============================================

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

USE_SPACES = False

# Uploaded images land in a throwaway directory
MEDIA_ROOT = Path(tempfile.mkdtemp(prefix='clinic-media-'))

# Remove WhiteNoise middleware
MIDDLEWARE = [m for m in MIDDLEWARE if 'whitenoise' not in m.lower()]

# Faster password hashing
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'clinic-site-tests',
    }
}

DEBUG = False
