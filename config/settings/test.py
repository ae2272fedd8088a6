# config/settings/test.py
from .base import *  # noqa

SECRET_KEY = "test-secret-key"
DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

LIS_LOG_LEVEL = "WARNING"
LOGGING["loggers"]["lis_core"]["level"] = LIS_LOG_LEVEL
