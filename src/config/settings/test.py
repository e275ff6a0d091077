"""
Test settings for Django project.

Uses SQLite in memory and a local memory cache so the suite runs without
any external services.
"""

from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret-key"
DEBUG = False
ALLOWED_HOSTS = ["testserver", "localhost"]

# Database: SQLite in memory for fast, isolated tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "test-cache",
    }
}

BLOG_POSTS = {
    "STORE": "src.apps.blog.store.DjangoPostStore",
    "ID_GENERATOR": "src.apps.blog.ids.ObjectIdGenerator",
}

# Logging: Quiet logging during tests
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "level": "ERROR",
            "class": "logging.StreamHandler",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "ERROR",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "ERROR",
            "propagate": False,
        },
        "django.db.backends": {
            "handlers": [],
            "level": "ERROR",
            "propagate": False,
        },
    },
}
