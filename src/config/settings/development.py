"""Development settings: debug on, local SQLite database."""

from decouple import config

from .base import *  # noqa: F401,F403
from .base import LOGGING

DEBUG = config("DEBUG", default=True, cast=bool)
ALLOWED_HOSTS = ["*"]

LOGGING["loggers"]["src"]["level"] = "DEBUG"  # type: ignore[index]
