"""Core Django App Configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core app: middleware, error handling, health."""

    name = "src.apps.core"
    label = "core"
    verbose_name = "Core"
