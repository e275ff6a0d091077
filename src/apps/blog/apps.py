"""Blog Posts Django App Configuration."""

from django.apps import AppConfig


class BlogConfig(AppConfig):
    """Configuration for the blog app."""

    name = "src.apps.blog"
    label = "blog"
    verbose_name = "Blog Posts"
