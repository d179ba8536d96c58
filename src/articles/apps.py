"""App configuration for the articles application."""

from django.apps import AppConfig


class ArticlesConfig(AppConfig):
    """Articles app holds the Article entity, its category and attachments."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "articles"
    verbose_name = "News"
