"""Collectives app configuration."""

from django.apps import AppConfig


class CollectivesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "collectives"
    verbose_name = "Collectives"
