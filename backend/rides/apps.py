"""Rides app configuration."""

from django.apps import AppConfig


class RidesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'rides'

    def ready(self):
        # The in-process poller is opt-in; Celery beat is the default trigger
        from .matching_monitor import start_matching_monitor
        start_matching_monitor()
