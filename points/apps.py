# points/apps.py
from django.apps import AppConfig


class PointsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = "points"
    verbose_name = "Points Ledger"

    def ready(self):
        # Import signals module to register signal handlers
        from . import signals  # noqa: F401
