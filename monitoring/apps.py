# monitoring/apps.py
"""
Application configuration for the monitoring module.

Monitoring provides the HTML journal log handler and the staff
view that displays it.
"""

from django.apps import AppConfig


class MonitoringConfig(AppConfig):
    """Configuration class for the monitoring application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "monitoring"
    verbose_name = "Monitoring"
