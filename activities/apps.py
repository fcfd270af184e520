# activities/apps.py
"""
Application configuration for the activities module.

The activities app holds the activity lifecycle, its workflow
service, notifications and the scheduled sweep.
"""

from django.apps import AppConfig


class ActivitiesConfig(AppConfig):
    """
    Configuration class for the activities application.

    Attributes
    ----------
    default_auto_field : str
        Primary key field type for models that do not define one.
    name : str
        The full Python path to the application.
    verbose_name : str
        Human readable name shown in the admin.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "activities"
    verbose_name = "Club activities"
