# accounts/apps.py
"""
Application configuration for the accounts module.

The accounts app holds the club profile of every user and the
role checks used by the activity workflow.
"""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """
    Configuration class for the accounts application.

    Attributes
    ----------
    default_auto_field : str
        The default type for auto-created primary key fields.
    name : str
        The full Python path to the application.
    verbose_name : str
        Human readable name shown in the admin.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
    verbose_name = "Club members"

    def ready(self) -> None:
        """Import signals to register the profile handlers."""
        from . import signals  # noqa: F401
