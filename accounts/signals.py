# accounts/signals.py
"""
Signals for the accounts application.

This module ensures that each user has an associated
UserProfile instance. A profile is created with the user and
missing profiles are backfilled after database migrations.
Superusers receive the administrator role.
"""

import logging

from django.contrib.auth import get_user_model
from django.db.utils import OperationalError, ProgrammingError
from django.db.models.signals import post_save, post_migrate
from django.dispatch import receiver
from django.apps import apps
from .models import UserProfile

logger = logging.getLogger(__name__)

User = get_user_model()


def _default_role(user) -> str:
    return UserProfile.Role.ADMIN if user.is_superuser else UserProfile.Role.MEMBER


@receiver(post_save, sender=User)
def create_profile_on_user_create(sender, instance, created, **kwargs):
    """
    Create a UserProfile when a new user is created.

    Parameters
    ----------
    sender : Model
        The model class sending the signal (User).
    instance : User
        The user instance that was created or updated.
    created : bool
        True if a new user instance was created, False otherwise.
    **kwargs : dict
        Additional keyword arguments provided by the signal.

    Notes
    -----
    - Raw saves (fixture loading) are skipped.
    - Migration states where the UserProfile table does not exist
      yet are tolerated.
    """
    if not created or kwargs.get("raw"):
        return
    try:
        UserProfile.objects.get_or_create(
            user=instance, defaults={"role": _default_role(instance)}
        )
    except (OperationalError, ProgrammingError):
        logger.warning("Profile table unavailable, skipped profile for user %s", instance.pk)


@receiver(post_migrate)
def backfill_profiles(sender, **kwargs):
    """
    Ensure all existing users have associated UserProfile records.

    Parameters
    ----------
    sender : AppConfig
        The app configuration sending the signal.
    **kwargs : dict
        Additional keyword arguments provided by the signal.
    """
    if sender.name != "accounts" or not apps.is_installed("accounts"):
        return
    try:
        existing = set(UserProfile.objects.values_list("user_id", flat=True))
        to_create = [
            UserProfile(user=u, role=_default_role(u))
            for u in User.objects.all().only("id", "is_superuser")
            if u.id not in existing
        ]
        if to_create:
            UserProfile.objects.bulk_create(to_create, ignore_conflicts=True)
            logger.info("Backfilled %d user profiles", len(to_create))
    except (OperationalError, ProgrammingError):
        logger.warning("Profile backfill skipped, tables not ready")
