# accounts/roles.py
"""
Role and ownership checks for club users.

Capabilities are role based, with a single per-resource rule: only
the creator of an activity may submit, edit, cancel or delete it.
Administrators do not bypass that rule; auditing is their own path.

The acting user is always passed explicitly by the caller.
"""

import logging
from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import transaction

from activities.exceptions import IllegalArgumentError, UnauthorizedError

from .models import UserProfile

logger = logging.getLogger(__name__)

Role = UserProfile.Role


def role_of(user) -> str:
    """
    Return the club role of a user.

    Parameters
    ----------
    user : User or None
        The acting user. Anonymous users and ``None`` are guests.

    Returns
    -------
    str
        A :class:`Role` value. A superuser without a profile is
        an administrator; any other user without one is a member.
    """
    if user is None or not user.is_authenticated:
        return Role.GUEST
    try:
        return user.profile.role
    except ObjectDoesNotExist:
        return Role.ADMIN if user.is_superuser else Role.MEMBER


def is_manager(user) -> bool:
    """Return True if the user is a manager or an administrator."""
    return role_of(user) in (Role.MANAGER, Role.ADMIN)


def is_admin(user) -> bool:
    """Return True if the user is an administrator."""
    return role_of(user) == Role.ADMIN


def is_creator(user, activity) -> bool:
    """Return True if the user created the given activity."""
    return user is not None and user.pk is not None and activity.creator_id == user.pk


def ensure_manager(user) -> None:
    """
    Require a manager or administrator.

    Raises
    ------
    UnauthorizedError
        If the user holds neither role.
    """
    if not is_manager(user):
        raise UnauthorizedError("Only managers may manage activities.")


def ensure_creator(user, activity) -> None:
    """
    Require the user to be the creator of the activity.

    Parameters
    ----------
    user : User
        The acting user.
    activity : Activity
        The activity being acted upon.

    Raises
    ------
    UnauthorizedError
        If the user did not create the activity, whatever its role.
    """
    if not is_creator(user, activity):
        raise UnauthorizedError(
            "You are not allowed to modify this activity.",
            activity_id=activity.pk,
        )


def display_name(user) -> str:
    """Return the full name of the user, falling back to the username."""
    return user.get_full_name() or user.get_username()


def create_club_user(
    *,
    username: str,
    email: str,
    password: str,
    name: str = "",
    role: str = Role.MEMBER,
    phone: str = "",
    position_title: str = "",
    join_date=None,
    admin_title: str = "",
):
    """
    Create a user together with its club profile.

    Parameters
    ----------
    username : str
        Login name.
    email : str
        Email address, unique across users (case-insensitive).
    password : str
        Raw password, hashed by Django.
    name : str, optional
        Display name stored as the user's first name.
    role : str, optional
        Club role, MEMBER by default. ADMIN also grants staff and
        superuser access to the Django admin; MANAGER grants staff.
    phone, position_title, join_date, admin_title : optional
        Profile attributes; manager and admin fields must match
        the role.

    Returns
    -------
    User
        The created user, with ``user.profile`` populated.

    Raises
    ------
    IllegalArgumentError
        If the email is already used or a field does not match
        the role.
    """
    User = get_user_model()
    if User.objects.filter(email__iexact=email).exists():
        raise IllegalArgumentError(f"Email {email} is already registered.")

    with transaction.atomic():
        user = User.objects.create_user(
            username=username,
            email=email,
            password=password,
            first_name=name,
            is_staff=role in (Role.MANAGER, Role.ADMIN),
            is_superuser=role == Role.ADMIN,
        )
        try:
            profile = user.profile
        except ObjectDoesNotExist:
            profile = UserProfile(user=user)
        profile.role = role
        profile.phone = phone
        profile.position_title = position_title
        profile.join_date = join_date
        profile.admin_title = admin_title
        try:
            profile.full_clean(exclude=["user"])
        except ValidationError as exc:
            raise IllegalArgumentError(str(exc)) from exc
        profile.save()

    logger.info("Created %s %s", profile.get_role_display().lower(), email)
    return user
