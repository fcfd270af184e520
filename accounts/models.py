# accounts/models.py
"""
Database models for the accounts application.

This module defines the UserProfile model, which extends the
built-in Django user with the club role and the manager and
administrator attributes. The user itself carries the name,
email and password credential.
"""

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class UserProfile(models.Model):
    """
    Club profile linked to the Django user.

    A single flat record covers every kind of club user: the role
    tag decides which of the optional fields are meaningful.

    Attributes
    ----------
    user : OneToOneField
        A one-to-one relationship with ``settings.AUTH_USER_MODEL``.
    role : CharField
        The club role, fixed at creation. Choices are defined in
        the Role inner class.
    phone : CharField
        Optional contact phone number.
    position_title : CharField
        Club position (e.g. "Activity lead"). Managers and
        administrators only.
    join_date : DateField
        Date the manager joined the club board. Managers and
        administrators only.
    admin_title : CharField
        Administrator title (e.g. "President"). Administrators only.
    """

    class Role(models.TextChoices):
        """
        Enumeration of club roles.

        GUEST
            May only browse published activities.
        MEMBER
            May view details of published activities.
        MANAGER
            May create, edit, submit, cancel and delete own activities.
        ADMIN
            Manager capabilities plus auditing of submitted activities.
        """

        GUEST = "GUEST", "Guest"
        MEMBER = "MEMBER", "Member"
        MANAGER = "MANAGER", "Manager"
        ADMIN = "ADMIN", "Administrator"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    role = models.CharField(
        max_length=16, choices=Role.choices, default=Role.MEMBER
    )
    phone = models.CharField(max_length=32, blank=True)
    position_title = models.CharField(max_length=100, blank=True)
    join_date = models.DateField(null=True, blank=True)
    admin_title = models.CharField(max_length=100, blank=True)

    @property
    def is_manager(self) -> bool:
        return self.role in (self.Role.MANAGER, self.Role.ADMIN)

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN

    def clean(self):
        """
        Reject attributes that do not belong to the profile's role.

        Raises
        ------
        ValidationError
            If manager fields are set on a guest or member profile,
            or an administrator title on a non-administrator.
        """
        errors = {}
        if not self.is_manager:
            if self.position_title:
                errors["position_title"] = "Only managers have a position title."
            if self.join_date:
                errors["join_date"] = "Only managers have a join date."
        if not self.is_admin and self.admin_title:
            errors["admin_title"] = "Only administrators have an admin title."
        if errors:
            raise ValidationError(errors)

    def __str__(self) -> str:
        return f"{self.user} ({self.get_role_display()})"
