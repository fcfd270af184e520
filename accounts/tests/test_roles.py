"""
Tests for club roles, profiles and ownership checks.
"""

from datetime import date

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.apps import apps
from django.test import TestCase

from accounts.models import UserProfile
from accounts.signals import backfill_profiles
from accounts.roles import (
    Role,
    create_club_user,
    display_name,
    ensure_creator,
    ensure_manager,
    is_admin,
    is_creator,
    is_manager,
    role_of,
)
from activities.exceptions import IllegalArgumentError, UnauthorizedError
from activities.models import Activity


def club_user(username, role, **extra):
    return create_club_user(
        username=username,
        email=f"{username}@diveclub.test",
        password="pw",
        role=role,
        **extra,
    )


class RoleTests(TestCase):
    """
    Test cases for role resolution and profile creation.
    """

    def test_guests(self):
        """
        Anonymous users and None are guests.
        """
        self.assertEqual(role_of(None), Role.GUEST)
        self.assertEqual(role_of(AnonymousUser()), Role.GUEST)
        self.assertFalse(is_manager(AnonymousUser()))

    def test_capabilities_by_role(self):
        """
        Verify manager and admin capabilities per role.
        """
        member = club_user("member", Role.MEMBER)
        manager = club_user("manager", Role.MANAGER)
        admin = club_user("admin", Role.ADMIN)

        self.assertFalse(is_manager(member))
        self.assertTrue(is_manager(manager))
        self.assertTrue(is_manager(admin))
        self.assertFalse(is_admin(manager))
        self.assertTrue(is_admin(admin))

        with self.assertRaises(UnauthorizedError):
            ensure_manager(member)
        ensure_manager(manager)

    def test_plain_users_get_a_profile(self):
        """
        Verify that profiles are created with users, superusers as ADMIN.
        """
        User = get_user_model()
        user = User.objects.create_user("plain", "plain@diveclub.test", "pw")
        superuser = User.objects.create_superuser("root", "root@diveclub.test", "pw")
        self.assertEqual(UserProfile.objects.get(user=user).role, Role.MEMBER)
        self.assertEqual(UserProfile.objects.get(user=superuser).role, Role.ADMIN)

    def test_user_without_profile(self):
        """
        Ensure a user without profile is treated as a member.
        """
        User = get_user_model()
        user = User.objects.create_user("ghost", "ghost@diveclub.test", "pw")
        UserProfile.objects.filter(user=user).delete()
        user = User.objects.get(pk=user.pk)
        self.assertEqual(role_of(user), Role.MEMBER)

    def test_backfill_missing_profiles(self):
        """
        Verify that the migration hook backfills missing profiles.
        """
        User = get_user_model()
        user = User.objects.create_user("late", "late@diveclub.test", "pw")
        UserProfile.objects.filter(user=user).delete()
        backfill_profiles(sender=apps.get_app_config("accounts"))
        self.assertTrue(UserProfile.objects.filter(user=user).exists())


class OwnershipTests(TestCase):
    """
    Test cases for the creator-only rule.
    """

    def test_only_creator_passes(self):
        """
        Ensure only the creator passes the ownership check.
        """
        owner = club_user("owner", Role.MANAGER)
        admin = club_user("admin", Role.ADMIN, admin_title="President")
        activity = Activity(creator=owner, title="Dive")

        self.assertTrue(is_creator(owner, activity))
        self.assertFalse(is_creator(admin, activity))
        self.assertFalse(is_creator(None, activity))
        ensure_creator(owner, activity)
        with self.assertRaises(UnauthorizedError):
            ensure_creator(admin, activity)


class CreateClubUserTests(TestCase):
    """
    Test cases for the creation of club users with their profile.
    """

    def test_manager_profile(self):
        """
        Verify the user and profile created for a manager.
        """
        user = create_club_user(
            username="ming",
            email="ming@diveclub.test",
            password="secret",
            name="Ming Wang",
            role=Role.MANAGER,
            phone="0923456789",
            position_title="Activity lead",
            join_date=date(2023, 3, 1),
        )
        user.refresh_from_db()
        self.assertTrue(user.check_password("secret"))
        self.assertTrue(user.is_staff)
        self.assertFalse(user.is_superuser)
        self.assertEqual(display_name(user), "Ming Wang")
        self.assertEqual(user.profile.role, Role.MANAGER)
        self.assertEqual(user.profile.position_title, "Activity lead")

    def test_admin_is_superuser(self):
        """
        Verify that administrators get superuser access.
        """
        user = club_user("chief", Role.ADMIN, admin_title="President")
        self.assertTrue(user.is_superuser)
        self.assertEqual(user.profile.admin_title, "President")

    def test_duplicate_email_is_rejected(self):
        """
        Ensure emails are unique regardless of case.
        """
        club_user("ming", Role.MEMBER)
        with self.assertRaises(IllegalArgumentError):
            create_club_user(username="ming2", email="MING@diveclub.test", password="pw")

    def test_role_fields_must_match(self):
        """
        Ensure role-specific fields are refused on other roles.
        """
        with self.assertRaises(IllegalArgumentError):
            club_user("member", Role.MEMBER, position_title="Lead")
        with self.assertRaises(IllegalArgumentError):
            club_user("manager", Role.MANAGER, admin_title="President")
        self.assertFalse(get_user_model().objects.filter(username="member").exists())

    def test_display_name_falls_back_to_username(self):
        """
        Verify the display name fallback.
        """
        self.assertEqual(display_name(club_user("anon", Role.MEMBER)), "anon")
