"""
Shared fixtures for the activities test suite.
"""

from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from accounts.roles import Role, create_club_user
from activities.models import Activity


def make_user(username, role=Role.MANAGER, **extra):
    """Create a club user whose email derives from the username."""
    return create_club_user(
        username=username,
        email=f"{username}@diveclub.test",
        password="pw",
        name=username.title(),
        role=role,
        **extra,
    )


def activity_fields(**overrides):
    """Return valid creation fields for an activity a month ahead."""
    now = timezone.now()
    fields = {
        "title": "Kenting discovery dive",
        "description": "Two-day discovery dive for beginners.",
        "category": "Training",
        "start_time": now + timedelta(days=30),
        "end_time": now + timedelta(days=31),
        "location": "Kenting",
        "max_participants": 20,
        "cost": Decimal("3500.00"),
        "qualifications": "",
        "image_url": "",
    }
    fields.update(overrides)
    return fields


def make_activity(creator, status=Activity.Status.DRAFTING, **overrides):
    """Insert an activity directly, bypassing the workflow."""
    data = activity_fields(**overrides)
    return Activity.objects.create(creator=creator, status=status, **data)
