# activities/management/commands/bootstrap_demo.py
"""
Management command to initialize demo data.

This command creates demo club users and activities covering
every reviewable status. It can be executed using::

    python manage.py bootstrap_demo
"""

from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from accounts.roles import Role, create_club_user
from activities.models import Activity

DEMO_USERS = [
    {
        "username": "admin",
        "email": "admin@diveclub.com",
        "password": "admin123",
        "name": "Club Admin",
        "role": Role.ADMIN,
        "phone": "0912345678",
        "position_title": "President",
        "join_date": date(2023, 1, 1),
        "admin_title": "President",
    },
    {
        "username": "manager1",
        "email": "manager1@diveclub.com",
        "password": "manager123",
        "name": "Ming Wang",
        "role": Role.MANAGER,
        "phone": "0923456789",
        "position_title": "Activity lead",
        "join_date": date(2023, 3, 1),
    },
    {
        "username": "manager2",
        "email": "manager2@diveclub.com",
        "password": "manager123",
        "name": "Mei Li",
        "role": Role.MANAGER,
        "phone": "0934567890",
        "position_title": "Training lead",
        "join_date": date(2023, 5, 1),
    },
    {
        "username": "member",
        "email": "member@diveclub.com",
        "password": "member123",
        "name": "San Zhang",
        "role": Role.MEMBER,
        "phone": "0945678901",
    },
]


class Command(BaseCommand):
    """
    Django management command for demo initialization.

    Creates:
    - An administrator, two managers and a member.
    - Five activities: two published, one pending review, one
      draft and one needing revision.

    Re-running the command leaves existing users untouched and
    refreshes the demo activities in place.
    """

    help = "Create demo club users and activities."

    def _ensure_user(self, data):
        User = get_user_model()
        user = User.objects.filter(username=data["username"]).first()
        if user is not None:
            return user
        user = create_club_user(**data)
        self.stdout.write(
            self.style.SUCCESS(f"{data['role'].label} : {data['username']}/{data['password']}")
        )
        return user

    def handle(self, *args, **options):
        users = {data["username"]: self._ensure_user(data) for data in DEMO_USERS}
        manager1, manager2 = users["manager1"], users["manager2"]

        now = timezone.now()
        activities = [
            {
                "title": "Kenting discovery dive",
                "description": "Two-day discovery dive in Kenting with certified instructors, open to beginners.",
                "category": "Training",
                "start_time": now + timedelta(days=30),
                "end_time": now + timedelta(days=31),
                "location": "Kenting National Park",
                "max_participants": 20,
                "cost": Decimal("3500.00"),
                "qualifications": "No experience required",
                "image_url": "https://example.com/images/diving1.jpg",
                "status": Activity.Status.PUBLISHED,
                "creator": manager1,
            },
            {
                "title": "Green Island advanced training",
                "description": "Deep and night dives for members holding an Open Water certification.",
                "category": "Advanced training",
                "start_time": now + timedelta(days=45),
                "end_time": now + timedelta(days=47),
                "location": "Green Island",
                "max_participants": 15,
                "cost": Decimal("8500.00"),
                "qualifications": "Open Water certification",
                "image_url": "https://example.com/images/diving2.jpg",
                "status": Activity.Status.PUBLISHED,
                "creator": manager1,
            },
            {
                "title": "Xiaoliuqiu reef clean-up",
                "description": "Help clear litter from the seabed and learn about marine conservation.",
                "category": "Conservation",
                "start_time": now + timedelta(days=20),
                "end_time": now + timedelta(days=21),
                "location": "Xiaoliuqiu",
                "max_participants": 30,
                "cost": Decimal("2000.00"),
                "qualifications": "None",
                "image_url": "https://example.com/images/conservation.jpg",
                "status": Activity.Status.PENDING_REVIEW,
                "creator": manager2,
            },
            {
                "title": "Northeast coast snorkelling",
                "description": "Relaxed snorkelling trip for all members.",
                "category": "Leisure",
                "start_time": now + timedelta(days=15),
                "end_time": now + timedelta(days=15, hours=6),
                "location": "Northeast coast",
                "max_participants": 25,
                "cost": Decimal("1500.00"),
                "qualifications": "None",
                "status": Activity.Status.DRAFTING,
                "creator": manager2,
            },
            {
                "title": "Orchid Island deep dive expedition",
                "description": "Deep dive expedition around Orchid Island.",
                "category": "Advanced training",
                "start_time": now + timedelta(days=60),
                "end_time": now + timedelta(days=63),
                "location": "Orchid Island",
                "max_participants": 12,
                "cost": Decimal("12000.00"),
                "qualifications": "Advanced Open Water certification",
                "status": Activity.Status.NEEDS_REVISION,
                "rejection_reason": "The description is too short: add lodging and a detailed itinerary.",
                "creator": manager1,
            },
        ]

        for data in activities:
            title = data.pop("title")
            Activity.objects.update_or_create(title=title, defaults=data)

        self.stdout.write(self.style.SUCCESS("Demo data initialized."))
