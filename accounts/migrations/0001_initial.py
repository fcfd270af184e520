# accounts/migrations/0001_initial.py
"""
Initial migration for the accounts application.

This migration creates the UserProfile model, which attaches the
club role and the manager/administrator attributes to the
built-in Django user model.
"""

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        # Dependency on the user model to support custom AUTH_USER_MODEL
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("GUEST", "Guest"),
                            ("MEMBER", "Member"),
                            ("MANAGER", "Manager"),
                            ("ADMIN", "Administrator"),
                        ],
                        default="MEMBER",
                        max_length=16,
                    ),
                ),
                ("phone", models.CharField(blank=True, max_length=32)),
                ("position_title", models.CharField(blank=True, max_length=100)),
                ("join_date", models.DateField(blank=True, null=True)),
                ("admin_title", models.CharField(blank=True, max_length=100)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
        ),
    ]
