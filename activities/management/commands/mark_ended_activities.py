# activities/management/commands/mark_ended_activities.py
"""
Management command running one sweep of ended activities.

Suitable for a system cron entry when the long-running scheduler
is not used::

    python manage.py mark_ended_activities
"""

from django.core.management.base import BaseCommand

from activities.services import ActivityService


class Command(BaseCommand):
    help = "Mark published activities whose end time has passed as ENDED."

    def handle(self, *args, **options):
        report = ActivityService().mark_ended_activities()
        for pk in report.failed:
            self.stderr.write(self.style.ERROR(f"Activity {pk} could not be ended."))
        self.stdout.write(self.style.SUCCESS(f"Sweep done: {report}."))
