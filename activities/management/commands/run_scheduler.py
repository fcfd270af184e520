# activities/management/commands/run_scheduler.py
"""
Management command running the activity scheduler.

Blocks and runs the hourly sweep of ended activities until
interrupted::

    python manage.py run_scheduler
"""

from django.core.management.base import BaseCommand

from activities.scheduler import build_scheduler, run_sweep


class Command(BaseCommand):
    help = "Run the hourly sweep of ended activities until interrupted."

    def add_arguments(self, parser):
        parser.add_argument(
            "--run-now",
            action="store_true",
            help="Run one sweep immediately before waiting for the first tick.",
        )

    def handle(self, *args, **options):
        if options["run_now"]:
            run_sweep()

        scheduler = build_scheduler()
        self.stdout.write(self.style.SUCCESS("Scheduler started, press Ctrl+C to stop."))
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            self.stdout.write("Scheduler stopped.")
