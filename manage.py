#!/usr/bin/env python
"""
Management utility for the dive club project.

This script provides the command-line entry point for common
Django operations such as applying migrations, running the
activity scheduler or loading demo data.

Usage
-----
Run the following command for help:

    python manage.py help
"""

import os
import sys


def main():
    """
    Run administrative tasks for the Django project.

    Configures the default settings module, the test settings
    for ``manage.py test``, and delegates command execution to
    Django's management utility.
    """
    default_settings = "diveclub.settings_test" if sys.argv[1:2] == ["test"] else "diveclub.settings"
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", default_settings)
    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
