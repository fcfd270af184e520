# diveclub/wsgi.py
"""
WSGI config for the dive club project.

Exposes the WSGI callable as a module-level variable named
``application`` for Gunicorn, uWSGI or Django's runserver.
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "diveclub.settings")

#: The WSGI application callable used by WSGI servers
application = get_wsgi_application()
