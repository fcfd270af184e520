# diveclub/asgi.py
"""
ASGI config for the dive club project.

Exposes the ASGI callable as a module-level variable named
``application`` for ASGI servers such as Daphne or Uvicorn.
"""

import os
from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "diveclub.settings")

#: The ASGI application callable used by ASGI servers
application = get_asgi_application()
