# monitoring/views.py
"""
Views for the monitoring application.

This module provides an administrative view for inspecting
the HTML application journal directly through the browser.
"""

from pathlib import Path

from django.conf import settings
from django.contrib.admin.views.decorators import staff_member_required
from django.http import HttpResponse

from .handlers import HEADER


def journal_path() -> Path:
    """
    Return the location of the HTML journal.

    Returns
    -------
    Path
        ``LOG_DIR/app.log.html``, with ``LOG_DIR`` defaulting to
        ``BASE_DIR/logs``.
    """
    log_dir = getattr(settings, "LOG_DIR", Path(settings.BASE_DIR) / "logs")
    return Path(log_dir) / "app.log.html"


@staff_member_required
def logs_view(request):
    """
    Display the application journal as HTML content.

    Restricted to staff members only. When no journal has been
    written yet, an empty journal page with a placeholder message
    is returned.

    Parameters
    ----------
    request : HttpRequest
        The current HTTP request.

    Returns
    -------
    HttpResponse
        The journal HTML.
    """
    log_file = journal_path()

    if log_file.exists():
        with log_file.open("r", encoding="utf-8") as f:
            content = f.read()
    else:
        content = HEADER + "<p>No log entries yet.</p>"

    return HttpResponse(content + "</body></html>")
