# monitoring/handlers.py
"""
HTML log handler for the monitoring application.

This module provides a :class:`logging.Handler` that appends log
records to an HTML file. The generated journal can be displayed
directly in a browser and is styled with basic CSS, one colour per
severity. It is wired into Django through the ``LOGGING`` setting.
"""

import html
import logging
from datetime import datetime
from pathlib import Path

# HTML header written once when the journal is created
HEADER = """<!doctype html>
<html lang="en"><head><meta charset="utf-8"><title>Journal</title>
<style>
.log-info{ background:#e3f2fd; color:#0d47a1; padding:.5rem; border-left:4px solid #1976d2; margin:.25rem 0; }
.log-warn{ background:#fff8e1; color:#e65100; padding:.5rem; border-left:4px solid #ff9800; margin:.25rem 0; }
.log-error{ background:#ffebee; color:#b71c1c; padding:.5rem; border-left:4px solid #f44336; margin:.25rem 0; }
.code{ font-family:monospace; white-space:pre-wrap; }
</style></head><body>
<h3>Application journal</h3>
"""


def css_class_for(levelno: int) -> str:
    """
    Map a logging level to the CSS class of its journal entry.

    Parameters
    ----------
    levelno : int
        Numeric logging level of the record.

    Returns
    -------
    str
        One of ``log-info``, ``log-warn`` or ``log-error``.
    """
    if levelno >= logging.ERROR:
        return "log-error"
    if levelno >= logging.WARNING:
        return "log-warn"
    return "log-info"


class HtmlLogHandler(logging.Handler):
    """
    Append log records to an HTML journal file.

    The file and its parent directory are created lazily on the
    first emitted record. Messages are HTML-escaped; tracebacks are
    rendered in a monospace block under the message.

    Attributes
    ----------
    filename : Path
        Path of the HTML journal.
    """

    def __init__(self, filename, level=logging.NOTSET):
        super().__init__(level)
        self.filename = Path(filename)

    def _ensure_file(self) -> None:
        if not self.filename.exists():
            self.filename.parent.mkdir(parents=True, exist_ok=True)
            self.filename.write_text(HEADER, encoding="utf-8")

    def format_entry(self, record: logging.LogRecord) -> str:
        """
        Render a record as a single HTML ``div``.

        Parameters
        ----------
        record : logging.LogRecord
            The record to render.

        Returns
        -------
        str
            The HTML entry, without trailing newline.
        """
        ts = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        label = "WARN" if record.levelname == "WARNING" else record.levelname
        body = html.escape(record.getMessage())
        entry = (
            f'<div class="{css_class_for(record.levelno)}">'
            f"<strong>[{label} {ts}]</strong> "
            f'<span class="code">{html.escape(record.name)}</span> {body}'
        )
        if record.exc_info:
            trace = logging.Formatter().formatException(record.exc_info)
            entry += f'<div class="code">{html.escape(trace)}</div>'
        return entry + "</div>"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = self.format_entry(record)
            self.acquire()
            try:
                self._ensure_file()
                with self.filename.open("a", encoding="utf-8") as f:
                    f.write(entry + "\n")
            finally:
                self.release()
        except Exception:
            self.handleError(record)
