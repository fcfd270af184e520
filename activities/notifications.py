# activities/notifications.py
"""
Notification senders for the activity workflow.

This module defines the interface used by the workflow service to
announce submissions and audit decisions, and its implementations:

- EmailActivityNotifier: plain text emails through Django's mail API.
- WebhookActivityNotifier: JSON events posted to a chat or ticketing
  webhook.
- NullActivityNotifier: discards every notification.

Notifiers raise :class:`NotificationFailure` when delivery fails;
the workflow service catches and logs it, so a failed message never
fails the operation that triggered it. A factory function
``get_activity_notifier`` selects the implementation from Django
settings.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol
import logging
import smtplib

import requests
from requests.exceptions import RequestException
from django.conf import settings
from django.core.mail import BadHeaderError, send_mail
from django.utils import timezone

from accounts.roles import display_name
from .exceptions import NotificationFailure
from .models import Activity

logger = logging.getLogger(__name__)


class ActivityNotifier(Protocol):
    """
    Protocol for activity notifiers.

    Every method is called after the triggering change has been
    persisted.
    """

    def notify_submitted(self, activity: Activity) -> None:
        """Tell the creator that the activity was submitted for review."""
        ...

    def notify_approved(self, activity: Activity) -> None:
        """Tell the creator that the activity was published."""
        ...

    def notify_rejected(self, activity: Activity, reason: str) -> None:
        """Tell the creator why the activity was sent back."""
        ...

    def notify_admin_new_submission(self, activity: Activity) -> None:
        """Tell the administrator channel that a review is waiting."""
        ...


def _fmt(value) -> str:
    """Format a datetime in the project time zone."""
    if value is None:
        return "-"
    return timezone.localtime(value).strftime("%Y-%m-%d %H:%M")


# ---------------------------------------------------------------------------
# Email notifications
# ---------------------------------------------------------------------------
@dataclass
class EmailActivityNotifier:
    """
    Email notifier.

    Attributes
    ----------
    club_name : str, optional
        Name used in subjects and signatures. Defaults to
        ``settings.CLUB_NAME``.
    admin_email : str, optional
        Sender address and administrator mailbox. Defaults to
        ``settings.ACTIVITY_ADMIN_EMAIL``.
    """

    club_name: Optional[str] = None
    admin_email: Optional[str] = None

    def __post_init__(self):
        self.club_name = self.club_name or getattr(
            settings, "CLUB_NAME", "Diving Club Management System"
        )
        self.admin_email = self.admin_email or getattr(
            settings, "ACTIVITY_ADMIN_EMAIL", "admin@diveclub.com"
        )

    def _send(self, activity: Activity, subject: str, body: str, recipient: str) -> None:
        """
        Send one message.

        Raises
        ------
        NotificationFailure
            If the mail backend rejects the message.
        """
        try:
            send_mail(
                f"[{self.club_name}] {subject}",
                body,
                self.admin_email,
                [recipient],
            )
        except (smtplib.SMTPException, BadHeaderError, OSError) as exc:
            raise NotificationFailure(
                f"Failed to email {recipient}", activity_id=activity.pk
            ) from exc
        logger.info("Notification '%s' sent to %s for activity %s", subject, recipient, activity.pk)

    def notify_submitted(self, activity: Activity) -> None:
        creator = activity.creator
        body = (
            f"Dear {display_name(creator)},\n\n"
            "Your activity has been submitted for review.\n\n"
            f"Activity: {activity.title}\n"
            f"Created on: {_fmt(activity.created_at)}\n\n"
            "An administrator will review it shortly; the decision will be sent to you by email.\n\n"
            f"{self.club_name} team"
        )
        self._send(activity, f"Activity submitted for review - {activity.title}", body, creator.email)

    def notify_approved(self, activity: Activity) -> None:
        creator = activity.creator
        body = (
            f"Dear {display_name(creator)},\n\n"
            "Your activity has been approved!\n\n"
            f"Activity: {activity.title}\n"
            f"When: {_fmt(activity.start_time)} to {_fmt(activity.end_time)}\n"
            f"Where: {activity.location}\n\n"
            "The activity is now published and members can browse and join it.\n\n"
            f"{self.club_name} team"
        )
        self._send(activity, f"Activity approved - {activity.title}", body, creator.email)

    def notify_rejected(self, activity: Activity, reason: str) -> None:
        creator = activity.creator
        body = (
            f"Dear {display_name(creator)},\n\n"
            "Your activity needs changes before it can be published.\n\n"
            f"Activity: {activity.title}\n"
            f"Reason: {reason}\n\n"
            "Please revise the activity accordingly and submit it again.\n\n"
            f"{self.club_name} team"
        )
        self._send(activity, f"Activity needs revision - {activity.title}", body, creator.email)

    def notify_admin_new_submission(self, activity: Activity) -> None:
        creator = activity.creator
        body = (
            "Hello,\n\n"
            "A new activity is waiting for review:\n\n"
            f"Activity: {activity.title}\n"
            f"Created by: {display_name(creator)} ({creator.email})\n"
            f"When: {_fmt(activity.start_time)} to {_fmt(activity.end_time)}\n"
            f"Where: {activity.location}\n\n"
            "Please sign in to review it.\n\n"
            f"{self.club_name}"
        )
        self._send(activity, f"New activity pending review - {activity.title}", body, self.admin_email)


# ---------------------------------------------------------------------------
# Webhook notifications
# ---------------------------------------------------------------------------
@dataclass
class WebhookActivityNotifier:
    """
    Webhook notifier.

    Posts one JSON event per notification. Features include
    token-based authentication and a configurable timeout.

    Attributes
    ----------
    url : str, optional
        Endpoint receiving the events. Defaults to
        ``settings.ACTIVITY_WEBHOOK_URL``.
    api_token : str, optional
        Bearer token. Defaults to ``settings.ACTIVITY_WEBHOOK_TOKEN``.
    timeout_sec : int
        The timeout for HTTP requests, in seconds.
    """

    url: Optional[str] = None
    api_token: Optional[str] = None
    timeout_sec: int = 5

    # ---------- internal helpers ----------

    def _require_url(self, activity: Activity) -> str:
        url = self.url or getattr(settings, "ACTIVITY_WEBHOOK_URL", None)
        if not url:
            raise NotificationFailure(
                "ACTIVITY_WEBHOOK_URL is not configured", activity_id=activity.pk
            )
        return url

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        token = self.api_token or getattr(settings, "ACTIVITY_WEBHOOK_TOKEN", None)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _payload(self, event: str, activity: Activity, **extra) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "event": event,
            "activity": {
                "id": activity.pk,
                "title": activity.title,
                "status": activity.status,
                "category": activity.category,
                "location": activity.location,
                "start_time": activity.start_time.isoformat(),
                "end_time": activity.end_time.isoformat(),
                "creator": {
                    "name": display_name(activity.creator),
                    "email": activity.creator.email,
                },
            },
            "sent_at": timezone.now().isoformat(),
        }
        payload.update(extra)
        return payload

    def _post(self, event: str, activity: Activity, **extra) -> None:
        url = self._require_url(activity)
        try:
            resp = requests.post(
                url,
                json=self._payload(event, activity, **extra),
                headers=self._headers(),
                timeout=self.timeout_sec,
            )
            resp.raise_for_status()
        except RequestException as exc:
            raise NotificationFailure(
                f"Webhook event {event} failed", activity_id=activity.pk
            ) from exc
        logger.info("Webhook event %s delivered for activity %s", event, activity.pk)

    # ---------- public API ----------

    def notify_submitted(self, activity: Activity) -> None:
        self._post("activity.submitted", activity)

    def notify_approved(self, activity: Activity) -> None:
        self._post("activity.approved", activity)

    def notify_rejected(self, activity: Activity, reason: str) -> None:
        self._post("activity.rejected", activity, reason=reason)

    def notify_admin_new_submission(self, activity: Activity) -> None:
        self._post("activity.review_requested", activity)


@dataclass
class NullActivityNotifier:
    """Notifier that discards every notification."""

    def notify_submitted(self, activity: Activity) -> None:
        pass

    def notify_approved(self, activity: Activity) -> None:
        pass

    def notify_rejected(self, activity: Activity, reason: str) -> None:
        pass

    def notify_admin_new_submission(self, activity: Activity) -> None:
        pass


def get_activity_notifier() -> ActivityNotifier:
    """
    Factory function to select the activity notifier.

    Returns
    -------
    ActivityNotifier
        The notifier configured by ``ACTIVITY_NOTIFICATION_BACKEND``:
        ``webhook``, ``none``, or email by default.
    """
    backend = getattr(settings, "ACTIVITY_NOTIFICATION_BACKEND", "email")
    if backend == "webhook":
        return WebhookActivityNotifier(
            url=getattr(settings, "ACTIVITY_WEBHOOK_URL", None),
            api_token=getattr(settings, "ACTIVITY_WEBHOOK_TOKEN", None),
        )
    if backend == "none":
        return NullActivityNotifier()
    return EmailActivityNotifier()
