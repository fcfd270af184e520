# activities/services.py
"""
Activity workflow service.

This module orchestrates the activity lifecycle: creation,
submission, audit, update, cancellation, deletion and the sweep of
published activities whose end time has passed. Each operation
loads the activity, checks ownership, applies a transition from
:class:`activities.models.Activity` and persists the result inside
one transaction. Notifications are sent once the transaction block
is left; their failures are logged and never reach the caller.

The acting user is always passed explicitly.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Mapping, Optional
import logging

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.utils import timezone

from accounts.roles import ensure_creator, ensure_manager, is_admin
from .exceptions import (
    ActivityNotFoundError,
    IllegalArgumentError,
    IllegalStateError,
    NotificationFailure,
    UnauthorizedError,
)
from .models import Activity
from .notifications import ActivityNotifier, get_activity_notifier

logger = logging.getLogger(__name__)


class AuditAction(models.TextChoices):
    """Decision taken by the administrator on a submitted activity."""

    APPROVE = "APPROVE", "Approve"
    REJECT = "REJECT", "Reject"


@dataclass(frozen=True)
class AuditDecision:
    """
    Audit decision on an activity pending review.

    Attributes
    ----------
    action : str
        An :class:`AuditAction` value.
    reason : str, optional
        Required, non-blank, when rejecting.
    """

    action: str
    reason: Optional[str] = None

    @classmethod
    def approve(cls) -> "AuditDecision":
        return cls(AuditAction.APPROVE)

    @classmethod
    def reject(cls, reason: Optional[str]) -> "AuditDecision":
        return cls(AuditAction.REJECT, reason)

    def is_valid(self) -> bool:
        if self.action == AuditAction.REJECT:
            return self.reason is not None and bool(self.reason.strip())
        return self.action == AuditAction.APPROVE


@dataclass
class SweepReport:
    """
    Outcome of a sweep of ended activities.

    Attributes
    ----------
    ended : list of int
        Activities moved to ENDED.
    failed : list of int
        Activities whose transition could not be saved.
    """

    ended: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{len(self.ended)} ended, {len(self.failed)} failed"


@dataclass
class ActivityService:
    """
    Workflow operations on activities.

    Attributes
    ----------
    notifier : ActivityNotifier
        Collaborator announcing submissions and decisions. Defaults
        to the notifier selected by the settings.
    clock : callable
        Returns the current aware datetime; replaced in tests.
    """

    notifier: ActivityNotifier = field(default_factory=get_activity_notifier)
    clock: Callable[[], datetime] = timezone.now

    # ---------- internal helpers ----------

    def _load_for_update(self, activity_id) -> Activity:
        """Load and lock an activity row for the current transaction."""
        try:
            return Activity.objects.select_for_update().get(pk=activity_id)
        except Activity.DoesNotExist:
            raise ActivityNotFoundError(
                f"Activity {activity_id} not found", activity_id=activity_id
            ) from None

    @staticmethod
    def _clean_fields(fields: Mapping) -> dict:
        unknown = sorted(set(fields) - set(Activity.UPDATABLE_FIELDS))
        if unknown:
            raise IllegalArgumentError(
                f"Fields cannot be set: {', '.join(unknown)}"
            )
        data = dict(fields)
        for name in ("qualifications", "image_url"):
            if name in data and data[name] is None:
                data[name] = ""
        return data

    @staticmethod
    def _validate(activity: Activity) -> None:
        try:
            activity.full_clean(exclude=["creator"])
        except ValidationError as exc:
            raise IllegalArgumentError(
                "; ".join(
                    f"{name}: {' '.join(messages)}"
                    for name, messages in exc.message_dict.items()
                ),
                activity_id=activity.pk,
            ) from exc

    def _notify(self, method: str, activity: Activity, *args) -> None:
        """Call a notifier method, logging instead of raising on failure."""
        try:
            getattr(self.notifier, method)(activity, *args)
        except NotificationFailure as exc:
            logger.warning(
                "Notification %s failed for activity %s: %s", method, activity.pk, exc
            )
        except Exception:
            logger.exception("Notification %s crashed for activity %s", method, activity.pk)

    # ---------- lifecycle operations ----------

    def create_activity(self, fields: Mapping, creator) -> Activity:
        """
        Create a draft activity.

        Parameters
        ----------
        fields : Mapping
            Values for the fields listed in
            ``Activity.UPDATABLE_FIELDS``, typically a form's
            ``cleaned_data``.
        creator : User
            The acting manager, owner of the new activity.

        Returns
        -------
        Activity
            The persisted activity, in DRAFTING status.

        Raises
        ------
        UnauthorizedError
            If the creator is not a manager or an administrator.
        IllegalArgumentError
            If a field is unknown or invalid, or the start time
            is not in the future.
        """
        ensure_manager(creator)
        logger.info("Creating activity '%s' by %s", fields.get("title"), creator.email)

        activity = Activity(
            creator=creator,
            status=Activity.Status.DRAFTING,
            **self._clean_fields(fields),
        )
        self._validate(activity)
        if activity.start_time <= self.clock():
            raise IllegalArgumentError("Start time must be in the future.")
        activity.save()

        logger.info("Activity created with id %s", activity.pk)
        return activity

    def submit_for_review(self, activity_id, actor) -> Activity:
        """
        Submit a draft or rejected activity for review.

        Notifies the creator and the administrator channel.

        Raises
        ------
        ActivityNotFoundError
            If the activity does not exist.
        UnauthorizedError
            If the actor did not create the activity.
        IllegalStateError
            If the activity is neither drafting nor needing revision.
        IllegalArgumentError
            If the end time does not follow the start time.
        """
        logger.info("Submitting activity %s for review", activity_id)
        with transaction.atomic():
            activity = self._load_for_update(activity_id)
            ensure_creator(actor, activity)
            activity.submit_for_review()
            activity.save()

        self._notify("notify_submitted", activity)
        self._notify("notify_admin_new_submission", activity)
        logger.info("Activity %s submitted for review", activity_id)
        return activity

    def audit_activity(self, activity_id, decision: AuditDecision, actor=None) -> Activity:
        """
        Approve or reject an activity pending review.

        Parameters
        ----------
        activity_id : int
            The activity to audit.
        decision : AuditDecision
            APPROVE, or REJECT with a non-blank reason.
        actor : User, optional
            When given, must be an administrator. Callers that
            already restrict access to administrators may omit it.

        Raises
        ------
        ActivityNotFoundError
            If the activity does not exist.
        UnauthorizedError
            If an actor is given and is not an administrator.
        IllegalArgumentError
            If the action is unknown or a rejection has no reason,
            checked before any change.
        IllegalStateError
            If the activity is not pending review, or its start time
            has passed when approving.
        """
        logger.info("Auditing activity %s with decision %s", activity_id, decision.action)
        if actor is not None and not is_admin(actor):
            raise UnauthorizedError(
                "Only administrators may audit activities.", activity_id=activity_id
            )

        with transaction.atomic():
            activity = self._load_for_update(activity_id)
            if decision.action not in AuditAction.values:
                raise IllegalArgumentError(
                    f"Unknown audit action: {decision.action!r}.",
                    activity_id=activity_id,
                )
            if not decision.is_valid():
                raise IllegalArgumentError(
                    "A reason is required when rejecting an activity.",
                    activity_id=activity_id,
                )
            if decision.action == AuditAction.APPROVE:
                activity.approve(now=self.clock())
            else:
                activity.reject(decision.reason)
            activity.save()

        if decision.action == AuditAction.APPROVE:
            self._notify("notify_approved", activity)
            logger.info("Activity %s approved", activity_id)
        else:
            self._notify("notify_rejected", activity, activity.rejection_reason)
            logger.info("Activity %s rejected with reason: %s", activity_id, activity.rejection_reason)
        return activity

    def update_activity(self, activity_id, fields: Mapping, actor) -> Activity:
        """
        Overwrite the descriptive fields of an activity.

        Drafting and rejected activities whose start time has not
        passed may be edited freely. Published activities may be
        edited too, but a major change (title, times, location or
        capacity) sends them back to PENDING_REVIEW and asks the
        administrator channel for a new review.

        Raises
        ------
        ActivityNotFoundError
            If the activity does not exist.
        UnauthorizedError
            If the actor did not create the activity.
        IllegalStateError
            If the activity is pending review, ended, cancelled, or
            an editable activity whose start time has passed.
        IllegalArgumentError
            If a field is unknown or invalid.
        """
        logger.info("Updating activity %s by %s", activity_id, getattr(actor, "email", actor))
        data = self._clean_fields(fields)

        with transaction.atomic():
            activity = self._load_for_update(activity_id)
            ensure_creator(actor, activity)

            published = activity.status == Activity.Status.PUBLISHED
            if not activity.can_be_edited(self.clock()) and not published:
                raise IllegalStateError(
                    "This activity cannot be edited in its current status.",
                    activity_id=activity_id,
                )

            before = activity.major_change_values()
            for name, value in data.items():
                setattr(activity, name, value)
            # Compare once validation has converted the raw values
            self._validate(activity)
            major_change = published and activity.major_change_values() != before

            if major_change:
                activity.demote_for_review()
                logger.info(
                    "Activity %s major change detected, back to PENDING_REVIEW", activity_id
                )
            activity.save()

        if major_change:
            self._notify("notify_admin_new_submission", activity)
        logger.info("Activity %s updated", activity_id)
        return activity

    def delete_activity(self, activity_id, actor) -> None:
        """
        Permanently remove an activity that was never published.

        Raises
        ------
        ActivityNotFoundError
            If the activity does not exist.
        UnauthorizedError
            If the actor did not create the activity.
        IllegalStateError
            If the activity is published or ended; cancel it instead.
        """
        logger.info("Deleting activity %s by %s", activity_id, getattr(actor, "email", actor))
        with transaction.atomic():
            activity = self._load_for_update(activity_id)
            ensure_creator(actor, activity)
            if activity.status in (Activity.Status.PUBLISHED, Activity.Status.ENDED):
                raise IllegalStateError(
                    "Published or ended activities cannot be deleted; cancel them instead.",
                    activity_id=activity_id,
                )
            activity.delete()
        logger.info("Activity %s deleted", activity_id)

    def cancel_activity(self, activity_id, actor) -> Activity:
        """
        Cancel an activity.

        Raises
        ------
        ActivityNotFoundError
            If the activity does not exist.
        UnauthorizedError
            If the actor did not create the activity.
        IllegalStateError
            If the activity has already ended.
        """
        logger.info("Cancelling activity %s by %s", activity_id, getattr(actor, "email", actor))
        with transaction.atomic():
            activity = self._load_for_update(activity_id)
            ensure_creator(actor, activity)
            activity.cancel()
            activity.save()
        logger.info("Activity %s cancelled", activity_id)
        return activity

    def mark_ended_activities(self, now: Optional[datetime] = None) -> SweepReport:
        """
        End every published activity whose end time has passed.

        Each activity is locked, transitioned and saved in its own
        transaction; a failure is logged and recorded in the report
        and the sweep moves on. Running the sweep again is a no-op
        for activities already ended.

        Parameters
        ----------
        now : datetime, optional
            Reference instant, the service clock by default.

        Returns
        -------
        SweepReport
            Identifiers of ended and failed activities.
        """
        now = now or self.clock()
        report = SweepReport()
        due = list(
            Activity.objects.published_past_end_time(now).values_list("pk", flat=True)
        )

        for pk in due:
            try:
                with transaction.atomic():
                    activity = Activity.objects.select_for_update().get(pk=pk)
                    if activity.mark_as_ended(now):
                        activity.save(update_fields=["status", "updated_at"])
                        report.ended.append(pk)
                        logger.info("Activity %s marked as ENDED", pk)
            except Activity.DoesNotExist:
                logger.info("Activity %s disappeared before the sweep reached it", pk)
            except Exception:
                report.failed.append(pk)
                logger.exception("Failed to mark activity %s as ENDED", pk)

        if due:
            logger.info("Sweep of ended activities: %s", report)
        return report

    # ---------- queries ----------

    def get_activity(self, activity_id) -> Activity:
        """
        Return an activity by identifier.

        Raises
        ------
        ActivityNotFoundError
            If the activity does not exist.
        """
        try:
            return Activity.objects.select_related("creator").get(pk=activity_id)
        except Activity.DoesNotExist:
            raise ActivityNotFoundError(
                f"Activity {activity_id} not found", activity_id=activity_id
            ) from None

    def published_activities(self):
        return Activity.objects.published().select_related("creator")

    def pending_review_activities(self):
        return Activity.objects.pending_review().select_related("creator")

    def activities_by_creator(self, user, status=None):
        return Activity.objects.created_by(user, status=status)

    def activities_by_status(self, status):
        return Activity.objects.with_status(status)

    def published_activities_in_category(self, category):
        return Activity.objects.in_category(category, Activity.Status.PUBLISHED)

    def search_published_activities(self, keyword):
        return Activity.objects.search_published(keyword).select_related("creator")
