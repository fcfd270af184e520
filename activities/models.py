# activities/models.py
"""
Database models for the activities application.

This module defines the Activity model and its lifecycle. An
activity is drafted by a manager, submitted for review, approved
or sent back for revision by the administrator, and ends either
automatically once its end time has passed or by cancellation.

Transition methods only mutate the instance; persisting it is the
caller's job (see :mod:`activities.services`).
"""

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import (
    MaxValueValidator,
    MinLengthValidator,
    MinValueValidator,
)
from django.db import models
from django.utils import timezone

from .exceptions import IllegalArgumentError, IllegalStateError
from .managers import ActivityQuerySet


class Activity(models.Model):
    """
    Model representing a club activity.

    Attributes
    ----------
    title : CharField
        The title of the activity, 3 to 200 characters.
    description : TextField
        Free text description.
    category : CharField
        Free text category (e.g. "Training", "Conservation").
    start_time : DateTimeField
        Start of the activity.
    end_time : DateTimeField
        End of the activity, after ``start_time`` once submitted.
    location : CharField
        Where the activity takes place, at most 300 characters.
    max_participants : PositiveIntegerField
        Capacity, between 1 and 1000.
    cost : DecimalField
        Participation fee, non-negative.
    qualifications : TextField
        Optional participation requirements.
    image_url : URLField
        Optional illustration.
    status : CharField
        Lifecycle status. Choices defined in the Status inner class.
    rejection_reason : TextField
        Reason given by the administrator; set only while the status
        is NEEDS_REVISION.
    creator : ForeignKey
        The manager who created the activity. Never changes.
    created_at : DateTimeField
        Creation timestamp.
    updated_at : DateTimeField
        Refreshed on every save.
    """

    class Status(models.TextChoices):
        """
        Enumeration of activity statuses.

        DRAFTING
            Initial editable state, not publicly visible.
        PENDING_REVIEW
            Submitted, awaiting the administrator's decision.
        PUBLISHED
            Approved and publicly visible.
        NEEDS_REVISION
            Rejected with a reason, editable again.
        ENDED
            Terminal, reached automatically once the end time passes.
        CANCELLED
            Terminal, manual withdrawal.
        """

        DRAFTING = "DRAFTING", "Drafting"
        PENDING_REVIEW = "PENDING_REVIEW", "Pending review"
        PUBLISHED = "PUBLISHED", "Published"
        NEEDS_REVISION = "NEEDS_REVISION", "Needs revision"
        ENDED = "ENDED", "Ended"
        CANCELLED = "CANCELLED", "Cancelled"

    EDITABLE_STATUSES = (Status.DRAFTING, Status.NEEDS_REVISION)
    PUBLIC_STATUSES = (Status.PUBLISHED, Status.ENDED)

    # Fields the creator may overwrite through an update
    UPDATABLE_FIELDS = (
        "title",
        "description",
        "category",
        "start_time",
        "end_time",
        "location",
        "max_participants",
        "cost",
        "qualifications",
        "image_url",
    )

    # Changing any of these on a published activity forces a new review
    MAJOR_CHANGE_FIELDS = (
        "title",
        "start_time",
        "end_time",
        "location",
        "max_participants",
    )

    title = models.CharField(max_length=200, validators=[MinLengthValidator(3)])
    description = models.TextField()
    category = models.CharField(max_length=100)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    location = models.CharField(max_length=300)
    max_participants = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(1000)]
    )
    cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    qualifications = models.TextField(blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    status = models.CharField(
        max_length=32,
        choices=Status.choices,
        default=Status.DRAFTING,
    )
    rejection_reason = models.TextField(null=True, blank=True)
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="created_activities",
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ActivityQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-pk"]
        verbose_name_plural = "activities"
        indexes = [
            models.Index(fields=["status", "start_time"], name="activity_status_start_idx"),
            models.Index(fields=["status", "end_time"], name="activity_status_end_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.get_status_display()})"

    # ---------- predicates ----------

    @property
    def is_editable_status(self) -> bool:
        return self.status in self.EDITABLE_STATUSES

    @property
    def is_publicly_visible(self) -> bool:
        return self.status in self.PUBLIC_STATUSES

    def has_valid_schedule(self) -> bool:
        """Return True if both times are set and the end follows the start."""
        if self.start_time is None or self.end_time is None:
            return False
        return self.end_time > self.start_time

    def is_expired(self, now=None) -> bool:
        """Return True once the start time has passed."""
        now = now or timezone.now()
        return now > self.start_time

    def has_ended(self, now=None) -> bool:
        """Return True once the end time has passed."""
        now = now or timezone.now()
        return now > self.end_time

    def can_be_edited(self, now=None) -> bool:
        return self.is_editable_status and not self.is_expired(now)

    def can_be_approved(self, now=None) -> bool:
        return self.status == self.Status.PENDING_REVIEW and not self.is_expired(now)

    def is_major_change(self, fields) -> bool:
        """
        Tell whether an update touches a field that requires review.

        Parameters
        ----------
        fields : Mapping
            New field values. Fields absent from the mapping are
            considered unchanged.

        Returns
        -------
        bool
            True if title, start or end time, location or capacity
            differ from the stored values.
        """
        return any(
            name in fields and fields[name] != getattr(self, name)
            for name in self.MAJOR_CHANGE_FIELDS
        )

    def major_change_values(self) -> dict:
        """Return the current values of the fields that require review."""
        return {name: getattr(self, name) for name in self.MAJOR_CHANGE_FIELDS}

    # ---------- transitions ----------

    def submit_for_review(self) -> None:
        """
        Move a draft or a rejected activity to PENDING_REVIEW.

        Raises
        ------
        IllegalStateError
            If the status is neither DRAFTING nor NEEDS_REVISION.
        IllegalArgumentError
            If the end time is not after the start time.
        """
        if not self.is_editable_status:
            raise IllegalStateError(
                "Only drafting or rejected activities can be submitted for review.",
                activity_id=self.pk,
            )
        if not self.has_valid_schedule():
            raise IllegalArgumentError(
                "End time must be after start time.", activity_id=self.pk
            )
        self.status = self.Status.PENDING_REVIEW
        self.rejection_reason = None

    def approve(self, now=None) -> None:
        """
        Publish an activity pending review.

        Raises
        ------
        IllegalStateError
            If the activity is not pending review or its start time
            has already passed.
        """
        if not self.can_be_approved(now):
            raise IllegalStateError(
                "This activity cannot be approved.", activity_id=self.pk
            )
        self.status = self.Status.PUBLISHED
        self.rejection_reason = None

    def reject(self, reason) -> None:
        """
        Send an activity pending review back for revision.

        Parameters
        ----------
        reason : str
            Explanation for the creator; must not be blank.

        Raises
        ------
        IllegalStateError
            If the activity is not pending review.
        IllegalArgumentError
            If the reason is blank.
        """
        if self.status != self.Status.PENDING_REVIEW:
            raise IllegalStateError(
                "Only activities pending review can be rejected.",
                activity_id=self.pk,
            )
        if reason is None or not reason.strip():
            raise IllegalArgumentError(
                "A rejection reason is required.", activity_id=self.pk
            )
        self.status = self.Status.NEEDS_REVISION
        self.rejection_reason = reason.strip()

    def mark_as_ended(self, now=None) -> bool:
        """
        End a published activity whose end time has passed.

        Returns
        -------
        bool
            True if the status changed, False if the activity was not
            published or has not ended yet.
        """
        if self.status == self.Status.PUBLISHED and self.has_ended(now):
            self.status = self.Status.ENDED
            return True
        return False

    def cancel(self) -> None:
        """
        Withdraw the activity.

        Raises
        ------
        IllegalStateError
            If the activity has already ended.
        """
        if self.status == self.Status.ENDED:
            raise IllegalStateError(
                "Ended activities cannot be cancelled.", activity_id=self.pk
            )
        self.status = self.Status.CANCELLED
        self.rejection_reason = None

    def demote_for_review(self) -> None:
        """Return a published activity to PENDING_REVIEW after a major edit."""
        self.status = self.Status.PENDING_REVIEW
        self.rejection_reason = None

    # ---------- validation ----------

    def clean(self):
        super().clean()
        if (
            self.start_time is not None
            and self.end_time is not None
            and self.end_time <= self.start_time
        ):
            raise ValidationError({"end_time": "End time must be after start time."})
