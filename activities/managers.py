# activities/managers.py
"""
Query helpers for the Activity model.

The Django ORM is the activity store: saving, loading by primary
key and deleting are plain model operations, while the queries the
workflow needs are collected on :class:`ActivityQuerySet`, exposed
as ``Activity.objects``.
"""

from django.db import models
from django.db.models import Count, Q


class ActivityQuerySet(models.QuerySet):
    """
    QuerySet with the activity lookups used by the workflow.

    Status values are taken from ``self.model.Status`` so that the
    queryset does not import the model module.
    """

    def with_status(self, status):
        return self.filter(status=status)

    def with_statuses(self, statuses):
        return self.filter(status__in=list(statuses))

    def published(self):
        """
        Return published activities, latest start first.

        Returns
        -------
        QuerySet
            Activities with status PUBLISHED ordered by descending
            start time.
        """
        return self.filter(status=self.model.Status.PUBLISHED).order_by(
            "-start_time", "-pk"
        )

    def pending_review(self):
        """
        Return activities awaiting review, oldest first.

        Returns
        -------
        QuerySet
            Activities with status PENDING_REVIEW ordered by
            ascending creation time.
        """
        return self.filter(status=self.model.Status.PENDING_REVIEW).order_by(
            "created_at", "pk"
        )

    def publicly_visible(self):
        """Return activities the public may browse (published or ended)."""
        return self.filter(
            status__in=[self.model.Status.PUBLISHED, self.model.Status.ENDED]
        )

    def created_by(self, user, status=None):
        """
        Return activities created by a user.

        Parameters
        ----------
        user : User
            The creator.
        status : str, optional
            Restrict the result to this status.
        """
        qs = self.filter(creator=user)
        if status is not None:
            qs = qs.filter(status=status)
        return qs

    def in_category(self, category, status=None):
        """
        Return activities of a category with the given status.

        Parameters
        ----------
        category : str
            Exact category name.
        status : str, optional
            Status filter, PUBLISHED by default.
        """
        if status is None:
            status = self.model.Status.PUBLISHED
        return self.filter(category=category, status=status)

    def search_published(self, keyword):
        """
        Search published activities by keyword.

        Parameters
        ----------
        keyword : str
            Case-insensitive substring looked up in the title and the
            description. A blank keyword matches every published
            activity.

        Returns
        -------
        QuerySet
            Matching published activities, latest start first.
        """
        keyword = (keyword or "").strip()
        return self.published().filter(
            Q(title__icontains=keyword) | Q(description__icontains=keyword)
        )

    def published_past_end_time(self, now):
        """
        Return published activities whose end time is before ``now``.

        Parameters
        ----------
        now : datetime
            Reference instant (timezone-aware).
        """
        return self.filter(
            status=self.model.Status.PUBLISHED, end_time__lt=now
        ).order_by("end_time", "pk")

    def count_by_status(self):
        """
        Count activities per status.

        Returns
        -------
        dict
            Mapping of every status value to its count, zero
            included.
        """
        counts = {status: 0 for status in self.model.Status.values}
        rows = self.order_by().values("status").annotate(total=Count("pk"))
        for row in rows:
            counts[row["status"]] = row["total"]
        return counts
