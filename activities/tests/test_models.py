"""
Tests for the Activity lifecycle transitions and predicates.
"""

from datetime import timedelta

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.utils import timezone

from activities.exceptions import IllegalArgumentError, IllegalStateError
from activities.models import Activity

from .utils import make_activity, make_user

Status = Activity.Status


class ActivityTransitionTests(TestCase):
    """
    State machine edges of the Activity model.
    """

    def setUp(self):
        """
        Create the manager owning every activity of the test.
        """
        self.manager = make_user("diver")

    def test_new_activity_is_drafting(self):
        """
        A new activity starts as a draft without rejection reason.
        """
        activity = make_activity(self.manager)
        self.assertEqual(activity.status, Status.DRAFTING)
        self.assertIsNone(activity.rejection_reason)
        self.assertIsNotNone(activity.created_at)

    def test_submit_from_drafting_and_needs_revision(self):
        """
        Drafts and rejected activities can be submitted, which clears
        the rejection reason.
        """
        for status in (Status.DRAFTING, Status.NEEDS_REVISION):
            with self.subTest(status=status):
                activity = make_activity(
                    self.manager, status=status, rejection_reason="fix it"
                )
                activity.submit_for_review()
                self.assertEqual(activity.status, Status.PENDING_REVIEW)
                self.assertIsNone(activity.rejection_reason)

    def test_submit_from_other_states_is_illegal(self):
        """
        Submitting from any other status fails and changes nothing.
        """
        for status in (Status.PENDING_REVIEW, Status.PUBLISHED, Status.ENDED, Status.CANCELLED):
            with self.subTest(status=status):
                activity = make_activity(self.manager, status=status)
                with self.assertRaises(IllegalStateError):
                    activity.submit_for_review()
                self.assertEqual(activity.status, status)

    def test_submit_requires_end_after_start(self):
        """
        An activity whose end does not follow its start cannot be
        submitted.
        """
        start = timezone.now() + timedelta(days=10)
        activity = make_activity(self.manager, start_time=start, end_time=start)
        with self.assertRaises(IllegalArgumentError):
            activity.submit_for_review()
        self.assertEqual(activity.status, Status.DRAFTING)

    def test_drafting_only_allows_submit(self):
        """
        A draft can neither be approved, rejected nor ended.
        """
        activity = make_activity(self.manager)
        with self.assertRaises(IllegalStateError):
            activity.approve()
        with self.assertRaises(IllegalStateError):
            activity.reject("reason")
        self.assertFalse(activity.mark_as_ended(timezone.now() + timedelta(days=365)))
        self.assertEqual(activity.status, Status.DRAFTING)

    def test_approve_pending(self):
        """
        Approving an activity pending review publishes it.
        """
        activity = make_activity(self.manager, status=Status.PENDING_REVIEW)
        activity.approve()
        self.assertEqual(activity.status, Status.PUBLISHED)
        self.assertIsNone(activity.rejection_reason)

    def test_approve_after_start_time_is_illegal(self):
        """
        An activity that already started cannot be approved.
        """
        activity = make_activity(self.manager, status=Status.PENDING_REVIEW)
        late = activity.start_time + timedelta(minutes=1)
        with self.assertRaises(IllegalStateError):
            activity.approve(now=late)
        self.assertEqual(activity.status, Status.PENDING_REVIEW)

    def test_reject_stores_reason(self):
        """
        Rejecting stores the reason without surrounding whitespace.
        """
        activity = make_activity(self.manager, status=Status.PENDING_REVIEW)
        activity.reject("  needs more detail ")
        self.assertEqual(activity.status, Status.NEEDS_REVISION)
        self.assertEqual(activity.rejection_reason, "needs more detail")

    def test_reject_requires_reason(self):
        """
        Missing or blank reasons are refused and leave the activity
        pending.
        """
        activity = make_activity(self.manager, status=Status.PENDING_REVIEW)
        for reason in (None, "", "   "):
            with self.subTest(reason=reason):
                with self.assertRaises(IllegalArgumentError):
                    activity.reject(reason)
                self.assertEqual(activity.status, Status.PENDING_REVIEW)
                self.assertIsNone(activity.rejection_reason)

    def test_reject_outside_review_is_illegal(self):
        """
        Only activities pending review can be rejected.
        """
        activity = make_activity(self.manager, status=Status.PUBLISHED)
        with self.assertRaises(IllegalStateError):
            activity.reject("reason")

    def test_mark_as_ended_only_after_end_time(self):
        """
        A published activity ends once its end time has passed, and
        only once.
        """
        activity = make_activity(self.manager, status=Status.PUBLISHED)
        self.assertFalse(activity.mark_as_ended(activity.end_time - timedelta(minutes=1)))
        self.assertEqual(activity.status, Status.PUBLISHED)
        self.assertTrue(activity.mark_as_ended(activity.end_time + timedelta(minutes=1)))
        self.assertEqual(activity.status, Status.ENDED)
        # Second call is a no-op
        self.assertFalse(activity.mark_as_ended(activity.end_time + timedelta(days=1)))

    def test_cancel_from_any_state_but_ended(self):
        """
        Every status except ENDED can be cancelled.
        """
        for status in (
            Status.DRAFTING,
            Status.PENDING_REVIEW,
            Status.PUBLISHED,
            Status.NEEDS_REVISION,
            Status.CANCELLED,
        ):
            with self.subTest(status=status):
                activity = make_activity(self.manager, status=status)
                activity.cancel()
                self.assertEqual(activity.status, Status.CANCELLED)
                self.assertIsNone(activity.rejection_reason)

        ended = make_activity(self.manager, status=Status.ENDED)
        with self.assertRaises(IllegalStateError):
            ended.cancel()
        self.assertEqual(ended.status, Status.ENDED)


class ActivityPredicateTests(TestCase):
    """
    Predicates and validation of the Activity model.
    """

    def setUp(self):
        """
        Create the manager owning every activity of the test.
        """
        self.manager = make_user("diver")

    def test_major_change_fields(self):
        """
        Title, schedule, location and capacity are major fields;
        unchanged values and other fields are not.
        """
        activity = make_activity(self.manager, status=Status.PUBLISHED)
        self.assertFalse(activity.is_major_change({"qualifications": "OW certified"}))
        self.assertFalse(activity.is_major_change({"title": activity.title}))
        self.assertTrue(activity.is_major_change({"title": "Another title"}))
        self.assertTrue(activity.is_major_change({"max_participants": 5}))
        self.assertTrue(activity.is_major_change({"location": "Green Island"}))
        self.assertTrue(
            activity.is_major_change({"end_time": activity.end_time + timedelta(hours=1)})
        )

    def test_major_change_values(self):
        """
        The snapshot of major fields covers exactly those fields.
        """
        activity = make_activity(self.manager)
        values = activity.major_change_values()
        self.assertEqual(set(values), set(Activity.MAJOR_CHANGE_FIELDS))
        self.assertEqual(values["max_participants"], 20)

    def test_editable_and_expired(self):
        """
        Only editable statuses before the start time can be edited.
        """
        activity = make_activity(self.manager)
        self.assertTrue(activity.can_be_edited())
        self.assertFalse(activity.can_be_edited(activity.start_time + timedelta(seconds=1)))
        activity.status = Status.PUBLISHED
        self.assertFalse(activity.can_be_edited())
        self.assertTrue(activity.is_publicly_visible)

    def test_clean_rejects_inverted_schedule(self):
        """
        Model validation refuses an end time before the start time.
        """
        start = timezone.now() + timedelta(days=3)
        activity = make_activity(
            self.manager, start_time=start, end_time=start - timedelta(hours=1)
        )
        with self.assertRaises(ValidationError):
            activity.full_clean()
