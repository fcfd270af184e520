# activities/forms.py
"""
Forms for the activities application.

This module defines the input validation applied before the
workflow service is called: the activity form used to create and
update activities, and the audit decision form used by the
administrator.
"""

from django import forms
from django.utils import timezone

from .models import Activity
from .services import AuditAction, AuditDecision


class ActivityForm(forms.ModelForm):
    """
    Form for creating or updating an activity.

    Its ``cleaned_data`` can be passed as is to
    :meth:`ActivityService.create_activity` or
    :meth:`ActivityService.update_activity`.

    Notes
    -----
    The start time must lie in the future when the activity is
    created. On update the rule only applies if the start time is
    changed, so that a published activity which already started can
    still have its description corrected.
    """

    class Meta:
        """
        Meta configuration for the ActivityForm.

        Attributes
        ----------
        model : Model
            The model associated with this form (Activity).
        fields : tuple
            The descriptive fields the creator may set.
        """

        model = Activity
        fields = Activity.UPDATABLE_FIELDS
        widgets = {
            "start_time": forms.DateTimeInput(attrs={"type": "datetime-local"}),
            "end_time": forms.DateTimeInput(attrs={"type": "datetime-local"}),
        }

    def clean_start_time(self):
        start_time = self.cleaned_data["start_time"]
        unchanged = self.instance.pk is not None and start_time == self.instance.start_time
        if not unchanged and start_time <= timezone.now():
            raise forms.ValidationError("Start time must be in the future.")
        return start_time

    def clean(self):
        cleaned = super().clean()
        start_time = cleaned.get("start_time")
        end_time = cleaned.get("end_time")
        if start_time and end_time and end_time <= start_time:
            self.add_error("end_time", "End time must be after start time.")
        return cleaned


class AuditDecisionForm(forms.Form):
    """
    Form for the administrator's decision on a submitted activity.

    Attributes
    ----------
    action : forms.ChoiceField
        APPROVE or REJECT.
    reason : forms.CharField
        Free text, required when rejecting.
    """

    action = forms.ChoiceField(choices=AuditAction.choices)
    reason = forms.CharField(required=False, widget=forms.Textarea)

    def clean(self):
        cleaned = super().clean()
        if cleaned.get("action") == AuditAction.REJECT and not cleaned.get("reason", "").strip():
            self.add_error("reason", "A reason is required when rejecting an activity.")
        return cleaned

    def to_decision(self) -> AuditDecision:
        """Return the validated decision; call after ``is_valid()``."""
        reason = self.cleaned_data.get("reason") or None
        return AuditDecision(self.cleaned_data["action"], reason)
