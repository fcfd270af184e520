# activities/exceptions.py
"""
Custom exceptions for the activities application.

This module defines the error kinds raised by the activity
lifecycle and workflow. The first four are surfaced to callers
unchanged; the boundary layer maps them to its own representation.
Notification failures are internal and never reach the caller.
"""


class ActivityError(Exception):
    """
    Base class for activity-related errors.

    Attributes
    ----------
    activity_id : int or None
        Identifier of the activity involved, kept for log context.
    """

    def __init__(self, message: str = "", *, activity_id=None):
        super().__init__(message)
        self.activity_id = activity_id


class ActivityNotFoundError(ActivityError):
    """
    Raised when the requested activity does not exist.
    """


class UnauthorizedError(ActivityError):
    """
    Raised when the acting user may not perform the operation.

    Typically the user is not the creator of the activity, or
    lacks the manager role.
    """


class IllegalStateError(ActivityError):
    """
    Raised when a transition is not valid from the current status.

    Examples are submitting a published activity, approving an
    activity that is not pending review, deleting a published
    activity or cancelling an ended one.
    """


class IllegalArgumentError(ActivityError, ValueError):
    """
    Raised when input is structurally invalid for the operation.

    Examples are a rejection without reason or an end time that is
    not after the start time at submission.
    """


class NotificationFailure(ActivityError):
    """
    Raised by a notifier when a message cannot be delivered.

    Always caught and logged by the workflow service.
    """
