# activities/admin.py
"""
Admin configuration for the activities application.

This module defines the Django admin customization for the
:class:`Activity` model. Status and rejection reason are read-only:
the lifecycle is only driven through the workflow service.
"""

from django.contrib import admin
from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Activity model.

    Provides list display, filters, and search options for
    Activity records in the Django admin interface.
    """
    # Fields displayed in the admin list view
    list_display = (
        "title",
        "category",
        "status",
        "start_time",
        "end_time",
        "max_participants",
        "creator",
    )
    # Filters available in the right sidebar
    list_filter = ("status", "category")
    # Fields available for the admin search bar
    search_fields = ("title", "description", "location")
    # Lifecycle fields are never edited by hand
    readonly_fields = ("status", "rejection_reason", "creator", "created_at", "updated_at")
    date_hierarchy = "start_time"

    def has_add_permission(self, request):
        # Activities are created through the workflow so that a creator is set
        return False
