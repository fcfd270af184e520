# accounts/admin.py
"""
Admin configuration for the accounts application.

This module customizes the Django admin interface for the
:class:`UserProfile` model.
"""

from django.contrib import admin
from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    """
    Admin configuration for the UserProfile model.

    The role is read-only once the profile exists: it is fixed at
    creation.
    """

    # Fields displayed in the admin list view
    list_display = ("user", "role", "position_title", "admin_title", "phone")

    # Filters available in the right sidebar
    list_filter = ("role",)

    # Fields available in the search bar
    search_fields = ("user__username", "user__email", "user__first_name")

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return ("user", "role")
        return ()
