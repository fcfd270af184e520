# diveclub/urls.py
"""
Root URL configuration for the dive club project.

The activity workflow is driven through the service layer and the
Django admin; only the admin site and the monitoring journal are
routed here.
"""

from django.contrib import admin
from django.urls import path, include

#: Global URL patterns for the project
urlpatterns = [
    # Django admin interface (club administrators and managers)
    path("admin/", admin.site.urls),

    # Monitoring application (HTML application journal)
    path("monitoring/", include("monitoring.urls")),
]
